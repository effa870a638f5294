"""Reference geometry and in-memory fakes shared across test modules."""

from __future__ import annotations

from roof_area.core.exceptions import SourceUnavailableError
from roof_area.models.footprint import Candidate
from roof_area.models.geometry import Coordinate, Ring
from roof_area.models.source import SourceConfig
from roof_area.sources.base import FootprintSource

# ---------------------------------------------------------------------------
# Reference geometry
# ---------------------------------------------------------------------------

# Palo Alto query point used throughout the client examples.
QUERY_POINT = Coordinate(latitude=37.4419, longitude=-122.1430)

# ~44 m x 44 m block south-east of the query point.
REFERENCE_SQUARE: Ring = (
    (-122.1430, 37.4419),
    (-122.1425, 37.4419),
    (-122.1425, 37.4415),
    (-122.1430, 37.4415),
    (-122.1430, 37.4419),
)


def square_ring(
    center: Coordinate,
    side_deg: float,
    *,
    closed: bool = True,
) -> Ring:
    """Return an axis-aligned square ring of *side_deg* centred on *center*."""
    half = side_deg / 2
    lon, lat = center.longitude, center.latitude
    ring = (
        (lon - half, lat - half),
        (lon + half, lat - half),
        (lon + half, lat + half),
        (lon - half, lat + half),
    )
    return (*ring, ring[0]) if closed else ring


def osm_candidate(ring: Ring, osm_id: int = 1) -> Candidate:
    """Return a Candidate shaped like one produced by the Overpass source."""
    return Candidate(
        ring=ring,
        source_tag="OpenStreetMap",
        source_metadata={"osm_id": osm_id, "osm_type": "way", "building": "yes"},
    )


# ---------------------------------------------------------------------------
# In-memory source
# ---------------------------------------------------------------------------


class StaticSource(FootprintSource):
    """Footprint source returning canned candidates (or failing).

    ``failures`` is the number of calls that raise
    ``SourceUnavailableError`` before the canned candidates are returned;
    ``-1`` fails forever.
    """

    def __init__(
        self,
        name: str,
        candidates: list[Candidate] | None = None,
        *,
        failures: int = 0,
    ) -> None:
        super().__init__(SourceConfig(name=name))
        self._candidates = list(candidates or [])
        self._failures = failures
        self.calls: list[tuple[Coordinate, float]] = []

    def query(self, point: Coordinate, buffer_deg: float) -> list[Candidate]:
        self.calls.append((point, buffer_deg))
        if self._failures < 0 or len(self.calls) <= self._failures:
            raise SourceUnavailableError(self.display_name, "simulated outage")
        return list(self._candidates)
