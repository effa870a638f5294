"""Geometry value types: Coordinate, BoundingBox, Ring and Polygon.

All coordinates are WGS 84 (EPSG:4326). Rings are stored in GeoJSON
order, ``(lon, lat)``, while ``Coordinate`` names its fields explicitly
so callers never have to remember the axis order of a single point.

Design notes:
- All models are frozen dataclasses; rings are tuples so a Polygon can
  never be mutated after construction.
- Range checks happen in ``__post_init__`` so that an out-of-range
  Coordinate can never exist.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from roof_area.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from roof_area.core.exceptions import InvalidInputError

Ring: TypeAlias = tuple[tuple[float, float], ...]
"""Ordered ``(lon, lat)`` vertices of one polygon boundary loop."""


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS 84 point.

    Raises:
        InvalidInputError: If latitude is outside [-90, 90], longitude is
            outside [-180, 180], or either value is not finite.
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        _check_axis("latitude", self.latitude, MIN_LATITUDE, MAX_LATITUDE)
        _check_axis("longitude", self.longitude, MIN_LONGITUDE, MAX_LONGITUDE)

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned box in degrees.

    Attributes:
        south: Minimum latitude.
        west: Minimum longitude.
        north: Maximum latitude.
        east: Maximum longitude.
    """

    south: float
    west: float
    north: float
    east: float

    @classmethod
    def around(cls, point: Coordinate, buffer_deg: float) -> BoundingBox:
        """Return the box extending *buffer_deg* on each side of *point*."""
        return cls(
            south=point.latitude - buffer_deg,
            west=point.longitude - buffer_deg,
            north=point.latitude + buffer_deg,
            east=point.longitude + buffer_deg,
        )

    @classmethod
    def of_ring(cls, ring: Ring) -> BoundingBox:
        """Return the tight box over every vertex of *ring*."""
        lons = [c[0] for c in ring]
        lats = [c[1] for c in ring]
        return cls(south=min(lats), west=min(lons), north=max(lats), east=max(lons))

    def to_overpass(self) -> str:
        """Render as an Overpass QL bbox filter: ``south,west,north,east``."""
        return f"{self.south},{self.west},{self.north},{self.east}"

    def to_dict(self) -> dict[str, list[float]]:
        """Serialise to the ``southwest`` / ``northeast`` wire shape."""
        return {
            "southwest": [self.west, self.south],
            "northeast": [self.east, self.north],
        }


@dataclass(frozen=True, slots=True)
class Polygon:
    """A single-ring building polygon.

    Holes are carried for GeoJSON fidelity, but footprints produced by
    this service never have any.
    """

    exterior: Ring
    holes: tuple[Ring, ...] = field(default_factory=tuple)

    @property
    def coordinate_count(self) -> int:
        """Number of vertices in the exterior ring (closing vertex included)."""
        return len(self.exterior)

    @classmethod
    def from_coordinates(cls, coordinates: Any) -> Polygon:
        """Build from a GeoJSON ``Polygon.coordinates`` array.

        Altitude (a third element) is dropped.

        Raises:
            InvalidInputError: If the array is missing, empty or malformed.
        """
        if not isinstance(coordinates, list | tuple) or not coordinates:
            msg = "Polygon must have a coordinate array"
            raise InvalidInputError(msg)
        rings = [_ring_from_raw(raw, index) for index, raw in enumerate(coordinates)]
        return cls(exterior=rings[0], holes=tuple(rings[1:]))

    def to_geojson(self) -> dict[str, Any]:
        """Return a GeoJSON ``Polygon`` geometry dict."""
        rings = [self.exterior, *self.holes]
        return {
            "type": "Polygon",
            "coordinates": [[[lon, lat] for lon, lat in ring] for ring in rings],
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_axis(name: str, value: float, low: float, high: float) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"{name} must be a number, got {type(value).__name__}"
        raise InvalidInputError(msg, context={name: value})
    if not math.isfinite(value):
        # NaN and infinity have no JSON encoding; report them as text.
        msg = f"{name} must be finite, got {value}"
        raise InvalidInputError(msg, context={name: str(value)})
    if not low <= value <= high:
        msg = f"{name} {value} out of WGS 84 range [{low}, {high}]"
        raise InvalidInputError(msg, context={name: value})


def _ring_from_raw(raw: Any, ring_index: int) -> Ring:
    if not isinstance(raw, list | tuple) or not raw:
        msg = f"Polygon ring {ring_index} must be a non-empty coordinate array"
        raise InvalidInputError(msg)
    ring: list[tuple[float, float]] = []
    for idx, c in enumerate(raw):
        if not isinstance(c, list | tuple) or len(c) < 2:
            msg = f"Malformed coordinate at index {idx} of ring {ring_index}: {c!r}"
            raise InvalidInputError(msg)
        try:
            lon = float(c[0])
            lat = float(c[1])
        except (TypeError, ValueError) as exc:
            msg = f"Malformed coordinate at index {idx} of ring {ring_index}: {c!r}"
            raise InvalidInputError(msg) from exc
        # Range check only; Coordinate is not stored.
        Coordinate(latitude=lat, longitude=lon)
        ring.append((lon, lat))
    return tuple(ring)
