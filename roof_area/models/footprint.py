"""Data models for building candidates and the resolved footprint.

A ``Candidate`` is raw geometry plus provenance, exactly as a source
returned it. A ``Footprint`` is the selected, normalised polygon for a
query point. Both are immutable and owned by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from roof_area.models.geometry import Polygon, Ring


@dataclass(frozen=True, slots=True)
class Candidate:
    """An unvalidated building ring returned by a footprint source.

    Attributes:
        ring: Vertices as ``(lon, lat)`` pairs in the order returned.
        source_tag: Display name of the source (e.g. ``"OpenStreetMap"``).
        source_metadata: Provenance such as the upstream feature id.
    """

    ring: Ring
    source_tag: str
    source_metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Footprint:
    """The resolved building polygon for a query point.

    Attributes:
        polygon: Normalised (closed) single-ring polygon.
        source: Display name of the source that supplied it.
        distance_to_query_m: Haversine distance from the query point to
            the candidate centroid, in metres.
        metadata: Source metadata carried over from the candidate.
    """

    polygon: Polygon
    source: str
    distance_to_query_m: float
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_feature(self) -> dict[str, Any]:
        """Render as the GeoJSON Feature returned to clients."""
        properties: dict[str, Any] = {
            "source": self.source,
            "building": self.metadata.get("building", "yes"),
            "distance_meters": round(self.distance_to_query_m),
        }
        if "osm_id" in self.metadata:
            properties["osm_id"] = self.metadata["osm_id"]
        return {
            "type": "Feature",
            "properties": properties,
            "geometry": self.polygon.to_geojson(),
        }
