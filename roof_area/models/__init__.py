"""Data models and schemas.

Defines the value types used throughout the service:
- Coordinate, BoundingBox, Ring, Polygon: WGS 84 geometry
- Candidate, Footprint: raw and resolved building geometry
- AreaResult: geodesic area with centroid and bounds
- SourceConfig: per-source configuration
"""

from roof_area.models.area import AreaResult
from roof_area.models.footprint import Candidate, Footprint
from roof_area.models.geometry import BoundingBox, Coordinate, Polygon, Ring
from roof_area.models.source import SourceConfig

__all__ = [
    "AreaResult",
    "BoundingBox",
    "Candidate",
    "Coordinate",
    "Footprint",
    "Polygon",
    "Ring",
    "SourceConfig",
]
