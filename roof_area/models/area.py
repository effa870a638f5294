"""Data model for an area computation result."""

from __future__ import annotations

from dataclasses import dataclass

from roof_area.models.geometry import BoundingBox, Coordinate


@dataclass(frozen=True, slots=True)
class AreaResult:
    """Geodesic area and descriptive metrics of a polygon.

    A pure function of its input polygon; it has no lifecycle of its own.

    Attributes:
        area_square_meters: Geodesic area, rounded to 2 decimals.
        centroid: Mean-of-vertices centroid of the exterior ring.
        bounds: Tight bounding box of the exterior ring.
        precision_label: Human-readable precision statement.
        method: Name of the area algorithm.
        coordinate_count: Exterior ring vertex count as supplied by the caller.
    """

    area_square_meters: float
    centroid: Coordinate
    bounds: BoundingBox
    precision_label: str
    method: str
    coordinate_count: int
