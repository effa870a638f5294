"""Geometry helpers: ring validation, distance, candidate selection."""

from roof_area.geometry.distance import centroid_of, haversine_km
from roof_area.geometry.selection import pick_candidate, rank_candidates
from roof_area.geometry.validation import (
    ensure_valid_polygon,
    is_valid_polygon,
    normalize_ring,
)

__all__ = [
    "centroid_of",
    "ensure_valid_polygon",
    "haversine_km",
    "is_valid_polygon",
    "normalize_ring",
    "pick_candidate",
    "rank_candidates",
]
