"""Request-level activities.

- resolve_footprint: point → nearest building footprint
- compute_area: polygon → geodesic area, centroid, bounds
"""
