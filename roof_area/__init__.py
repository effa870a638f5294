"""Roof Area Calculator.

Resolves a geographic point to the nearest building footprint from
OpenStreetMap (with a slot for a global footprint dataset ahead of it)
and computes the footprint's geodesic area, centroid and bounds.
"""

__version__ = "0.1.0"
