"""Great-circle distance and vertex-mean centroid."""

from __future__ import annotations

import math
from collections.abc import Sequence

from roof_area.core.constants import EARTH_RADIUS_KM
from roof_area.core.exceptions import InvalidGeometryError
from roof_area.models.geometry import Coordinate


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Return the great-circle distance between *a* and *b* in kilometres.

    Uses a spherical Earth of radius 6371 km. Symmetric in its arguments.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def centroid_of(ring: Sequence[tuple[float, float]]) -> Coordinate:
    """Return the arithmetic mean of the ring's vertices.

    This is not the area-weighted centroid; for building-sized rings the
    difference is immaterial. A closing vertex that repeats the first is
    counted once, so closed and unclosed versions of a ring agree. Tools
    that average every Overpass node, closing node included, weight the
    first vertex twice and can disagree with this by a fraction of a metre.

    Raises:
        InvalidGeometryError: If the ring has no vertices.
    """
    points = list(ring)
    if len(points) > 1 and points[0] == points[-1]:
        points = points[:-1]
    if not points:
        msg = "Cannot compute centroid of an empty ring"
        raise InvalidGeometryError(msg)

    lon = math.fsum(p[0] for p in points) / len(points)
    lat = math.fsum(p[1] for p in points) / len(points)
    return Coordinate(latitude=lat, longitude=lon)
