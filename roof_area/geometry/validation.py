"""Ring normalisation and polygon validity checks.

Responsibilities:
- Close unclosed rings (first vertex appended as the last)
- Reject rings with fewer than 3 distinct points
- Shapely validity checks (self-intersection, zero area)

Validity is checked, never repaired: a footprint that fails here is
reported as ``InvalidGeometryError`` instead of being silently altered.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from roof_area.core.constants import MIN_DISTINCT_POINTS
from roof_area.core.exceptions import InvalidGeometryError
from roof_area.models.geometry import Polygon, Ring

logger = logging.getLogger("roof_area.geometry.validation")


def normalize_ring(ring: Iterable[tuple[float, float]], *, label: str = "ring") -> Ring:
    """Return *ring* closed, appending the first vertex if first != last.

    Already-closed rings are returned unchanged, so the function is
    idempotent.

    Args:
        ring: ``(lon, lat)`` vertices.
        label: Name used in log and error messages.

    Raises:
        InvalidGeometryError: If the ring has fewer than 3 distinct points.
    """
    coords: Ring = tuple((float(lon), float(lat)) for lon, lat in ring)

    distinct = set(coords)
    if len(distinct) < MIN_DISTINCT_POINTS:
        msg = (
            f"{label} has {len(distinct)} distinct point(s), "
            f"need at least {MIN_DISTINCT_POINTS}"
        )
        raise InvalidGeometryError(msg, context={"vertex_count": len(coords)})

    if coords[0] != coords[-1]:
        logger.warning("Auto-closing unclosed %s | vertices=%d", label, len(coords))
        coords = (*coords, coords[0])

    return coords


def is_valid_polygon(polygon: Polygon) -> bool:
    """Return whether *polygon* is simple and has non-zero area."""
    return _invalid_reason(polygon) is None


def ensure_valid_polygon(polygon: Polygon) -> None:
    """Raise ``InvalidGeometryError`` unless ``is_valid_polygon(polygon)``."""
    reason = _invalid_reason(polygon)
    if reason is not None:
        msg = f"Invalid polygon geometry: {reason}"
        raise InvalidGeometryError(
            msg,
            context={"coordinate_count": polygon.coordinate_count},
        )


def _invalid_reason(polygon: Polygon) -> str | None:
    from shapely.geometry import Polygon as ShapelyPolygon
    from shapely.validation import explain_validity

    try:
        shape = ShapelyPolygon(polygon.exterior, [list(h) for h in polygon.holes])
    except Exception as exc:
        return f"cannot build polygon ({exc})"

    if shape.is_empty:
        return "empty polygon"
    if not shape.is_valid:
        return explain_validity(shape)
    if shape.area == 0:
        return "zero-area polygon"
    return None
