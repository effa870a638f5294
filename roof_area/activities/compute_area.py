"""Area computation activity.

Computes the geodesic area, centroid and bounding box of a building
polygon.

Area is computed with ``pyproj.Geod`` on the WGS 84 ellipsoid, which is
accurate well beyond the needs of building-sized polygons at any
latitude. The centroid is the mean of the exterior ring's vertices,
matching the centroid used for candidate selection.

The functions here are pure: the input polygon is never modified and
repeated calls return identical results.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from roof_area.core.constants import (
    AREA_DECIMALS,
    AREA_METHOD_LABEL,
    AREA_PRECISION_LABEL,
)
from roof_area.core.exceptions import InvalidInputError
from roof_area.geometry.distance import centroid_of
from roof_area.geometry.validation import ensure_valid_polygon, normalize_ring
from roof_area.models.area import AreaResult
from roof_area.models.geometry import BoundingBox, Polygon

logger = logging.getLogger("roof_area.activities.compute_area")


def compute_area(polygon: Polygon) -> AreaResult:
    """Return the geodesic area and descriptive metrics of *polygon*.

    Raises:
        InvalidGeometryError: If the polygon is self-intersecting,
            degenerate or has zero area.
    """
    ensure_valid_polygon(polygon)

    area_m2 = round(geodesic_area_m2(polygon), AREA_DECIMALS)
    centroid = centroid_of(polygon.exterior)
    bounds = BoundingBox.of_ring(polygon.exterior)

    logger.info(
        "Area computed | area=%.2f m2 | vertices=%d | centroid=(%.6f, %.6f)",
        area_m2,
        polygon.coordinate_count,
        centroid.latitude,
        centroid.longitude,
    )

    return AreaResult(
        area_square_meters=area_m2,
        centroid=centroid,
        bounds=bounds,
        precision_label=AREA_PRECISION_LABEL,
        method=AREA_METHOD_LABEL,
        coordinate_count=polygon.coordinate_count,
    )


def geodesic_area_m2(polygon: Polygon) -> float:
    """Return the unrounded geodesic area of *polygon* in square metres.

    Winding-order agnostic. Holes, if any, are subtracted.
    """
    from pyproj import Geod

    geod = Geod(ellps="WGS84")

    total = _ring_area(geod, polygon.exterior)
    for hole in polygon.holes:
        total -= _ring_area(geod, hole)
    return total


def compute_area_from_geojson(payload: Any) -> AreaResult:
    """Compute the area of a GeoJSON Feature (or bare Polygon geometry).

    Unclosed rings are closed before computation. ``coordinate_count``
    in the result reflects the ring as supplied.

    Raises:
        InvalidInputError: If the payload is not a GeoJSON object, has no
            geometry, is not a Polygon, or lacks a coordinate array.
        InvalidGeometryError: If the ring is degenerate or invalid.
    """
    geometry = _extract_polygon_geometry(payload)
    supplied = Polygon.from_coordinates(geometry.get("coordinates"))

    polygon = Polygon(
        exterior=normalize_ring(supplied.exterior, label="exterior ring"),
        holes=tuple(normalize_ring(h, label="interior ring") for h in supplied.holes),
    )
    result = compute_area(polygon)
    return dataclasses.replace(result, coordinate_count=supplied.coordinate_count)


def _extract_polygon_geometry(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        msg = f"GeoJSON must be an object, got {type(payload).__name__}"
        raise InvalidInputError(msg)

    if payload.get("type") == "Polygon":
        geometry: Any = payload
    else:
        if not payload.get("type") or not payload.get("geometry"):
            msg = "GeoJSON must have type and geometry properties"
            raise InvalidInputError(msg)
        geometry = payload["geometry"]

    if not isinstance(geometry, dict) or geometry.get("type") != "Polygon":
        found = geometry.get("type") if isinstance(geometry, dict) else type(geometry).__name__
        msg = f"Only Polygon geometries are supported, got {found!r}"
        raise InvalidInputError(msg, code="INVALID_GEOMETRY_TYPE")

    return geometry


def _ring_area(geod: Any, ring: tuple[tuple[float, float], ...]) -> float:
    lons = [c[0] for c in ring]
    lats = [c[1] for c in ring]
    area, _perimeter = geod.polygon_area_perimeter(lons, lats)
    return abs(area)
