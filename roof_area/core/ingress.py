"""Thin ingress boundary helpers for the HTTP entrypoints.

Centralises request-parameter parsing so that ``function_app.py`` and
the handlers contain no string munging:

- **parse_coordinate_params** — ``lat`` / ``lon`` query strings to a
  validated ``Coordinate``.
- **parse_geojson_input** — GeoJSON supplied as a JSON string (query
  parameter), raw bytes (request body) or an already-parsed dict.

Both raise ``InvalidInputError`` before any upstream source is touched.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from roof_area.core.exceptions import InvalidInputError
from roof_area.models.geometry import Coordinate

logger = logging.getLogger("roof_area.core.ingress")

FOOTPRINT_EXAMPLE = "/api/footprint?lat=37.4419&lon=-122.1430"
AREA_EXAMPLE = (
    '/api/area?geojson={"type":"Feature","geometry":{"type":"Polygon","coordinates":'
    "[[[-122.1430,37.4419],[-122.1425,37.4419],[-122.1425,37.4415],"
    "[-122.1430,37.4415],[-122.1430,37.4419]]]}}"
)


def parse_coordinate_params(params: Mapping[str, str]) -> Coordinate:
    """Parse ``lat`` and ``lon`` query parameters into a ``Coordinate``.

    Raises:
        InvalidInputError: If either parameter is missing, not a number,
            or out of WGS 84 range.
    """
    lat_raw = (params.get("lat") or "").strip()
    lon_raw = (params.get("lon") or "").strip()
    if not lat_raw or not lon_raw:
        msg = "Latitude and longitude parameters are required"
        raise InvalidInputError(msg, context={"example": FOOTPRINT_EXAMPLE})

    try:
        latitude = float(lat_raw)
        longitude = float(lon_raw)
    except ValueError as exc:
        msg = "Invalid latitude or longitude values"
        raise InvalidInputError(msg, context={"lat": lat_raw, "lon": lon_raw}) from exc

    return Coordinate(latitude=latitude, longitude=longitude)


def parse_geojson_input(raw: str | bytes | Mapping[str, Any] | None) -> dict[str, Any]:
    """Normalise GeoJSON input to a plain dict.

    Raises:
        InvalidInputError: If *raw* is missing, not valid JSON, or not a
            JSON object.
    """
    if raw is None or (isinstance(raw, str | bytes) and not raw.strip()):
        msg = "GeoJSON parameter is required"
        raise InvalidInputError(msg, context={"example": AREA_EXAMPLE})

    if isinstance(raw, Mapping):
        return dict(raw)

    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as exc:
        msg = "Invalid GeoJSON format: failed to parse JSON"
        raise InvalidInputError(msg, code="INVALID_JSON") from exc

    if not isinstance(parsed, dict):
        msg = f"GeoJSON must be a JSON object, got {type(parsed).__name__}"
        raise InvalidInputError(msg, code="INVALID_JSON")
    return parsed
