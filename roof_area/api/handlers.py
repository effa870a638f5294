"""Transport-independent HTTP handlers.

Each handler takes already-extracted request data (query parameters,
body) plus its collaborators, and returns an ``ApiResponse``. The Azure
Functions wiring in ``function_app.py`` only converts between
``func.HttpRequest`` / ``func.HttpResponse`` and these calls.

Every ``RoofAreaError`` becomes a structured JSON error body with a
status code chosen by error class; any other exception is logged and
reported as ``InternalError`` so no request can take the host down.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ParamSpec

from roof_area.activities.compute_area import compute_area_from_geojson
from roof_area.core.constants import SERVICE_NAME
from roof_area.core.exceptions import (
    InternalError,
    InvalidGeometryError,
    InvalidInputError,
    NotFoundError,
    RoofAreaError,
    SourceUnavailableError,
)
from roof_area.core.ingress import parse_coordinate_params, parse_geojson_input
from roof_area.models.responses import (
    AddressBody,
    AreaResponse,
    ClientConfigBody,
    ConfigResponse,
    CoordinatesBody,
    ErrorResponse,
    FootprintResponse,
    GeocodeResponse,
    HealthResponse,
)

if TYPE_CHECKING:
    from roof_area.activities.resolve_footprint import FootprintResolver
    from roof_area.core.config import RoofAreaConfig
    from roof_area.geocoding.mapbox import MapboxGeocoder

logger = logging.getLogger("roof_area.api.handlers")

P = ParamSpec("P")

_STATUS_BY_ERROR: tuple[tuple[type[RoofAreaError], int], ...] = (
    (InvalidInputError, 400),
    (InvalidGeometryError, 422),
    (NotFoundError, 404),
    (SourceUnavailableError, 503),
)

_TITLE_BY_ERROR: tuple[tuple[type[RoofAreaError], str], ...] = (
    (InvalidInputError, "Invalid request"),
    (InvalidGeometryError, "Invalid polygon geometry"),
    (NotFoundError, "Not found"),
    (SourceUnavailableError, "Upstream source unavailable"),
)


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Status code plus JSON-serialisable body."""

    status_code: int
    body: dict[str, Any]


def error_response(exc: RoofAreaError, *, title: str = "") -> ApiResponse:
    """Render *exc* as an ``ApiResponse`` with a stable error body."""
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 500)
    default_title = next(
        (t for cls, t in _TITLE_BY_ERROR if isinstance(exc, cls)), "Internal server error"
    )
    context = dict(exc.context)
    body = ErrorResponse(
        error=title or default_title,
        message=exc.message,
        code=exc.code,
        coordinates=context.pop("coordinates", None),
        sources_checked=context.pop("sources_checked", None),
        details=context,
    )
    return ApiResponse(status_code=status, body=body.model_dump(exclude_none=True))


def _guarded(
    not_found_title: str = "",
) -> Callable[[Callable[P, ApiResponse]], Callable[P, ApiResponse]]:
    """Convert exceptions raised by a handler into error responses."""

    def decorator(handler: Callable[P, ApiResponse]) -> Callable[P, ApiResponse]:
        @functools.wraps(handler)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> ApiResponse:
            try:
                return handler(*args, **kwargs)
            except NotFoundError as exc:
                logger.info("%s | %s", handler.__name__, exc.message)
                return error_response(exc, title=not_found_title)
            except RoofAreaError as exc:
                logger.warning(
                    "%s failed | category=%s | code=%s | error=%s",
                    handler.__name__,
                    exc.category,
                    exc.code,
                    exc,
                )
                return error_response(exc)
            except Exception as exc:
                logger.exception("%s failed unexpectedly", handler.__name__)
                return error_response(InternalError(str(exc) or type(exc).__name__))

        return wrapper

    return decorator


@_guarded()
def respond(build: Callable[[], ApiResponse]) -> ApiResponse:
    """Run *build* under the error envelope.

    Route functions wrap configuration loading and collaborator
    construction in *build*, so a bad setting still yields a JSON error.
    """
    return build()


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def handle_health() -> ApiResponse:
    body = HealthResponse(timestamp=datetime.now(UTC).isoformat(), service=SERVICE_NAME)
    return ApiResponse(200, body.model_dump())


def handle_config(config: RoofAreaConfig) -> ApiResponse:
    """Return the configuration the map client needs (public token only)."""
    body = ConfigResponse(
        config=ClientConfigBody(
            mapboxToken=config.mapbox_public_token,
            environment=config.environment,
        )
    )
    return ApiResponse(200, body.model_dump())


@_guarded(not_found_title="No building footprint found")
def handle_footprint(
    params: Mapping[str, str],
    *,
    resolver: FootprintResolver,
) -> ApiResponse:
    """``GET /api/footprint?lat=..&lon=..``"""
    point = parse_coordinate_params(params)
    footprint = resolver.resolve(point)
    body = FootprintResponse.from_footprint(point, footprint)
    return ApiResponse(200, body.model_dump())


@_guarded()
def handle_area(raw: str | bytes | Mapping[str, Any] | None) -> ApiResponse:
    """``GET /api/area?geojson=..`` and ``POST /api/area``."""
    geojson = parse_geojson_input(raw)
    result = compute_area_from_geojson(geojson)
    body = AreaResponse.from_result(result)
    return ApiResponse(200, body.model_dump())


@_guarded(not_found_title="Address not found")
def handle_geocode(
    params: Mapping[str, str],
    *,
    geocoder: MapboxGeocoder,
) -> ApiResponse:
    """``GET /api/geocode?address=..``"""
    address = params.get("address") or ""
    result = geocoder.geocode(address)
    body = GeocodeResponse(
        address=AddressBody(
            input=address,
            formatted=result.formatted_address,
            confidence=result.confidence,
        ),
        coordinates=CoordinatesBody(**result.coordinate.to_dict()),
        bounds=result.bounds,
    )
    return ApiResponse(200, body.model_dump())
