"""Azure Functions entry point — Roof Area Calculator API.

This module registers the HTTP functions using the Python v2
programming model. All business logic lives in the roof_area package;
this file is purely the wiring layer between HTTP bindings and the
handlers in ``roof_area.api.handlers``.

Routes (the host adds the ``/api`` prefix):
    GET       /api/health
    GET       /api/config
    GET       /api/geocode?address=...
    GET       /api/footprint?lat=...&lon=...
    GET/POST  /api/area
"""

from __future__ import annotations

import functools
import json
import logging

import azure.functions as func

from roof_area.activities.resolve_footprint import FootprintResolver
from roof_area.api.handlers import (
    ApiResponse,
    handle_area,
    handle_config,
    handle_footprint,
    handle_geocode,
    handle_health,
    respond,
)
from roof_area.core.config import RoofAreaConfig
from roof_area.geocoding.mapbox import MapboxGeocoder

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

logger = logging.getLogger("roof_area.function_app")


@functools.cache
def _config() -> RoofAreaConfig:
    """Load configuration once per worker process (fail-fast on bad values)."""
    return RoofAreaConfig.from_env()


def _to_http(response: ApiResponse) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(response.body),
        status_code=response.status_code,
        mimetype="application/json",
    )


def _geocoder() -> MapboxGeocoder:
    config = _config()
    return MapboxGeocoder(
        config.mapbox_secret_token,
        country=config.geocode_country,
        timeout_s=config.source_timeout_s,
    )


# ---------------------------------------------------------------------------
# HTTP routes
# ---------------------------------------------------------------------------


@app.function_name("health")
@app.route(route="health", methods=["GET"])
def health(req: func.HttpRequest) -> func.HttpResponse:  # noqa: ARG001
    """Liveness probe."""
    return _to_http(handle_health())


@app.function_name("config")
@app.route(route="config", methods=["GET"])
def client_config(req: func.HttpRequest) -> func.HttpResponse:  # noqa: ARG001
    """Configuration for the map client (public Mapbox token, environment)."""
    return _to_http(respond(lambda: handle_config(_config())))


@app.function_name("geocode")
@app.route(route="geocode", methods=["GET"])
def geocode(req: func.HttpRequest) -> func.HttpResponse:
    """Convert a free-text address to latitude/longitude."""
    return _to_http(respond(lambda: handle_geocode(req.params, geocoder=_geocoder())))


@app.function_name("footprint")
@app.route(route="footprint", methods=["GET"])
def footprint(req: func.HttpRequest) -> func.HttpResponse:
    """Resolve the building footprint nearest to ``lat`` / ``lon``."""
    logger.info(
        "footprint request | lat=%s | lon=%s",
        req.params.get("lat"),
        req.params.get("lon"),
    )
    return _to_http(
        respond(
            lambda: handle_footprint(
                req.params,
                resolver=FootprintResolver.from_config(_config()),
            )
        )
    )


@app.function_name("area")
@app.route(route="area", methods=["GET", "POST"])
def area(req: func.HttpRequest) -> func.HttpResponse:
    """Compute the geodesic area of a GeoJSON polygon.

    GET reads the ``geojson`` query parameter; POST reads the JSON body.
    """
    raw = req.params.get("geojson") if req.method == "GET" else req.get_body()
    return _to_http(handle_area(raw))
