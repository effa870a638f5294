"""Mapbox forward geocoder.

Thin pass-through to the Mapbox Geocoding API: one free-text address
in, the single best address match out.

References:
    https://docs.mapbox.com/api/search/geocoding-v5/
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from roof_area.core.constants import DEFAULT_MAPBOX_GEOCODING_URL
from roof_area.core.exceptions import (
    InternalError,
    InvalidInputError,
    NotFoundError,
    SourceUnavailableError,
)
from roof_area.models.geometry import Coordinate

logger = logging.getLogger(__name__)

SOURCE_NAME = "Mapbox Geocoding"


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    """Best geocoding match for an address.

    Attributes:
        coordinate: Location of the match.
        formatted_address: Mapbox ``place_name``.
        confidence: Mapbox ``relevance`` in [0, 1].
        bounds: ``[min_lon, min_lat, max_lon, max_lat]`` when Mapbox supplies one.
    """

    coordinate: Coordinate
    formatted_address: str
    confidence: float
    bounds: list[float] | None = None


class MapboxGeocoder:
    """Forward geocoder backed by ``mapbox.places``.

    Args:
        access_token: Mapbox secret token.
        country: ISO 3166 alpha-2 country filter.
        timeout_s: Upper bound for the HTTP call.
        base_url: Endpoint prefix (overridable for tests).
        transport: Optional httpx transport for tests.
    """

    def __init__(
        self,
        access_token: str,
        *,
        country: str = "US",
        timeout_s: float = 10.0,
        base_url: str = DEFAULT_MAPBOX_GEOCODING_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._access_token = access_token
        self._country = country
        self._timeout_s = timeout_s
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    def geocode(self, address: str) -> GeocodeResult:
        """Return the best match for *address*.

        Raises:
            InvalidInputError: If *address* is blank.
            InternalError: If no access token is configured.
            NotFoundError: If Mapbox returns no features.
            SourceUnavailableError: On HTTP, timeout or parse failures.
        """
        if not address or not address.strip():
            msg = "Address parameter is required"
            raise InvalidInputError(msg, stage="geocode")
        if not self._access_token:
            msg = "Mapbox API token not configured"
            raise InternalError(msg, stage="geocode", code="GEOCODER_NOT_CONFIGURED")

        url = f"{self._base_url}/{quote(address.strip(), safe='')}.json"
        params = {
            "access_token": self._access_token,
            "country": self._country,
            "types": "address",
            "limit": "1",
        }
        context = {"address": address}

        try:
            with httpx.Client(timeout=self._timeout_s, transport=self._transport) as client:
                response = client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as exc:
            msg = f"Mapbox request timed out after {self._timeout_s:g} s"
            raise SourceUnavailableError(SOURCE_NAME, msg, stage="geocode", context=context) from exc
        except httpx.HTTPStatusError as exc:
            msg = f"Mapbox API error: {exc.response.status_code} {exc.response.reason_phrase}"
            raise SourceUnavailableError(SOURCE_NAME, msg, stage="geocode", context=context) from exc
        except httpx.HTTPError as exc:
            msg = f"Mapbox request failed: {exc}"
            raise SourceUnavailableError(SOURCE_NAME, msg, stage="geocode", context=context) from exc
        except ValueError as exc:
            msg = f"Mapbox response is not valid JSON: {exc}"
            raise SourceUnavailableError(SOURCE_NAME, msg, stage="geocode", context=context) from exc

        features = data.get("features") if isinstance(data, dict) else None
        if not features:
            msg = "No results found for the provided address"
            raise NotFoundError(msg, stage="geocode", code="ADDRESS_NOT_FOUND", context=context)

        result = _feature_to_result(features[0], context)
        logger.info(
            "Address geocoded | formatted=%s | confidence=%.2f",
            result.formatted_address,
            result.confidence,
        )
        return result


def _feature_to_result(feature: Any, context: dict[str, Any]) -> GeocodeResult:
    try:
        longitude, latitude = feature["center"]
        bbox = feature.get("bbox")
        return GeocodeResult(
            coordinate=Coordinate(latitude=float(latitude), longitude=float(longitude)),
            formatted_address=str(feature.get("place_name", "")),
            confidence=float(feature.get("relevance") or 1),
            bounds=[float(v) for v in bbox] if bbox else None,
        )
    except (KeyError, TypeError, ValueError, InvalidInputError) as exc:
        msg = f"Unparseable Mapbox feature: {exc}"
        raise SourceUnavailableError(SOURCE_NAME, msg, stage="geocode", context=context) from exc
