"""OpenStreetMap source (Overpass API).

Concrete ``FootprintSource`` that POSTs an Overpass QL bounding-box
query for ``building=*`` ways and relations and converts each returned
element into a ``Candidate``.

Configuration:
    The interpreter URL defaults to
    ``https://overpass-api.de/api/interpreter``. Override via
    ``SourceConfig.api_base_url`` (``OVERPASS_API_URL``).

Geometry handling:
    The query ends in ``out geom;`` so every way carries its vertex list
    inline. Relations (multipolygon buildings) contribute their first
    ``outer`` member way. Vertices are kept in the order returned.

References:
    Overpass QL: https://wiki.openstreetmap.org/wiki/Overpass_API/Overpass_QL
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from roof_area import __version__
from roof_area.core.constants import (
    DEFAULT_OVERPASS_URL,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from roof_area.core.exceptions import SourceUnavailableError
from roof_area.models.footprint import Candidate
from roof_area.models.geometry import BoundingBox
from roof_area.sources.base import FootprintSource

if TYPE_CHECKING:
    from roof_area.models.geometry import Coordinate, Ring
    from roof_area.models.source import SourceConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SOURCE_TAG = "OpenStreetMap"

# Server-side evaluation limit written into the query header.
_SERVER_TIMEOUT_S = 25

_USER_AGENT = f"roof-area-calculator/{__version__}"

_QUERY_TEMPLATE = """[out:json][timeout:{timeout}];
(
  way["building"]({bbox});
  relation["building"]({bbox});
);
out geom;"""


class OpenStreetMapSource(FootprintSource):
    """Overpass API adapter.

    Each ``query`` opens a short-lived ``httpx.Client`` bounded by
    ``SourceConfig.timeout_s``; no connection outlives the call.

    Args:
        config: Source configuration.
        transport: Optional httpx transport, used by tests to serve
            canned Overpass responses.
    """

    def __init__(
        self,
        config: SourceConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(config)
        self._url = config.api_base_url or DEFAULT_OVERPASS_URL
        self._transport = transport

    def query(self, point: Coordinate, buffer_deg: float) -> list[Candidate]:
        """Return building candidates inside the box around *point*.

        Raises:
            SourceUnavailableError: On HTTP errors, timeouts, or a
                response body that is not an Overpass JSON document.
        """
        bbox = BoundingBox.around(point, buffer_deg)
        ql = build_overpass_query(bbox)
        context = {"coordinates": point.to_dict(), "source": self.display_name}

        try:
            with httpx.Client(
                timeout=self.config.timeout_s,
                transport=self._transport,
                headers={"User-Agent": _USER_AGENT},
            ) as client:
                response = client.post(self._url, data={"data": ql})
                response.raise_for_status()
                payload = response.json()
        except httpx.TimeoutException as exc:
            msg = f"Overpass request timed out after {self.config.timeout_s:g} s"
            raise SourceUnavailableError(self.display_name, msg, context=context) from exc
        except httpx.HTTPStatusError as exc:
            msg = f"Overpass API error: {exc.response.status_code}"
            raise SourceUnavailableError(self.display_name, msg, context=context) from exc
        except httpx.HTTPError as exc:
            msg = f"Overpass request failed: {exc}"
            raise SourceUnavailableError(self.display_name, msg, context=context) from exc
        except ValueError as exc:
            msg = f"Overpass response is not valid JSON: {exc}"
            raise SourceUnavailableError(self.display_name, msg, context=context) from exc

        elements = payload.get("elements") if isinstance(payload, dict) else None
        if not isinstance(elements, list):
            msg = "Overpass response has no 'elements' array"
            raise SourceUnavailableError(self.display_name, msg, context=context)

        # Server-side timeouts and memory exhaustion arrive as HTTP 200
        # with a truncated element list and a "runtime error" remark.
        remark = payload.get("remark")
        if isinstance(remark, str) and "runtime error" in remark:
            msg = f"Overpass runtime error: {remark}"
            raise SourceUnavailableError(self.display_name, msg, context=context)

        candidates: list[Candidate] = []
        for element in elements:
            candidate = element_to_candidate(element)
            if candidate is not None:
                candidates.append(candidate)

        logger.info(
            "Overpass query | bbox=%s | elements=%d | candidates=%d",
            bbox.to_overpass(),
            len(elements),
            len(candidates),
        )
        return candidates


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def build_overpass_query(bbox: BoundingBox, *, timeout: int = _SERVER_TIMEOUT_S) -> str:
    """Return the Overpass QL query for buildings inside *bbox*."""
    return _QUERY_TEMPLATE.format(timeout=timeout, bbox=bbox.to_overpass())


def element_to_candidate(element: Any) -> Candidate | None:
    """Convert one Overpass element to a ``Candidate``, or ``None`` if unusable.

    Elements without inline geometry (e.g. a relation whose members were
    not returned) are skipped.
    """
    if not isinstance(element, dict):
        return None

    osm_type = element.get("type")
    if osm_type == "way":
        nodes = element.get("geometry")
    elif osm_type == "relation":
        nodes = _outer_member_geometry(element.get("members"))
    else:
        return None

    try:
        ring = _nodes_to_ring(nodes)
    except (KeyError, TypeError, ValueError):
        logger.warning(
            "Skipping unparseable Overpass element: %s/%s",
            osm_type,
            element.get("id", "?"),
            exc_info=True,
        )
        return None
    if not ring:
        return None

    tags = element.get("tags") or {}
    return Candidate(
        ring=ring,
        source_tag=SOURCE_TAG,
        source_metadata={
            "osm_id": element.get("id"),
            "osm_type": osm_type,
            "building": tags.get("building", "yes") if isinstance(tags, dict) else "yes",
        },
    )


def _outer_member_geometry(members: Any) -> Any:
    if not isinstance(members, list):
        return None
    for member in members:
        if isinstance(member, dict) and member.get("role") == "outer" and member.get("geometry"):
            return member["geometry"]
    return None


def _nodes_to_ring(nodes: Any) -> Ring:
    if not nodes:
        return ()
    ring: list[tuple[float, float]] = []
    for node in nodes:
        lon = float(node["lon"])
        lat = float(node["lat"])
        if not (
            MIN_LONGITUDE <= lon <= MAX_LONGITUDE and MIN_LATITUDE <= lat <= MAX_LATITUDE
        ):
            msg = f"vertex out of WGS 84 range: lon={lon}, lat={lat}"
            raise ValueError(msg)
        ring.append((lon, lat))
    return tuple(ring)
