"""Footprint resolution activity.

Resolves a query point to a single building footprint by consulting an
ordered chain of ``FootprintSource`` adapters.

Resolution rules:
- Sources are queried sequentially in priority order. The first source
  that returns at least one candidate wins; later sources are not
  consulted (short-circuit).
- A ``SourceUnavailableError`` from one source is logged and the next
  source is tried. Only when every source failed is
  ``SourceUnavailableError`` reported; if any source answered with an
  empty list the result is ``NotFoundError``.
- Bounded retries wrap ``SourceUnavailableError`` only.
- The nearest candidate (by centroid distance) is normalised. A
  geometry failure at that point is surfaced as
  ``InvalidGeometryError``; other candidates and later sources are not
  tried.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from roof_area.core.constants import DEFAULT_BUFFER_DEG, METRES_PER_KM
from roof_area.core.exceptions import (
    InvalidGeometryError,
    NotFoundError,
    SourceUnavailableError,
)
from roof_area.geometry.selection import pick_candidate
from roof_area.geometry.validation import normalize_ring
from roof_area.models.footprint import Footprint
from roof_area.models.geometry import Coordinate, Polygon

if TYPE_CHECKING:
    from roof_area.core.config import RoofAreaConfig
    from roof_area.models.footprint import Candidate
    from roof_area.sources.base import FootprintSource

logger = logging.getLogger("roof_area.activities.resolve_footprint")


class FootprintResolver:
    """Resolve query points against an ordered source chain.

    Args:
        sources: Footprint sources in priority order.
        buffer_deg: Half-width of the search box around each query point.
        max_retries: Extra attempts per source after a
            ``SourceUnavailableError``.
        retry_backoff_s: Linear backoff step between attempts.
        sleep: Sleep function, injectable for tests.
    """

    def __init__(
        self,
        sources: Sequence[FootprintSource],
        *,
        buffer_deg: float = DEFAULT_BUFFER_DEG,
        max_retries: int = 0,
        retry_backoff_s: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._sources = tuple(sources)
        self._buffer_deg = buffer_deg
        self._max_retries = max_retries
        self._retry_backoff_s = retry_backoff_s
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: RoofAreaConfig) -> FootprintResolver:
        """Build a resolver with the source chain named in *config*."""
        from roof_area.sources.factory import build_source_chain

        return cls(
            build_source_chain(config),
            buffer_deg=config.footprint_buffer_deg,
            max_retries=config.source_max_retries,
            retry_backoff_s=config.retry_backoff_s,
        )

    @property
    def source_names(self) -> list[str]:
        """Display names of the configured sources, in priority order."""
        return [s.display_name for s in self._sources]

    def resolve(self, point: Coordinate) -> Footprint:
        """Return the footprint of the building nearest to *point*.

        Raises:
            NotFoundError: No source returned any candidate.
            SourceUnavailableError: Every source failed.
            InvalidGeometryError: The selected candidate's ring is degenerate.
        """
        consulted: list[str] = []
        failures: dict[str, str] = {}
        candidates: list[Candidate] = []

        for source in self._sources:
            consulted.append(source.display_name)
            try:
                candidates = self._query_with_retry(source, point)
            except SourceUnavailableError as exc:
                logger.warning(
                    "Footprint source failed | source=%s | error=%s",
                    source.display_name,
                    exc.message,
                )
                failures[source.display_name] = exc.message
                continue
            if candidates:
                break
            logger.info("No footprint from %s, trying next source", source.display_name)

        context: dict[str, object] = {
            "coordinates": point.to_dict(),
            "sources_checked": consulted,
        }

        if not candidates:
            if failures and len(failures) == len(consulted):
                msg = "All footprint sources are unavailable"
                raise SourceUnavailableError(
                    ", ".join(failures),
                    msg,
                    stage="resolve_footprint",
                    context={**context, "failures": failures},
                )
            msg = "No building found at the specified coordinates"
            raise NotFoundError(msg, code="NO_BUILDING_FOUND", context=context)

        candidate, distance_km = pick_candidate(point, candidates)

        try:
            ring = normalize_ring(candidate.ring, label=f"{candidate.source_tag} building ring")
        except InvalidGeometryError as exc:
            raise InvalidGeometryError(
                exc.message,
                stage="resolve_footprint",
                context={**context, "source": candidate.source_tag, **exc.context},
            ) from exc

        footprint = Footprint(
            polygon=Polygon(exterior=ring),
            source=candidate.source_tag,
            distance_to_query_m=distance_km * METRES_PER_KM,
            metadata=dict(candidate.source_metadata),
        )

        logger.info(
            "Footprint resolved | lat=%.6f | lon=%.6f | source=%s | distance=%.1f m | vertices=%d",
            point.latitude,
            point.longitude,
            footprint.source,
            footprint.distance_to_query_m,
            footprint.polygon.coordinate_count,
        )
        return footprint

    def _query_with_retry(self, source: FootprintSource, point: Coordinate) -> list[Candidate]:
        attempts = self._max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return source.query(point, self._buffer_deg)
            except SourceUnavailableError:
                if attempt == attempts:
                    raise
                delay = self._retry_backoff_s * attempt
                logger.info(
                    "Retrying footprint source | source=%s | attempt=%d/%d | delay=%.2f s",
                    source.display_name,
                    attempt + 1,
                    attempts,
                    delay,
                )
                self._sleep(delay)
        return []


def resolve_footprint(
    latitude: float,
    longitude: float,
    *,
    resolver: FootprintResolver | None = None,
    config: RoofAreaConfig | None = None,
) -> Footprint:
    """Resolve a raw latitude/longitude pair to a building footprint.

    Input is validated before any source is queried.

    Args:
        latitude: Query latitude in degrees.
        longitude: Query longitude in degrees.
        resolver: Resolver to use. Built from *config* when ``None``.
        config: Configuration for building a resolver. Loaded from the
            environment when both *resolver* and *config* are ``None``.

    Raises:
        InvalidInputError: If the coordinates are out of range.
        NotFoundError, SourceUnavailableError, InvalidGeometryError: As
            raised by ``FootprintResolver.resolve``.
    """
    point = Coordinate(latitude=latitude, longitude=longitude)

    if resolver is None:
        if config is None:
            from roof_area.core.config import RoofAreaConfig

            config = RoofAreaConfig.from_env()
        resolver = FootprintResolver.from_config(config)

    return resolver.resolve(point)
