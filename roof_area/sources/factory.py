"""Source factory — builds footprint sources by name.

The factory maintains a registry of known adapters. New adapters are
registered by adding an entry to ``_SOURCE_REGISTRY`` or by calling
``register_source``.

Usage::

    from roof_area.sources.factory import build_source_chain

    sources = build_source_chain(RoofAreaConfig.from_env())

The ordered source list is read from the ``FOOTPRINT_SOURCES``
environment variable via ``RoofAreaConfig.footprint_sources``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from roof_area.core.constants import MICROSOFT_BUILDINGS, OPENSTREETMAP
from roof_area.core.exceptions import InternalError
from roof_area.models.source import SourceConfig
from roof_area.sources.base import FootprintSource

if TYPE_CHECKING:
    from collections.abc import Callable

    from roof_area.core.config import RoofAreaConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Lazy-import adapter registry
# ---------------------------------------------------------------------------

# Each entry maps a source name to a callable that returns the adapter
# *class*, so httpx is only imported when the Overpass adapter is used.

_SOURCE_REGISTRY: dict[str, Callable[[], type[FootprintSource]]] = {}


def _register_builtin_sources() -> None:
    """Register the built-in source adapters."""

    def _microsoft_buildings() -> type[FootprintSource]:
        from roof_area.sources.microsoft_buildings import MicrosoftBuildingsSource

        return MicrosoftBuildingsSource

    def _openstreetmap() -> type[FootprintSource]:
        from roof_area.sources.openstreetmap import OpenStreetMapSource

        return OpenStreetMapSource

    _SOURCE_REGISTRY[MICROSOFT_BUILDINGS] = _microsoft_buildings
    _SOURCE_REGISTRY[OPENSTREETMAP] = _openstreetmap


def _ensure_registry() -> None:
    """Initialise the adapter registry once (idempotent)."""
    if not _SOURCE_REGISTRY:
        _register_builtin_sources()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_source(
    name: str,
    loader: Callable[[], type[FootprintSource]],
) -> None:
    """Register a custom source adapter.

    Args:
        name: Source name (e.g. ``"county_parcels"``).
        loader: A zero-argument callable that returns the adapter class.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Source name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _SOURCE_REGISTRY[name] = loader
    logger.debug("Registered footprint source: %s", name)


def get_source(
    name: str,
    config: SourceConfig | None = None,
) -> FootprintSource:
    """Create and return a footprint source instance.

    Args:
        name: Source identifier (e.g. ``"openstreetmap"``).
        config: Optional ``SourceConfig``. If ``None``, a default config
            with just the source name is used.

    Raises:
        InternalError: If the named source is not registered or the
            config names a different source.
    """
    _ensure_registry()

    loader = _SOURCE_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_SOURCE_REGISTRY))
        msg = f"Unknown footprint source: {name!r}. Available: {available}"
        raise InternalError(msg, stage="config", code="UNKNOWN_SOURCE")

    if config is None:
        config = SourceConfig(name=name)
    elif config.name != name:
        msg = f"SourceConfig.name {config.name!r} does not match requested source {name!r}"
        raise InternalError(msg, stage="config", code="SOURCE_CONFIG_MISMATCH")

    source_cls = loader()
    logger.debug("Creating footprint source: %s", name)
    return source_cls(config)


def build_source_chain(config: RoofAreaConfig) -> list[FootprintSource]:
    """Return the configured sources in priority order."""
    return [get_source(sc.name, sc) for sc in config.source_configs()]


def list_sources() -> list[str]:
    """Return the names of all registered source adapters."""
    _ensure_registry()
    return sorted(_SOURCE_REGISTRY)
