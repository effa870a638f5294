"""Service configuration loaded from environment variables.

All configuration values have sensible defaults. Azure Functions app
settings (or ``local.settings.json`` for local dev) are the source of
truth.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, so bad configuration surfaces at startup rather
    than inside a request.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from roof_area.core.constants import (
    DEFAULT_BUFFER_DEG,
    DEFAULT_OVERPASS_URL,
    DEFAULT_SOURCE_ORDER,
    OPENSTREETMAP,
)
from roof_area.core.exceptions import RoofAreaError
from roof_area.models.source import SourceConfig

MAX_BUFFER_DEG = 0.01
MAX_SOURCE_RETRIES = 5


class ConfigValidationError(RoofAreaError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class RoofAreaConfig:
    """Immutable service configuration.

    Loaded once at function startup and passed into source constructors.

    Attributes:
        footprint_sources: Source names in priority order.
        footprint_buffer_deg: Half-width of the search box around a query point.
        source_timeout_s: Timeout for each outbound source call in seconds.
        source_max_retries: Extra attempts after a ``SourceUnavailableError``.
        retry_backoff_s: Linear backoff step between retries in seconds.
        overpass_api_url: Overpass API interpreter endpoint.
        mapbox_secret_token: Server-side Mapbox token used for geocoding.
        mapbox_public_token: Browser-safe Mapbox token exposed to the map UI.
        geocode_country: ISO country filter for geocoding.
        environment: Deployment environment name.
    """

    footprint_sources: tuple[str, ...] = DEFAULT_SOURCE_ORDER
    footprint_buffer_deg: float = DEFAULT_BUFFER_DEG
    source_timeout_s: float = 25.0
    source_max_retries: int = 1
    retry_backoff_s: float = 0.5
    overpass_api_url: str = DEFAULT_OVERPASS_URL
    mapbox_secret_token: str = ""
    mapbox_public_token: str = ""
    geocode_country: str = "US"
    environment: str = "development"

    @classmethod
    def from_env(cls) -> RoofAreaConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``SOURCE_TIMEOUT_S=abc``).
        """
        sources_raw = os.getenv("FOOTPRINT_SOURCES", ",".join(DEFAULT_SOURCE_ORDER))
        config = cls(
            footprint_sources=tuple(s.strip() for s in sources_raw.split(",") if s.strip()),
            footprint_buffer_deg=float(os.getenv("FOOTPRINT_BUFFER_DEG", str(DEFAULT_BUFFER_DEG))),
            source_timeout_s=float(os.getenv("SOURCE_TIMEOUT_S", "25")),
            source_max_retries=int(os.getenv("SOURCE_MAX_RETRIES", "1")),
            retry_backoff_s=float(os.getenv("SOURCE_RETRY_BACKOFF_S", "0.5")),
            overpass_api_url=os.getenv("OVERPASS_API_URL", DEFAULT_OVERPASS_URL),
            mapbox_secret_token=os.getenv("MAPBOX_SECRET_TOKEN", ""),
            mapbox_public_token=os.getenv("MAPBOX_PUBLIC_TOKEN", ""),
            geocode_country=os.getenv("GEOCODE_COUNTRY", "US"),
            environment=os.getenv("ENVIRONMENT", "development"),
        )
        _validate(config)
        return config

    def source_configs(self) -> list[SourceConfig]:
        """Return one ``SourceConfig`` per configured source, in priority order."""
        configs: list[SourceConfig] = []
        for name in self.footprint_sources:
            api_base_url = self.overpass_api_url if name == OPENSTREETMAP else ""
            configs.append(
                SourceConfig(
                    name=name,
                    api_base_url=api_base_url,
                    timeout_s=self.source_timeout_s,
                )
            )
        return configs


def _validate(config: RoofAreaConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.footprint_sources:
        raise ConfigValidationError(
            "FOOTPRINT_SOURCES",
            config.footprint_sources,
            "must name at least one source",
        )

    from roof_area.sources.factory import list_sources

    known = list_sources()
    unknown = [name for name in config.footprint_sources if name not in known]
    if unknown:
        raise ConfigValidationError(
            "FOOTPRINT_SOURCES",
            ",".join(config.footprint_sources),
            f"unknown source(s) {', '.join(unknown)}; available: {', '.join(known)}",
        )

    if not 0.0 < config.footprint_buffer_deg <= MAX_BUFFER_DEG:
        raise ConfigValidationError(
            "FOOTPRINT_BUFFER_DEG",
            config.footprint_buffer_deg,
            f"must be > 0 and <= {MAX_BUFFER_DEG} (degrees)",
        )

    if config.source_timeout_s <= 0:
        raise ConfigValidationError(
            "SOURCE_TIMEOUT_S",
            config.source_timeout_s,
            "must be > 0 (seconds)",
        )

    if not 0 <= config.source_max_retries <= MAX_SOURCE_RETRIES:
        raise ConfigValidationError(
            "SOURCE_MAX_RETRIES",
            config.source_max_retries,
            f"must be between 0 and {MAX_SOURCE_RETRIES}",
        )

    if config.retry_backoff_s < 0:
        raise ConfigValidationError(
            "SOURCE_RETRY_BACKOFF_S",
            config.retry_backoff_s,
            "must be >= 0 (seconds)",
        )

    if not config.overpass_api_url:
        raise ConfigValidationError(
            "OVERPASS_API_URL",
            config.overpass_api_url,
            "must not be empty",
        )
