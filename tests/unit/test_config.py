"""Tests for service configuration.

Covers:
- Default values
- Loading from environment variables
- Type coercion (string env vars → numeric fields)
- Fail-fast range validation
- Per-source config derivation
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from roof_area.core.config import ConfigValidationError, RoofAreaConfig
from roof_area.core.constants import DEFAULT_OVERPASS_URL


class TestRoofAreaConfigDefaults:
    """Verify default configuration values."""

    def test_default_source_order(self) -> None:
        cfg = RoofAreaConfig()
        assert cfg.footprint_sources == ("microsoft_buildings", "openstreetmap")

    def test_default_buffer(self) -> None:
        assert RoofAreaConfig().footprint_buffer_deg == 0.0005

    def test_default_timeouts_and_retries(self) -> None:
        cfg = RoofAreaConfig()
        assert cfg.source_timeout_s == 25.0
        assert cfg.source_max_retries == 1
        assert cfg.retry_backoff_s == 0.5

    def test_default_overpass_url(self) -> None:
        assert RoofAreaConfig().overpass_api_url == DEFAULT_OVERPASS_URL

    def test_default_tokens_empty(self) -> None:
        cfg = RoofAreaConfig()
        assert cfg.mapbox_secret_token == ""
        assert cfg.mapbox_public_token == ""


class TestRoofAreaConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        env = {
            "FOOTPRINT_SOURCES": "openstreetmap",
            "FOOTPRINT_BUFFER_DEG": "0.001",
            "SOURCE_TIMEOUT_S": "10",
            "SOURCE_MAX_RETRIES": "3",
            "SOURCE_RETRY_BACKOFF_S": "0",
            "OVERPASS_API_URL": "https://overpass.example/api/interpreter",
            "MAPBOX_SECRET_TOKEN": "sk.secret",
            "MAPBOX_PUBLIC_TOKEN": "pk.public",
            "GEOCODE_COUNTRY": "CA",
            "ENVIRONMENT": "production",
        }
        with patch.dict(os.environ, env, clear=False):
            cfg = RoofAreaConfig.from_env()

        assert cfg.footprint_sources == ("openstreetmap",)
        assert cfg.footprint_buffer_deg == 0.001
        assert cfg.source_timeout_s == 10.0
        assert cfg.source_max_retries == 3
        assert cfg.retry_backoff_s == 0.0
        assert cfg.overpass_api_url == "https://overpass.example/api/interpreter"
        assert cfg.mapbox_secret_token == "sk.secret"
        assert cfg.mapbox_public_token == "pk.public"
        assert cfg.geocode_country == "CA"
        assert cfg.environment == "production"

    def test_defaults_when_env_missing(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = RoofAreaConfig.from_env()
        assert cfg == RoofAreaConfig()

    def test_source_list_whitespace_trimmed(self) -> None:
        with patch.dict(os.environ, {"FOOTPRINT_SOURCES": " openstreetmap , microsoft_buildings ,"}):
            cfg = RoofAreaConfig.from_env()
        assert cfg.footprint_sources == ("openstreetmap", "microsoft_buildings")

    def test_non_numeric_timeout_raises_value_error(self) -> None:
        with patch.dict(os.environ, {"SOURCE_TIMEOUT_S": "abc"}), pytest.raises(ValueError):
            RoofAreaConfig.from_env()

    def test_config_is_frozen(self) -> None:
        cfg = RoofAreaConfig()
        with pytest.raises(AttributeError):
            cfg.source_timeout_s = 1.0  # type: ignore[misc]


class TestRoofAreaConfigValidation:
    """Fail-fast range validation."""

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("FOOTPRINT_SOURCES", " , "),
            ("FOOTPRINT_BUFFER_DEG", "0"),
            ("FOOTPRINT_BUFFER_DEG", "0.5"),
            ("SOURCE_TIMEOUT_S", "0"),
            ("SOURCE_MAX_RETRIES", "-1"),
            ("SOURCE_MAX_RETRIES", "6"),
            ("SOURCE_RETRY_BACKOFF_S", "-0.1"),
            ("OVERPASS_API_URL", ""),
        ],
    )
    def test_out_of_range_rejected(self, key: str, value: str) -> None:
        with patch.dict(os.environ, {key: value}), pytest.raises(ConfigValidationError) as ctx:
            RoofAreaConfig.from_env()
        assert ctx.value.key == key
        assert ctx.value.code == "CONFIG_VALIDATION_FAILED"
        assert key in str(ctx.value)

    def test_unknown_source_name_rejected_at_load(self) -> None:
        """A typo in FOOTPRINT_SOURCES fails at startup, not per request."""
        env = {"FOOTPRINT_SOURCES": "microsoft_buildngs,openstreetmap"}
        with patch.dict(os.environ, env), pytest.raises(ConfigValidationError) as ctx:
            RoofAreaConfig.from_env()
        assert ctx.value.key == "FOOTPRINT_SOURCES"
        assert "microsoft_buildngs" in ctx.value.message
        assert "available:" in ctx.value.message


class TestSourceConfigs:
    """RoofAreaConfig.source_configs derives one SourceConfig per source."""

    def test_priority_order_preserved(self) -> None:
        names = [sc.name for sc in RoofAreaConfig().source_configs()]
        assert names == ["microsoft_buildings", "openstreetmap"]

    def test_overpass_url_only_on_openstreetmap(self) -> None:
        cfg = RoofAreaConfig(overpass_api_url="https://overpass.example/api")
        by_name = {sc.name: sc for sc in cfg.source_configs()}
        assert by_name["openstreetmap"].api_base_url == "https://overpass.example/api"
        assert by_name["microsoft_buildings"].api_base_url == ""

    def test_timeout_threaded_through(self) -> None:
        cfg = RoofAreaConfig(source_timeout_s=7.5)
        assert all(sc.timeout_s == 7.5 for sc in cfg.source_configs())
