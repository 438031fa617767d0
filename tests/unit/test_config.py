"""Tests for configuration module."""

import os
from unittest.mock import patch

import pytest
from psy_mantis.config import (
    LoggingConfig,
    Settings,
    SteamAPIConfig,
    TransportConfig,
)
from psy_mantis.steam.http.errors import ConfigurationError


class TestSteamAPIConfig:
    """Tests for Steam API configuration."""

    def test_api_key_optional_at_load(self) -> None:
        """Test that a missing key does not break loading."""
        with patch.dict(os.environ, {}, clear=True):
            config = SteamAPIConfig()

        assert config.api_key is None

    def test_api_key_secret(self) -> None:
        """Test that API key is stored as secret."""
        with patch.dict(os.environ, {"STEAM_API_KEY": "secret_key_123"}):
            config = SteamAPIConfig()

        assert config.api_key is not None
        assert "secret_key_123" not in repr(config.api_key)
        assert config.api_key.get_secret_value() == "secret_key_123"


class TestTransportConfig:
    """Tests for transport configuration."""

    def test_default_values(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = TransportConfig()

        assert config.open_timeout == 3.0
        assert config.read_timeout == 5.0
        assert config.max_retries == 2
        assert config.base_backoff == 0.5
        assert config.jitter is True

    def test_env_overrides(self) -> None:
        with patch.dict(
            os.environ,
            {"STEAM_HTTP_MAX_RETRIES": "5", "STEAM_HTTP_JITTER": "false"},
        ):
            config = TransportConfig()

        assert config.max_retries == 5
        assert config.jitter is False

    def test_bounds(self) -> None:
        with pytest.raises(ValueError):
            TransportConfig(max_retries=-1)

        with pytest.raises(ValueError):
            TransportConfig(open_timeout=0)

        with pytest.raises(ValueError):
            TransportConfig(base_backoff=-0.5)


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_valid_levels(self) -> None:
        """Test valid log levels."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            with patch.dict(os.environ, {"LOG_LEVEL": level}):
                config = LoggingConfig()
                assert config.level == level

    def test_level_is_case_insensitive(self) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            assert LoggingConfig().level == "DEBUG"

        with patch.dict(os.environ, {"LOG_LEVEL": "warn"}):
            assert LoggingConfig().level == "WARNING"

    def test_invalid_level_falls_back_to_info(self) -> None:
        with (
            patch.dict(os.environ, {"LOG_LEVEL": "verbose"}),
            pytest.warns(UserWarning, match="Invalid LOG_LEVEL"),
        ):
            config = LoggingConfig()

        assert config.level == "INFO"

    def test_valid_formats(self) -> None:
        """Test valid log formats."""
        for fmt in ["json", "console"]:
            with patch.dict(os.environ, {"LOG_FORMAT": fmt}):
                config = LoggingConfig()
                assert config.format == fmt


class TestSettings:
    """Tests for the aggregated settings."""

    def test_require_steam_api_key(self) -> None:
        settings = Settings(steam=SteamAPIConfig(api_key="abc123"))

        assert settings.require_steam_api_key() == "abc123"

    def test_require_steam_api_key_missing(self) -> None:
        settings = Settings(steam=SteamAPIConfig(api_key=None))

        with pytest.raises(ConfigurationError, match="STEAM_API_KEY"):
            settings.require_steam_api_key()

    def test_require_steam_api_key_blank(self) -> None:
        settings = Settings(steam=SteamAPIConfig(api_key="   "))

        with pytest.raises(ConfigurationError):
            settings.require_steam_api_key()

    def test_environment(self) -> None:
        assert Settings(environment="production").is_production is True
        assert Settings(environment="test").is_test is True

        with pytest.raises(ValueError):
            Settings(environment="qa")
