"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation,
type coercion, and sensible defaults.
"""

import warnings
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SteamAPIConfig(BaseSettings):
    """Steam API specific configuration."""

    model_config = SettingsConfigDict(env_prefix="STEAM_")

    api_key: SecretStr | None = Field(
        default=None,
        description="Steam Web API key from https://steamcommunity.com/dev/apikey",
    )


class TransportConfig(BaseSettings):
    """Timeouts and retry behavior for each upstream origin."""

    model_config = SettingsConfigDict(env_prefix="STEAM_HTTP_")

    open_timeout: float = Field(
        default=3.0,
        gt=0,
        description="Connect timeout in seconds",
    )
    read_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Response timeout in seconds",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Additional attempts after the first one",
    )
    base_backoff: float = Field(
        default=0.5,
        ge=0.0,
        description="Base delay between retries (exponential backoff)",
    )
    jitter: bool = Field(
        default=True,
        description="Randomize each backoff delay within +/-20%",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    include_timestamp: bool = Field(
        default=True,
        description="Include timestamp in log entries",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> str:
        """Accept any casing and fall back to INFO for unknown levels."""
        level = str(v).strip().upper()
        if level == "WARN":
            return "WARNING"
        if level not in LOG_LEVELS:
            warnings.warn(f"Invalid LOG_LEVEL '{v}', defaulting to INFO", stacklevel=2)
            return "INFO"
        return level


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections and provides
    a single entry point for configuration access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "test", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )

    # Sub-configurations
    steam: SteamAPIConfig = Field(default_factory=SteamAPIConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    def require_steam_api_key(self) -> str:
        """
        Return the plain Steam API key.

        Raises:
            ConfigurationError: If STEAM_API_KEY is unset or blank
        """
        from psy_mantis.steam.http.errors import ConfigurationError

        key = self.steam.api_key.get_secret_value() if self.steam.api_key else ""
        if not key.strip():
            raise ConfigurationError("STEAM_API_KEY is required but was not set")
        return key


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused across the application.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
