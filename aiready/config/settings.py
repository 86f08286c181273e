"""
Configuration for the aiready observability core.

Single source of truth for the handful of environment settings the logging
layer consumes, using pydantic-settings.

ARCHITECTURAL PRINCIPLES:
- Only this module reads environment variables
- Everything else receives a LoggingSettings instance via dependency injection
- Values are passed through as-is; create_logger() decides what is valid
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from aiready import __version__


DEFAULT_SERVICE_NAME = "next-ai-ready"
DEFAULT_HEALTH_CHECK_PATH = "/api/health"


class LoggingSettings(BaseSettings):
    """Logging and request-observability configuration"""

    # Running environment: development | production | test
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )

    # Minimum level override, one of the six level names
    log_level: Optional[str] = Field(default=None, validation_alias="LOG_LEVEL")
    log_pretty: bool = Field(default=False, validation_alias="LOG_PRETTY")

    # Static base fields
    service_name: str = Field(default=DEFAULT_SERVICE_NAME, validation_alias="SERVICE_NAME")
    service_version: str = Field(default=__version__, validation_alias="SERVICE_VERSION")
    hostname: str = Field(default="localhost", validation_alias="HOSTNAME")

    # Request middleware
    health_check_path: str = Field(
        default=DEFAULT_HEALTH_CHECK_PATH, validation_alias="HEALTH_CHECK_PATH"
    )

    # OpenTelemetry correlation
    include_trace_context: bool = Field(default=True, validation_alias="INCLUDE_TRACE_ID")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


_settings_instance: Optional[LoggingSettings] = None


def get_settings() -> LoggingSettings:
    """
    Get the process settings instance.

    Built once on first use at process entry. Components should receive the
    instance (or a logger built from it) rather than calling this themselves.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = LoggingSettings()
    return _settings_instance


def reset_settings() -> None:
    """Reset settings instance (primarily for testing)."""
    global _settings_instance
    _settings_instance = None


class ServerSettings(BaseSettings):
    """Core server configuration"""
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")
    reload: bool = Field(default=False, validation_alias="RELOAD")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)
