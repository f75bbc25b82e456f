"""Application configuration using pydantic-settings.

This module provides environment-based configuration for the LogDimmer
process. User facing settings (opacity, color, toggle) are persisted
separately by ``logdimmer.settings``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class LogDimmerConfig(BaseSettings):
    """Application configuration loaded from environment variables.

    All configuration values can be overridden via environment variables
    prefixed with LOGDIMMER_ (e.g., LOGDIMMER_LOG_LEVEL=DEBUG).
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGDIMMER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="json",
        description="Log format: 'json' for structured logging or 'text' for human-readable",
    )

    # UI Settings
    default_window_width: int = Field(
        default=1000,
        description="Default window width in pixels",
    )
    default_window_height: int = Field(
        default=800,
        description="Default window height in pixels",
    )
    default_font_size: int = Field(
        default=10,
        description="Font size for source code in editors",
    )
    notification_timeout_ms: int = Field(
        default=5000,
        description="How long command confirmations stay in the status bar",
    )


_config: LogDimmerConfig | None = None


def get_config() -> LogDimmerConfig:
    """Get the global configuration instance.

    Returns:
        The application configuration singleton.
    """
    global _config
    if _config is None:
        _config = LogDimmerConfig()
    return _config


def reload_config() -> LogDimmerConfig:
    """Reload configuration from environment.

    Returns:
        The reloaded configuration instance.
    """
    global _config
    _config = LogDimmerConfig()
    return _config
