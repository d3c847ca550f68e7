"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./portfolio.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name (or UTC+HH:MM offset) used for timestamps",
    )
    cors_origins: str = Field(
        default="",
        description="Comma separated origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    realtime_interval_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Seconds between two snapshots pushed on a live-update channel",
    )
    notification_snapshot_limit: int = Field(
        default=50,
        gt=0,
        description="Maximum number of unread notifications included in a snapshot",
    )
    notification_page_size: int = Field(default=20, gt=0)
    activity_page_size: int = Field(default=10, gt=0)
    max_page_size: int = Field(default=100, gt=0)

    activity_retention_seconds: int = Field(
        default=604800,
        gt=0,
        description="Age after which activity records are purged (7 days)",
    )
    activity_sweep_interval_seconds: float = Field(
        default=3600.0,
        gt=0,
        description="Seconds between two runs of the activity retention sweeper",
    )
    analytics_active_window_seconds: int = Field(
        default=300,
        gt=0,
        description="A visitor session counts as active if seen within this window",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        """Return ``cors_origins`` split into individual origins."""

        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
