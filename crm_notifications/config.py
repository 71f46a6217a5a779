"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./crm_notifications.db",
        description="Database connection URL used by SQLAlchemy for the preferences store",
        min_length=1,
    )
    app_name: str = Field(
        default="CRM Pro",
        description="Product name shown in the welcome notification",
        min_length=1,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone (or UTC±HH:MM offset) used to evaluate quiet hours",
    )
    weekly_report_weekday: int = Field(
        default=0,
        description="Weekday the weekly report notification appears on (0 = Monday)",
        ge=0,
        le=6,
    )
    high_value_deal_threshold: float = Field(
        default=50000,
        description="Minimum deal value that raises a high-value proposal alert",
        gt=0,
    )
    deal_closing_window_days: int = Field(
        default=7,
        description="Number of days ahead a deal close date raises a closing-soon alert",
        ge=0,
    )
    notification_engine_capacity: int = Field(
        default=1000,
        description="Maximum number of per-user notification feeds kept in memory",
        ge=1,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
