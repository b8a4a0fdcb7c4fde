"""
Environment configuration for the Climate Risk Platform.

Uses pydantic-settings so every value can be overridden from the
environment or a .env file. The monitored roster is a plain constant that
callers pass explicitly into the batch evaluators.

Usage:
    from climate_risk.config import settings, DEFAULT_LOCATIONS
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from climate_risk.models import MonitoredLocation


class Settings(BaseSettings):
    """
    Application-wide settings loaded from environment variables or .env file.

    Precedence: env var > .env file > default value
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Application ──
    APP_NAME: str = "Climate Risk Intelligence API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # ── CORS ──
    CORS_ORIGINS: List[str] = ["*"]

    # ── External APIs ──
    OPEN_METEO_BASE_URL: str = "https://api.open-meteo.com/v1"
    OPEN_METEO_AIR_QUALITY_URL: str = "https://air-quality-api.open-meteo.com/v1"
    OPEN_ELEVATION_URL: str = "https://api.open-elevation.com/api/v1"
    REQUEST_TIMEOUT: int = 10  # seconds

    # ── Batch evaluation ──
    BATCH_MAX_WORKERS: int = 6
    TRIGGER_ACTIVATION: str = "always"  # always | signal | sampled


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


settings = get_settings()


# Monitored roster for the dashboard and the parametric trigger feed
DEFAULT_LOCATIONS = (
    MonitoredLocation("Miami, FL", 25.7617, -80.1918, flood_prone=True),
    MonitoredLocation("Los Angeles, CA", 34.0522, -118.2437, wildfire_prone=True),
    MonitoredLocation("Houston, TX", 29.7604, -95.3698, flood_prone=True),
    MonitoredLocation("New York, NY", 40.7128, -74.0060),
    MonitoredLocation("Denver, CO", 39.7392, -104.9903),
    MonitoredLocation("San Francisco, CA", 37.7749, -122.4194, wildfire_prone=True),
)
