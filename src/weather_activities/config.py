"""Application configuration.

Configuration is loaded from environment variables (or a `.env` file) using
pydantic-settings. Nothing is required: every setting has a default that
works against the public Open-Meteo endpoints.

## Optional Environment Variables

- OPENMETEO_FORECAST_URL: Forecast API base URL
- OPENMETEO_GEOCODING_URL: Geocoding API base URL
- FORECAST_DAYS: Days in the forecast window (default: 7)
- SEARCH_RESULT_COUNT: Maximum city search results (default: 10)
- LOG_LEVEL: Logging level (default: INFO)
- DEBUG: Enable debug mode and API docs (default: false)

## Example .env file

```
OPENMETEO_FORECAST_URL=https://api.open-meteo.com
OPENMETEO_GEOCODING_URL=https://geocoding-api.open-meteo.com
FORECAST_DAYS=7
LOG_LEVEL=DEBUG
```
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Weather Activity Recommendations"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="CORS allowed origins",
    )

    # Open-Meteo
    openmeteo_forecast_url: str = "https://api.open-meteo.com"
    openmeteo_geocoding_url: str = "https://geocoding-api.open-meteo.com"
    forecast_days: int = Field(default=7, ge=1, le=16)
    search_result_count: int = Field(default=10, ge=1, le=100)
    search_language: str = "en"

    # HTTP
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    request_max_attempts: int = Field(default=3, ge=1, le=10)
    user_agent: str = "weather-activities/0.1.0"

    @field_validator("openmeteo_forecast_url", "openmeteo_geocoding_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended directly."""
        return v.rstrip("/") if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is one the logging module knows."""
        level = str(v).upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


def get_settings_uncached() -> Settings:
    """Get fresh settings without caching.

    Useful for testing when environment variables change.
    """
    return Settings()
