"""Weather and location data providers."""

from weather_activities.providers.base import (
    LocationNotFoundError,
    LocationResolver,
    ProviderError,
    RateLimitError,
    WeatherProvider,
)
from weather_activities.providers.openmeteo import OpenMeteoGeocoder, OpenMeteoProvider

__all__ = [
    "LocationNotFoundError",
    "LocationResolver",
    "ProviderError",
    "RateLimitError",
    "WeatherProvider",
    "OpenMeteoGeocoder",
    "OpenMeteoProvider",
]
