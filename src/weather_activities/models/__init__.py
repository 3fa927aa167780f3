"""Domain models for weather activity recommendations."""

from weather_activities.models.location import (
    City,
    Coordinates,
    InvalidLocationIdError,
)
from weather_activities.models.weather import (
    DailyObservation,
    Forecast,
    WeatherSummary,
)
from weather_activities.models.activity import (
    ActivityRanking,
    ActivityScore,
    ActivityType,
)

__all__ = [
    # Location
    "City",
    "Coordinates",
    "InvalidLocationIdError",
    # Weather
    "DailyObservation",
    "Forecast",
    "WeatherSummary",
    # Activity
    "ActivityRanking",
    "ActivityScore",
    "ActivityType",
]
