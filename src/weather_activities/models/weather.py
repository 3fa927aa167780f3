"""Weather and forecast models."""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field

from weather_activities.models.location import Coordinates


class DailyObservation(BaseModel):
    """Weather forecast for a single day.

    Units follow the Open-Meteo daily aggregates: temperatures in °C,
    precipitation as a daily sum in mm, wind as the daily maximum in km/h
    measured 10m above ground.
    """

    model_config = {"frozen": True}

    date: dt.date = Field(..., description="Calendar date of the observation")
    temperature_max_c: float = Field(..., description="Daily high in Celsius")
    temperature_min_c: float = Field(..., description="Daily low in Celsius")
    precipitation_mm: float = Field(
        ..., ge=0, description="Total precipitation in millimeters"
    )
    wind_speed_max_kmh: float = Field(
        ..., ge=0, description="Maximum wind speed in kilometers per hour"
    )


class WeatherSummary(BaseModel):
    """Period-averaged weather for a forecast window.

    Each weather field is the arithmetic mean of the corresponding
    DailyObservation field. Values are not rounded so that threshold
    comparisons see full precision.
    """

    model_config = {"frozen": True}

    temperature_max_c: float = Field(..., description="Mean daily high in Celsius")
    temperature_min_c: float = Field(..., description="Mean daily low in Celsius")
    precipitation_mm: float = Field(..., ge=0, description="Mean daily precipitation in mm")
    wind_speed_max_kmh: float = Field(
        ..., ge=0, description="Mean daily maximum wind speed in km/h"
    )
    days: int = Field(default=1, ge=1, description="Number of days averaged")


class Forecast(BaseModel):
    """Multi-day weather forecast for a location."""

    location: Coordinates = Field(..., description="Location of the forecast")
    generated_at: dt.datetime = Field(..., description="When the forecast was generated")
    provider: str = Field(..., description="Weather data provider name")

    daily: list[DailyObservation] = Field(
        default_factory=list, description="Daily forecast data, in date order"
    )

    # Metadata
    timezone: str | None = Field(
        default=None, description="Timezone for the forecast location"
    )
    elevation_m: float | None = Field(
        default=None, description="Elevation in meters"
    )
    raw_response: dict[str, Any] | None = Field(
        default=None, description="Raw response from provider", exclude=True
    )

    @property
    def days(self) -> int:
        """Number of days covered by the forecast."""
        return len(self.daily)

    def get_day(self, day: dt.date) -> DailyObservation | None:
        """Get the observation for a specific date."""
        for observation in self.daily:
            if observation.date == day:
                return observation
        return None

    def summarize(self) -> WeatherSummary:
        """Average the whole forecast window into one summary.

        Raises:
            InvalidInputError: If the forecast has no days
        """
        from weather_activities.recommendations.aggregator import aggregate

        return aggregate(self.daily)
