"""Weather forecast routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from weather_activities.api.dependencies import get_coordinates, get_weather_provider
from weather_activities.models.location import City, Coordinates
from weather_activities.models.weather import DailyObservation, WeatherSummary
from weather_activities.providers.base import WeatherProvider

router = APIRouter()


class ForecastResponse(BaseModel):
    """Daily forecast for a location."""

    city: City
    daily: list[DailyObservation]
    summary: WeatherSummary
    timezone: str | None = None


@router.get("/{location_id}", response_model=ForecastResponse)
async def get_forecast(
    coordinates: Coordinates = Depends(get_coordinates),
    provider: WeatherProvider = Depends(get_weather_provider),
) -> ForecastResponse:
    """Get the daily forecast and its period average for coordinates."""
    forecast = await provider.get_forecast(coordinates)

    return ForecastResponse(
        city=City.from_coordinates(coordinates),
        daily=forecast.daily,
        summary=forecast.summarize(),
        timezone=forecast.timezone,
    )
