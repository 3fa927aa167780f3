"""Open-Meteo forecast and geocoding providers.

## API Documentation Summary
Source: https://open-meteo.com/en/docs
Source: https://open-meteo.com/en/docs/geocoding-api

## Endpoints
- Forecast: https://api.open-meteo.com/v1/forecast
- Geocoding search: https://geocoding-api.open-meteo.com/v1/search
- Reverse geocoding: https://geocoding-api.open-meteo.com/v1/reverse

## Authentication
- No API key required for non-commercial use

## Rate Limiting
- 10,000 requests/day (non-commercial)

## Forecast Response Format
Daily values come back as parallel arrays, one entry per day:
```json
{
  "latitude": -33.92,
  "longitude": 18.42,
  "timezone": "Africa/Johannesburg",
  "elevation": 12.0,
  "daily": {
    "time": ["2026-02-06", "2026-02-07"],
    "temperature_2m_max": [26.5, 25.0],
    "temperature_2m_min": [18.2, 17.5],
    "precipitation_sum": [0.0, 2.5],
    "windspeed_10m_max": [22.5, 25.0]
  }
}
```

## Variable Translation (Open-Meteo -> Canonical)
| Open-Meteo Field | Canonical Field | Unit |
|------------------|-----------------|------|
| time | date | ISO date |
| temperature_2m_max | temperature_max_c | °C (2m above ground) |
| temperature_2m_min | temperature_min_c | °C (2m above ground) |
| precipitation_sum | precipitation_mm | mm |
| windspeed_10m_max | wind_speed_max_kmh | km/h (10m above ground) |

Any value may be null when the model has no data for that day; such days
are skipped.

## Geocoding Response Format
```json
{
  "results": [
    {"id": 2643743, "name": "London", "country": "United Kingdom",
     "latitude": 51.50853, "longitude": -0.12574, "admin1": "England"}
  ]
}
```
The `results` key is absent when nothing matches.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

from pydantic import ValidationError

from weather_activities.models.location import City, Coordinates
from weather_activities.models.weather import DailyObservation, Forecast
from weather_activities.providers.base import (
    LocationNotFoundError,
    LocationResolver,
    ProviderError,
    WeatherProvider,
)

logger = logging.getLogger(__name__)

# Canonical field -> Open-Meteo daily variable
DAILY_VARIABLES: dict[str, str] = {
    "temperature_max_c": "temperature_2m_max",
    "temperature_min_c": "temperature_2m_min",
    "precipitation_mm": "precipitation_sum",
    "wind_speed_max_kmh": "windspeed_10m_max",
}


class OpenMeteoProvider(WeatherProvider):
    """Open-Meteo daily forecast provider.

    Example:
        ```python
        async with OpenMeteoProvider(forecast_days=7) as provider:
            forecast = await provider.get_forecast(
                Coordinates(latitude=-33.9249, longitude=18.4241)
            )
        ```
    """

    name = "openmeteo"
    base_url = "https://api.open-meteo.com"

    async def get_forecast(self, coordinates: Coordinates) -> Forecast:
        """Get the daily forecast from Open-Meteo.

        Args:
            coordinates: Location (lat/lon)

        Returns:
            Forecast with one DailyObservation per complete day

        Raises:
            ProviderError: If the request fails or no complete day is returned
        """
        params = {
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
            "daily": ",".join(DAILY_VARIABLES.values()),
            "timezone": "auto",
            "forecast_days": self.forecast_days,
        }

        response = await self._fetch(f"{self.base_url}/v1/forecast", params=params)
        data = self._parse_json(response)

        return self._translate_response(data, coordinates)

    def _translate_response(
        self,
        response_data: dict[str, Any],
        coordinates: Coordinates,
    ) -> Forecast:
        """Translate Open-Meteo parallel daily arrays to canonical format.

        See module docstring for detailed field mapping.
        """
        daily_block = response_data.get("daily") or {}
        if not isinstance(daily_block, dict):
            raise ProviderError(
                "Unexpected forecast shape: 'daily' is not an object",
                provider=self.name,
            )

        series_by_field: dict[str, list] = {}
        for field_name, variable in {"time": "time", **DAILY_VARIABLES}.items():
            series = daily_block.get(variable) or []
            if not isinstance(series, list):
                raise ProviderError(
                    f"Unexpected forecast shape: '{variable}' is not an array",
                    provider=self.name,
                )
            series_by_field[field_name] = series

        daily: list[DailyObservation] = []

        for index, time_str in enumerate(series_by_field.pop("time")):
            try:
                day = date.fromisoformat(time_str)
            except (TypeError, ValueError):
                logger.warning(f"{self.name}: skipping day with bad date {time_str!r}")
                continue

            values = {
                field_name: series[index] if index < len(series) else None
                for field_name, series in series_by_field.items()
            }
            if any(value is None for value in values.values()):
                logger.warning(f"{self.name}: skipping incomplete day {day.isoformat()}")
                continue

            try:
                daily.append(DailyObservation(date=day, **values))
            except ValidationError as e:
                logger.warning(
                    f"{self.name}: skipping invalid day {day.isoformat()}: "
                    f"{e.error_count()} bad value(s)"
                )

        if not daily:
            raise ProviderError(
                "Forecast response contained no complete days",
                provider=self.name,
            )

        try:
            return Forecast(
                location=coordinates,
                generated_at=datetime.now(timezone.utc),
                provider=self.name,
                daily=daily,
                timezone=response_data.get("timezone"),
                elevation_m=response_data.get("elevation"),
                raw_response=response_data,
            )
        except ValidationError as e:
            raise ProviderError(
                f"Malformed forecast metadata: {e}",
                provider=self.name,
            ) from e

    def get_max_forecast_days(self) -> int:
        """Open-Meteo provides up to 16 days of forecast."""
        return 16


class OpenMeteoGeocoder(LocationResolver):
    """Open-Meteo geocoding: city search and reverse lookup."""

    name = "openmeteo-geocoding"
    base_url = "https://geocoding-api.open-meteo.com"

    def __init__(self, count: int = 10, language: str = "en", **kwargs: Any):
        """Initialize the geocoder.

        Args:
            count: Maximum number of search results
            language: Language code for place names
            **kwargs: Passed to BaseProvider (base_url, timeout, transport, ...)
        """
        super().__init__(**kwargs)
        self.count = count
        self.language = language

    async def search(self, query: str) -> list[City]:
        """Search cities by name, best match first.

        Raises:
            LocationNotFoundError: If the query is blank or matches nothing
            ProviderError: If the request fails
        """
        query = query.strip()
        if not query:
            raise LocationNotFoundError(query)

        response = await self._fetch(
            f"{self.base_url}/v1/search",
            params={
                "name": query,
                "count": self.count,
                "language": self.language,
                "format": "json",
            },
        )
        results = self._parse_json(response).get("results") or []

        cities = [self._translate_result(r) for r in results]
        if not cities:
            raise LocationNotFoundError(query)
        return cities

    async def reverse(self, coordinates: Coordinates) -> City | None:
        """Get the nearest city for coordinates, or None if none is known."""
        try:
            response = await self._fetch(
                f"{self.base_url}/v1/reverse",
                params={
                    "latitude": coordinates.latitude,
                    "longitude": coordinates.longitude,
                    "count": 1,
                    "language": self.language,
                    "format": "json",
                },
            )
        except ProviderError as e:
            # No nearby place: callers fall back to coordinate-only info
            if e.status_code == 404:
                return None
            raise

        results = self._parse_json(response).get("results") or []
        if not results:
            return None
        return self._translate_result(results[0])

    def _translate_result(self, result: dict[str, Any]) -> City:
        """Translate a geocoding result to a City.

        The city id is the 'latitude:longitude' identifier so it can be passed
        straight back to the forecast and ranking endpoints.
        """
        try:
            coordinates = Coordinates(
                latitude=result["latitude"], longitude=result["longitude"]
            )
            name = result["name"]
        except (KeyError, ValueError) as e:
            raise ProviderError(
                f"Malformed geocoding result: {e}",
                provider=self.name,
            ) from e

        return City(
            id=coordinates.to_location_id(),
            name=name,
            country=result.get("country") or "Unknown",
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
        )
