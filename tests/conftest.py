"""Pytest fixtures for weather activity recommendation tests.

This module provides test fixtures that ensure:
1. No external API calls are made (Open-Meteo is stubbed with httpx.MockTransport)
2. Isolated test environment with controlled configuration
"""

import os
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone

import httpx
import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("OPENMETEO_FORECAST_URL", "https://forecast.test")
os.environ.setdefault("OPENMETEO_GEOCODING_URL", "https://geocoding.test")

from weather_activities.models.location import City, Coordinates
from weather_activities.models.weather import (
    DailyObservation,
    Forecast,
    WeatherSummary,
)
from weather_activities.providers.base import (
    LocationNotFoundError,
    LocationResolver,
    ProviderError,
    WeatherProvider,
)


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from weather_activities.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Open-Meteo Stubs
# =============================================================================


@pytest.fixture
def openmeteo_forecast_payload() -> dict:
    """Three-day Open-Meteo daily forecast for Cape Town."""
    return {
        "latitude": -33.9249,
        "longitude": 18.4241,
        "timezone": "Africa/Johannesburg",
        "elevation": 12.0,
        "daily": {
            "time": ["2026-02-06", "2026-02-07", "2026-02-08"],
            "temperature_2m_max": [26.5, 25.0, 24.5],
            "temperature_2m_min": [18.2, 17.5, 16.8],
            "precipitation_sum": [0.0, 2.5, 5.0],
            "windspeed_10m_max": [22.5, 25.0, 28.5],
        },
    }


@pytest.fixture
def openmeteo_search_payload() -> dict:
    """Open-Meteo geocoding search results for 'London'."""
    return {
        "results": [
            {
                "id": 2643743,
                "name": "London",
                "country": "United Kingdom",
                "latitude": 51.50853,
                "longitude": -0.12574,
                "admin1": "England",
            },
            {
                "id": 6058560,
                "name": "London",
                "country": "Canada",
                "latitude": 42.98339,
                "longitude": -81.23304,
                "admin1": "Ontario",
            },
        ]
    }


@pytest.fixture
def mock_transport() -> Callable[..., httpx.MockTransport]:
    """Build an httpx.MockTransport that records requests.

    Usage:
        transport = mock_transport(json={...}, status_code=200)
        transport.requests  # list of httpx.Request seen
    """

    def factory(
        json: dict | None = None,
        status_code: int = 200,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text, headers=headers)
            return httpx.Response(status_code, json=json or {}, headers=headers)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return factory


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def sample_coordinates() -> Coordinates:
    """Sample coordinates for Cape Town."""
    return Coordinates(latitude=-33.9249, longitude=18.4241)


@pytest.fixture
def sample_observations() -> list[DailyObservation]:
    """Three days of mild, breezy Cape Town weather."""
    return [
        DailyObservation(
            date=date(2026, 2, 6),
            temperature_max_c=26.5,
            temperature_min_c=18.2,
            precipitation_mm=0.0,
            wind_speed_max_kmh=22.5,
        ),
        DailyObservation(
            date=date(2026, 2, 7),
            temperature_max_c=25.0,
            temperature_min_c=17.5,
            precipitation_mm=2.5,
            wind_speed_max_kmh=25.0,
        ),
        DailyObservation(
            date=date(2026, 2, 8),
            temperature_max_c=24.5,
            temperature_min_c=16.8,
            precipitation_mm=5.0,
            wind_speed_max_kmh=28.5,
        ),
    ]


@pytest.fixture
def sample_forecast(
    sample_coordinates: Coordinates,
    sample_observations: list[DailyObservation],
) -> Forecast:
    """Sample forecast wrapping the three sample observations."""
    return Forecast(
        location=sample_coordinates,
        generated_at=datetime(2026, 2, 6, 6, 0, tzinfo=timezone.utc),
        provider="test",
        daily=sample_observations,
        timezone="Africa/Johannesburg",
    )


@pytest.fixture
def surfing_summary() -> WeatherSummary:
    """Warm, dry and windy: every surfing rule is satisfied."""
    return WeatherSummary(
        temperature_max_c=22, temperature_min_c=18, precipitation_mm=0.5, wind_speed_max_kmh=30
    )


@pytest.fixture
def skiing_summary() -> WeatherSummary:
    """Cold with heavy precipitation: every skiing rule is satisfied."""
    return WeatherSummary(
        temperature_max_c=2, temperature_min_c=-5, precipitation_mm=5, wind_speed_max_kmh=15
    )


@pytest.fixture
def sightseeing_summary() -> WeatherSummary:
    """Dry and comfortable: every outdoor sightseeing rule is satisfied."""
    return WeatherSummary(
        temperature_max_c=24, temperature_min_c=18, precipitation_mm=0.2, wind_speed_max_kmh=10
    )


@pytest.fixture
def stormy_summary() -> WeatherSummary:
    """Heavy rain and strong wind: every indoor sightseeing rule is satisfied."""
    return WeatherSummary(
        temperature_max_c=15, temperature_min_c=10, precipitation_mm=8, wind_speed_max_kmh=35
    )


# =============================================================================
# Fake Providers
# =============================================================================


class FakeWeatherProvider(WeatherProvider):
    """In-memory forecast provider."""

    name = "fake"
    base_url = "https://fake.test"

    def __init__(self, forecast: Forecast | None = None, error: Exception | None = None):
        super().__init__()
        self.forecast = forecast
        self.error = error
        self.calls: list[Coordinates] = []

    async def get_forecast(self, coordinates: Coordinates) -> Forecast:
        self.calls.append(coordinates)
        if self.error:
            raise self.error
        return self.forecast.model_copy(update={"location": coordinates})

    def _translate_response(self, response_data, coordinates):
        raise NotImplementedError


class FakeLocationResolver(LocationResolver):
    """In-memory location resolver."""

    name = "fake-geocoding"
    base_url = "https://fake.test"

    def __init__(self, cities: list[City] | None = None):
        super().__init__()
        self.cities = cities or []

    async def search(self, query: str) -> list[City]:
        matches = [c for c in self.cities if query.strip() and query.lower() in c.name.lower()]
        if not matches:
            raise LocationNotFoundError(query)
        return matches

    async def reverse(self, coordinates: Coordinates) -> City | None:
        for city in self.cities:
            if city.coordinates == coordinates:
                return city
        return None


@pytest.fixture
def fake_weather_provider(sample_forecast: Forecast) -> FakeWeatherProvider:
    """Forecast provider returning the sample forecast."""
    return FakeWeatherProvider(forecast=sample_forecast)


@pytest.fixture
def failing_weather_provider() -> FakeWeatherProvider:
    """Forecast provider that always fails."""
    return FakeWeatherProvider(
        error=ProviderError("API request failed: 500", provider="fake", status_code=500)
    )


@pytest.fixture
def fake_location_resolver() -> FakeLocationResolver:
    """Location resolver that knows London and Cape Town."""
    return FakeLocationResolver(
        cities=[
            City(
                id="51.5074:-0.1278",
                name="London",
                country="United Kingdom",
                latitude=51.5074,
                longitude=-0.1278,
            ),
            City(
                id="-33.9249:18.4241",
                name="Cape Town",
                country="South Africa",
                latitude=-33.9249,
                longitude=18.4241,
            ),
        ]
    )


@pytest.fixture
def make_observations() -> Callable[..., list[DailyObservation]]:
    """Factory for `count` identical daily observations starting 2026-01-01."""

    def factory(count: int, **overrides: float) -> list[DailyObservation]:
        values = {
            "temperature_max_c": 20.0,
            "temperature_min_c": 10.0,
            "precipitation_mm": 0.0,
            "wind_speed_max_kmh": 10.0,
        }
        values.update(overrides)
        return [
            DailyObservation(date=date(2026, 1, 1) + timedelta(days=i), **values)
            for i in range(count)
        ]

    return factory
