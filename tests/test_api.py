"""Tests for the HTTP API.

Providers are replaced through dependency overrides; the lifespan (which
opens real Open-Meteo clients) is not entered.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from weather_activities.api import create_app
from weather_activities.api.dependencies import (
    get_location_resolver,
    get_weather_provider,
)
from weather_activities.providers.base import RateLimitError


@pytest.fixture
def app(fake_weather_provider, fake_location_resolver):
    """Application wired to in-memory providers."""
    app = create_app()
    app.dependency_overrides[get_weather_provider] = lambda: fake_weather_provider
    app.dependency_overrides[get_location_resolver] = lambda: fake_location_resolver
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client: TestClient):
        """Test the health check reports the version."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "0.1.0"}


class TestCities:
    """Tests for city search and lookup."""

    def test_search(self, client: TestClient):
        """Test a matching query returns cities."""
        response = client.get("/api/cities", params={"query": "lon"})

        assert response.status_code == 200
        cities = response.json()
        assert len(cities) == 1
        assert cities[0]["name"] == "London"
        assert cities[0]["id"] == "51.5074:-0.1278"

    def test_search_not_found(self, client: TestClient):
        """Test an unmatched query returns 404 with CITY_NOT_FOUND."""
        response = client.get("/api/cities", params={"query": "Atlantis"})

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "CITY_NOT_FOUND"
        assert "London" in body["detail"]

    def test_search_requires_query(self, client: TestClient):
        """Test the query parameter is mandatory."""
        response = client.get("/api/cities")
        assert response.status_code == 422

    def test_get_city(self, client: TestClient):
        """Test looking up a city by 'lat:lon' id."""
        response = client.get("/api/cities/-33.9249:18.4241")

        assert response.status_code == 200
        assert response.json()["name"] == "Cape Town"

    def test_get_city_unknown(self, client: TestClient):
        """Test coordinates with no nearby city return 404."""
        response = client.get("/api/cities/10:10")
        assert response.status_code == 404
        assert response.json()["code"] == "CITY_NOT_FOUND"

    def test_get_city_invalid_id(self, client: TestClient):
        """Test a malformed id returns 400."""
        response = client.get("/api/cities/london")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_CITY_ID"


class TestForecast:
    """Tests for the forecast endpoint."""

    def test_get_forecast(self, client: TestClient, fake_weather_provider):
        """Test the daily forecast and its summary."""
        response = client.get("/api/forecast/-33.9249:18.4241")

        assert response.status_code == 200
        body = response.json()
        assert body["city"] == {
            "id": "-33.9249:18.4241",
            "name": "-33.92°, 18.42°",
            "country": "Unknown",
            "latitude": -33.9249,
            "longitude": 18.4241,
        }
        assert len(body["daily"]) == 3
        assert body["daily"][0]["date"] == "2026-02-06"
        assert body["summary"]["days"] == 3
        assert body["summary"]["precipitation_mm"] == pytest.approx(2.5)
        assert body["timezone"] == "Africa/Johannesburg"
        assert len(fake_weather_provider.calls) == 1

    @pytest.mark.parametrize("location_id", ["abc", "91:0", "1:2:3", "0:200"])
    def test_invalid_location_id(self, client: TestClient, location_id: str):
        """Test malformed or out-of-range ids return 400."""
        response = client.get(f"/api/forecast/{location_id}")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_CITY_ID"

    def test_provider_failure(self, app, failing_weather_provider):
        """Test upstream failures return 503 with WEATHER_FETCH_ERROR."""
        app.dependency_overrides[get_weather_provider] = lambda: failing_weather_provider
        response = TestClient(app).get("/api/forecast/0:0")

        assert response.status_code == 503
        assert response.json()["code"] == "WEATHER_FETCH_ERROR"


class TestActivityRanking:
    """Tests for the ranking endpoint."""

    def test_ranking(self, client: TestClient):
        """Test activities come back best first with a recommendation."""
        response = client.get("/api/activities/-33.9249:18.4241/ranking")

        assert response.status_code == 200
        body = response.json()
        assert [s["activity"] for s in body["scores"]] == [
            "SURFING",
            "OUTDOOR_SIGHTSEEING",
            "SKIING",
            "INDOOR_SIGHTSEEING",
        ]
        assert [s["score"] for s in body["scores"]] == [50, 30, 20, 0]
        assert body["recommended"] == "SURFING"
        assert body["city"]["id"] == "-33.9249:18.4241"
        assert body["summary"]["days"] == 3
        assert all(s["reason"] for s in body["scores"])

    def test_ranking_invalid_id(self, client: TestClient):
        """Test malformed ids return 400 before any forecast fetch."""
        response = client.get("/api/activities/not-a-city/ranking")
        assert response.status_code == 400

    def test_ranking_provider_failure(self, app, failing_weather_provider):
        """Test upstream failures return 503."""
        app.dependency_overrides[get_weather_provider] = lambda: failing_weather_provider
        response = TestClient(app).get("/api/activities/0:0/ranking")

        assert response.status_code == 503
        assert response.json()["code"] == "WEATHER_FETCH_ERROR"

    def test_ranking_rate_limited(self, app, fake_weather_provider):
        """Test upstream rate limiting returns 429 with Retry-After."""
        fake_weather_provider.error = RateLimitError("openmeteo", retry_after=60)
        response = TestClient(app).get("/api/activities/0:0/ranking")

        assert response.status_code == 429
        assert response.json()["code"] == "WEATHER_FETCH_ERROR"
        assert response.headers["Retry-After"] == "60"

    def test_ranking_empty_forecast(self, app, fake_weather_provider):
        """Test a forecast with no days returns 422 with INVALID_INPUT."""
        fake_weather_provider.forecast = fake_weather_provider.forecast.model_copy(
            update={"daily": []}
        )
        response = TestClient(app).get("/api/activities/0:0/ranking")

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_INPUT"

    def test_ranking_logs_recommendation(self, client: TestClient, caplog):
        """Test the HTTP path logs the chosen activity."""
        with caplog.at_level(logging.INFO, logger="weather_activities"):
            response = client.get("/api/activities/-33.9249:18.4241/ranking")

        assert response.status_code == 200
        assert "Recommended SURFING" in caplog.text
