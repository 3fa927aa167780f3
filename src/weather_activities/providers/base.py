"""Base provider abstractions.

This module defines the interfaces for the two external collaborators the
recommendation core depends on, plus the HTTP plumbing they share:

- ``WeatherProvider``: supplies a multi-day forecast for a coordinate pair
- ``LocationResolver``: turns free text into candidate cities, and
  coordinates back into a city

## Canonical Data Format

All weather providers must translate their API responses into the canonical
`Forecast` model in `weather_activities.models.weather`.

### Canonical Units
- Temperature: Celsius (°C)
- Wind speed: kilometers per hour (km/h), daily maximum
- Precipitation: millimeters (mm), daily sum

### Translation Requirements
Each weather provider must implement `_translate_response()` to convert its
specific API response into a `Forecast` with at least one complete day.

## Error Handling

Every failure to obtain data surfaces as a `ProviderError` (or a subclass),
carrying a machine-readable `code`. Timeouts and network errors are retried
with exponential backoff before giving up.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from weather_activities.models.location import City, Coordinates
from weather_activities.models.weather import Forecast

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base exception for provider errors (data could not be fetched)."""

    code = "WEATHER_FETCH_ERROR"

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class RateLimitError(ProviderError):
    """Raised when provider rate limit is exceeded."""

    def __init__(
        self,
        provider: str,
        retry_after: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            status_code=status_code,
        )
        self.retry_after = retry_after


class LocationNotFoundError(Exception):
    """Raised when a location query matches nothing."""

    code = "CITY_NOT_FOUND"

    def __init__(self, query: str):
        super().__init__(
            f'No cities found matching "{query}". Try searching for major '
            'cities like "London", "Paris", or "New York".'
        )
        self.query = query


class BaseProvider:
    """Shared HTTP client lifecycle and retrying fetch for providers.

    Attributes:
        name: Human-readable provider name
        base_url: Base URL for the API
    """

    name: str
    base_url: str

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
        max_attempts: int = 3,
        retry_wait_seconds: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the provider.

        Args:
            base_url: Override the provider's default base URL
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
            max_attempts: Attempts per request on timeouts and network errors
            retry_wait_seconds: Multiplier for exponential backoff between attempts
            transport: Custom httpx transport (used to stub the API in tests)
        """
        if base_url:
            self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent or "weather-activities/0.1.0"
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_wait_seconds = retry_wait_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> BaseProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    def _retrying(self) -> AsyncRetrying:
        """Retry policy for transient transport failures."""
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.retry_wait_seconds, max=10),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            reraise=True,
        )

    async def _fetch(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """GET a URL, retrying timeouts and network errors.

        HTTP error statuses are not retried; they are mapped by
        `_check_status`.

        Raises:
            ProviderError: If the request never succeeds or returns an error status
            RateLimitError: On HTTP 429
        """
        client = self._get_client()
        merged_headers = {**self._get_default_headers(), **(headers or {})}

        logger.debug(f"{self.name}: GET {url} params={params}")

        try:
            async for attempt in self._retrying():
                with attempt:
                    response = await client.get(url, params=params, headers=merged_headers)
        except httpx.HTTPError as e:
            raise ProviderError(
                f"Request to {self.name} failed: {e}",
                provider=self.name,
            ) from e

        self._check_status(response)
        return response

    def _check_status(self, response: httpx.Response) -> None:
        """Raise the matching provider error for a 4xx/5xx response."""
        status_code = response.status_code
        if status_code < 400:
            return

        if status_code == 429:
            header = response.headers.get("Retry-After", "")
            raise RateLimitError(
                self.name,
                retry_after=int(header) if header.isdigit() else None,
                status_code=status_code,
            )

        raise ProviderError(
            f"{self.name} responded with HTTP {status_code}",
            provider=self.name,
            status_code=status_code,
            response_body=response.text,
        )

    def _parse_json(self, response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body, raising ProviderError if it is not one."""
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"Invalid JSON from {self.name}: {e}",
                provider=self.name,
                response_body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise ProviderError(
                "Unexpected response shape: expected a JSON object",
                provider=self.name,
                response_body=response.text,
            )
        return data


class WeatherProvider(BaseProvider, ABC):
    """Abstract base class for weather data providers.

    Example:
        ```python
        class MyProvider(WeatherProvider):
            name = "my_provider"
            base_url = "https://api.example.com"

            async def get_forecast(self, coordinates):
                response = await self._fetch(...)
                return self._translate_response(self._parse_json(response), coordinates)
        ```
    """

    def __init__(self, forecast_days: int = 7, **kwargs: Any):
        """Initialize the provider.

        Args:
            forecast_days: Days to request, up to get_max_forecast_days()
            **kwargs: Passed to BaseProvider (base_url, timeout, transport, ...)
        """
        super().__init__(**kwargs)
        max_days = self.get_max_forecast_days()
        if not 1 <= forecast_days <= max_days:
            raise ValueError(f"forecast_days must be between 1 and {max_days}")
        self.forecast_days = forecast_days

    @abstractmethod
    async def get_forecast(self, coordinates: Coordinates) -> Forecast:
        """Get the daily weather forecast for a location.

        Args:
            coordinates: Location coordinates

        Returns:
            Forecast with at least one daily observation

        Raises:
            ProviderError: If forecast cannot be retrieved
        """
        pass

    @abstractmethod
    def _translate_response(
        self,
        response_data: dict[str, Any],
        coordinates: Coordinates,
    ) -> Forecast:
        """Translate provider-specific response to canonical format.

        Args:
            response_data: Raw JSON response from provider
            coordinates: Location coordinates

        Returns:
            Forecast in canonical format
        """
        pass

    def get_max_forecast_days(self) -> int:
        """Get maximum forecast days supported."""
        return 7


class LocationResolver(BaseProvider, ABC):
    """Abstract base class for city search and reverse lookup."""

    @abstractmethod
    async def search(self, query: str) -> list[City]:
        """Search for cities matching free text.

        Raises:
            LocationNotFoundError: If nothing matches
            ProviderError: If the lookup fails
        """
        pass

    @abstractmethod
    async def reverse(self, coordinates: Coordinates) -> City | None:
        """Find the nearest named city for coordinates, or None."""
        pass

    async def get_city(self, location_id: str) -> City:
        """Resolve a 'latitude:longitude' identifier to a named city.

        Raises:
            InvalidLocationIdError: If the identifier is malformed
            LocationNotFoundError: If no city is near the coordinates
        """
        coordinates = Coordinates.from_location_id(location_id)
        city = await self.reverse(coordinates)
        if city is None:
            raise LocationNotFoundError(location_id)
        return city
