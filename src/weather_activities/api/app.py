"""FastAPI application factory.

Creates and configures the FastAPI application with all routes, middleware
and error handlers.

## Usage

```python
from weather_activities.api import create_app

app = create_app()

# Run with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
```

## Configuration

The app is configured via environment variables. See
`weather_activities.config` for available settings.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weather_activities.config import Settings, get_settings
from weather_activities.models.location import InvalidLocationIdError
from weather_activities.providers.base import (
    LocationNotFoundError,
    ProviderError,
    RateLimitError,
)
from weather_activities.providers.openmeteo import OpenMeteoGeocoder, OpenMeteoProvider
from weather_activities.recommendations.aggregator import InvalidInputError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown tasks:
    - Open the forecast provider and location resolver
    - Close their HTTP clients on shutdown
    """
    settings: Settings = app.state.settings

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    http_options = {
        "user_agent": settings.user_agent,
        "timeout": settings.request_timeout_seconds,
        "max_attempts": settings.request_max_attempts,
    }
    app.state.weather_provider = OpenMeteoProvider(
        forecast_days=settings.forecast_days,
        base_url=settings.openmeteo_forecast_url,
        **http_options,
    )
    app.state.location_resolver = OpenMeteoGeocoder(
        count=settings.search_result_count,
        language=settings.search_language,
        base_url=settings.openmeteo_geocoding_url,
        **http_options,
    )

    yield

    # Shutdown
    logger.info("Shutting down")
    await app.state.weather_provider.aclose()
    await app.state.location_resolver.aclose()


def _error_response(status_code: int, exc: Exception, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "code": code},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP status codes.

    | Error | Status |
    |-------|--------|
    | InvalidLocationIdError | 400 |
    | LocationNotFoundError | 404 |
    | InvalidInputError | 422 |
    | RateLimitError | 429 |
    | ProviderError | 503 |
    """

    @app.exception_handler(InvalidLocationIdError)
    async def invalid_location_id_handler(
        request: Request, exc: InvalidLocationIdError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc, exc.code)

    @app.exception_handler(LocationNotFoundError)
    async def location_not_found_handler(
        request: Request, exc: LocationNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc, exc.code)

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(
        request: Request, exc: InvalidInputError
    ) -> JSONResponse:
        return _error_response(422, exc, exc.code)

    @app.exception_handler(ProviderError)
    async def provider_error_handler(
        request: Request, exc: ProviderError
    ) -> JSONResponse:
        logger.warning(f"{exc.provider} request failed: {exc}")
        if isinstance(exc, RateLimitError):
            response = _error_response(status.HTTP_429_TOO_MANY_REQUESTS, exc, exc.code)
            if exc.retry_after is not None:
                response.headers["Retry-After"] = str(exc.retry_after)
            return response
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc, exc.code)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to environment-loaded settings)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Weather-based activity recommendations",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    from weather_activities.api.routes import activities, cities, forecast

    app.include_router(cities.router, prefix="/api/cities", tags=["Cities"])
    app.include_router(forecast.router, prefix="/api/forecast", tags=["Forecast"])
    app.include_router(activities.router, prefix="/api/activities", tags=["Activities"])

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    return app
