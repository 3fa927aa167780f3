"""FastAPI application and routes.

This module provides the HTTP API for the weather activity recommendations
service.

## API Structure

- /api/cities - City search and reverse lookup
- /api/forecast - Daily weather forecasts
- /api/activities - Activity rankings
- /health - Health check

## Location Identifiers

Forecast and ranking endpoints take a `latitude:longitude` identifier, e.g.
`-33.9249:18.4241` for Cape Town. City search results carry identifiers in
the same form.
"""

from weather_activities.api.app import create_app

__all__ = ["create_app"]
