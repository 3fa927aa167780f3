"""FastAPI dependencies for providers and location identifiers.

## Usage

```python
from fastapi import Depends
from weather_activities.api.dependencies import get_coordinates, get_recommender

@router.get("/{location_id}/ranking")
async def ranking(
    coordinates: Coordinates = Depends(get_coordinates),
    recommender: ActivityRecommender = Depends(get_recommender),
):
    return await recommender.rank_for_coordinates(coordinates)
```

Tests replace the providers through `app.dependency_overrides`.
"""

from __future__ import annotations

from fastapi import Depends, Request

from weather_activities.models.location import Coordinates
from weather_activities.providers.base import LocationResolver, WeatherProvider
from weather_activities.recommendations.recommender import ActivityRecommender


def get_weather_provider(request: Request) -> WeatherProvider:
    """Get the forecast provider opened during app startup."""
    return request.app.state.weather_provider


def get_location_resolver(request: Request) -> LocationResolver:
    """Get the location resolver opened during app startup."""
    return request.app.state.location_resolver


def get_recommender(
    provider: WeatherProvider = Depends(get_weather_provider),
) -> ActivityRecommender:
    """Build a recommender around the current forecast provider."""
    return ActivityRecommender(provider)


def get_coordinates(location_id: str) -> Coordinates:
    """Parse and validate the 'latitude:longitude' path parameter.

    Raises:
        InvalidLocationIdError: If the identifier is malformed or out of range
    """
    return Coordinates.from_location_id(location_id)
