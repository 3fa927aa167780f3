"""City search routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from weather_activities.api.dependencies import get_location_resolver
from weather_activities.models.location import City
from weather_activities.providers.base import LocationResolver

router = APIRouter()


@router.get("", response_model=list[City])
async def search_cities(
    query: str = Query(..., max_length=200, description="City name to search for"),
    resolver: LocationResolver = Depends(get_location_resolver),
) -> list[City]:
    """Search cities by name.

    Each result's `id` is a 'latitude:longitude' identifier accepted by the
    forecast and ranking endpoints.
    """
    return await resolver.search(query)


@router.get("/{location_id}", response_model=City)
async def get_city(
    location_id: str,
    resolver: LocationResolver = Depends(get_location_resolver),
) -> City:
    """Get the nearest named city for a 'latitude:longitude' identifier."""
    return await resolver.get_city(location_id)
