"""Activity ranking routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from weather_activities.api.dependencies import get_coordinates, get_recommender
from weather_activities.models.activity import ActivityScore, ActivityType
from weather_activities.models.location import City, Coordinates
from weather_activities.models.weather import WeatherSummary
from weather_activities.recommendations.recommender import ActivityRecommender

router = APIRouter()


class ActivityRankingResponse(BaseModel):
    """Ranked activities for a location."""

    city: City
    scores: list[ActivityScore]
    recommended: ActivityType
    summary: WeatherSummary


@router.get("/{location_id}/ranking", response_model=ActivityRankingResponse)
async def get_activity_ranking(
    coordinates: Coordinates = Depends(get_coordinates),
    recommender: ActivityRecommender = Depends(get_recommender),
) -> ActivityRankingResponse:
    """Rank activities for the average forecast at coordinates.

    Scores are sorted best first; ties keep the order SURFING, SKIING,
    OUTDOOR_SIGHTSEEING, INDOOR_SIGHTSEEING.
    """
    summary = await recommender.get_summary(coordinates)
    ranking = recommender.rank_summary(summary, coordinates)

    return ActivityRankingResponse(
        city=City.from_coordinates(coordinates),
        scores=ranking.scores,
        recommended=ranking.recommended,
        summary=summary,
    )
