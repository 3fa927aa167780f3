"""Recommendation systems: forecast aggregation and activity ranking."""

from weather_activities.recommendations.aggregator import (
    InvalidInputError,
    aggregate,
)
from weather_activities.recommendations.ranking import (
    rank,
    recommend,
    sort_scores,
)
from weather_activities.recommendations.recommender import ActivityRecommender

__all__ = [
    "InvalidInputError",
    "aggregate",
    "rank",
    "recommend",
    "sort_scores",
    "ActivityRecommender",
]
