"""Activity recommendation service.

Connects the forecast provider to the recommendation core:

1. Fetch the daily forecast for the coordinates
2. Average it into a WeatherSummary
3. Score and rank every activity against the summary

Provider failures propagate unchanged so callers can map them to their own
error responses. The core itself never retries.
"""

from __future__ import annotations

import logging

from weather_activities.models.activity import ActivityRanking
from weather_activities.models.location import Coordinates
from weather_activities.models.weather import Forecast, WeatherSummary
from weather_activities.providers.base import WeatherProvider
from weather_activities.recommendations.aggregator import aggregate
from weather_activities.recommendations.ranking import rank
from weather_activities.rules.engine import ScoringEngine

logger = logging.getLogger(__name__)


class ActivityRecommender:
    """Rank activities for a location from its forecast.

    Example:
        ```python
        async with OpenMeteoProvider() as provider:
            recommender = ActivityRecommender(provider)
            ranking = await recommender.rank_for_coordinates(
                Coordinates(latitude=46.02, longitude=7.75)
            )
            print(ranking.recommended)
        ```
    """

    def __init__(
        self,
        provider: WeatherProvider,
        engine: ScoringEngine | None = None,
    ):
        """Initialize the recommender.

        Args:
            provider: Source of daily forecasts
            engine: Scoring engine (defaults to the standard rule set)
        """
        self.provider = provider
        self.engine = engine or ScoringEngine()

    async def get_forecast(self, coordinates: Coordinates) -> Forecast:
        """Fetch the daily forecast for coordinates.

        Raises:
            ProviderError: If the forecast cannot be retrieved
        """
        return await self.provider.get_forecast(coordinates)

    async def get_summary(self, coordinates: Coordinates) -> WeatherSummary:
        """Fetch the forecast and average it over the whole window."""
        forecast = await self.get_forecast(coordinates)
        return aggregate(forecast.daily)

    async def rank_for_coordinates(self, coordinates: Coordinates) -> ActivityRanking:
        """Rank all activities for the average forecast at coordinates.

        Raises:
            ProviderError: If the forecast cannot be retrieved
            InvalidInputError: If the forecast contains no days
        """
        summary = await self.get_summary(coordinates)
        return self.rank_summary(summary, coordinates)

    def rank_summary(
        self, summary: WeatherSummary, coordinates: Coordinates
    ) -> ActivityRanking:
        """Rank all activities for an already-averaged forecast and log the pick."""
        ranking = rank(summary, self.engine)

        logger.info(
            f"Recommended {ranking.recommended.value} for {coordinates} "
            f"over {summary.days} days (score {ranking.scores[0].score})"
        )
        return ranking
