"""Activity ranking.

Sorts the scoring engine's output into a recommendation. Ties are broken by
ActivityType declaration order (SURFING, SKIING, OUTDOOR_SIGHTSEEING,
INDOOR_SIGHTSEEING) so identical weather always yields an identical
ranking.
"""

from __future__ import annotations

from weather_activities.models.activity import (
    ActivityRanking,
    ActivityScore,
    ActivityType,
)
from weather_activities.models.weather import WeatherSummary
from weather_activities.rules.engine import ScoringEngine

_default_engine = ScoringEngine()


def sort_scores(scores: list[ActivityScore]) -> list[ActivityScore]:
    """Sort scores best first, breaking ties by canonical activity order."""
    return sorted(scores, key=lambda s: (-s.score, s.activity.canonical_index))


def rank(
    summary: WeatherSummary,
    engine: ScoringEngine | None = None,
) -> ActivityRanking:
    """Rank every activity for the given weather.

    Args:
        summary: Period-averaged weather
        engine: Scoring engine to use (defaults to the standard rule set)

    Returns:
        ActivityRanking with sorted scores and the top recommendation
    """
    engine = engine or _default_engine
    scores = sort_scores(engine.score(summary))

    return ActivityRanking(scores=scores, recommended=scores[0].activity)


def recommend(
    summary: WeatherSummary,
    engine: ScoringEngine | None = None,
) -> ActivityType:
    """Get the single best activity for the given weather."""
    return rank(summary, engine).recommended
