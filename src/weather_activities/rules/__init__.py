"""Rule engine for scoring activities against weather conditions."""

from weather_activities.rules.engine import (
    ACTIVITY_RULES,
    DEFAULT_REASONS,
    ActivityEvaluation,
    ScoringEngine,
)
from weather_activities.rules.conditions import (
    ComparisonOperator,
    ScoringRule,
    WeatherMetric,
)

__all__ = [
    "ACTIVITY_RULES",
    "DEFAULT_REASONS",
    "ActivityEvaluation",
    "ScoringEngine",
    "ComparisonOperator",
    "ScoringRule",
    "WeatherMetric",
]
