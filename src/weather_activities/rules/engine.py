"""Rule engine for scoring activities against a weather summary.

Each activity has its own ordered rule set. Rules are additive and
independent: every rule is evaluated, satisfied rules add their points, and
rules never interact across activities.

Scoring happens in two steps so numeric behavior can be tested apart from
wording:

1. ``ScoringEngine.evaluate`` computes points and the ids of matched rules.
2. ``ActivityEvaluation.render_reason`` turns the matches into text.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from weather_activities.models.activity import ActivityScore, ActivityType
from weather_activities.models.weather import WeatherSummary
from weather_activities.rules.conditions import (
    ComparisonOperator,
    ScoringRule,
    WeatherMetric,
)

REASON_CONJUNCTION = " and "


# Primary factor first within each activity
ACTIVITY_RULES: dict[ActivityType, tuple[ScoringRule, ...]] = {
    ActivityType.SURFING: (
        ScoringRule(
            id="surfing.strong_wind",
            metric=WeatherMetric.WIND_SPEED_MAX,
            operator=ComparisonOperator.GREATER_THAN_OR_EQUAL,
            value=25,
            points=30,
            reason="Strong wind creates rideable swells",
        ),
        ScoringRule(
            id="surfing.low_precipitation",
            metric=WeatherMetric.PRECIPITATION,
            operator=ComparisonOperator.LESS_THAN,
            value=2,
            points=20,
            reason="Good visibility, minimal rain",
        ),
        ScoringRule(
            id="surfing.warm",
            metric=WeatherMetric.TEMPERATURE_MAX,
            operator=ComparisonOperator.GREATER_THAN,
            value=18,
            points=20,
            reason="Warm enough for extended water time",
        ),
    ),
    ActivityType.SKIING: (
        ScoringRule(
            id="skiing.cold",
            metric=WeatherMetric.TEMPERATURE_MAX,
            operator=ComparisonOperator.LESS_THAN,
            value=5,
            points=40,
            reason="Below freezing - excellent snow conditions",
        ),
        ScoringRule(
            id="skiing.fresh_snow",
            metric=WeatherMetric.PRECIPITATION,
            operator=ComparisonOperator.GREATER_THAN,
            value=2,
            points=20,
            reason="Fresh snow accumulation expected",
        ),
    ),
    ActivityType.OUTDOOR_SIGHTSEEING: (
        ScoringRule(
            id="outdoor_sightseeing.dry",
            metric=WeatherMetric.PRECIPITATION,
            operator=ComparisonOperator.LESS_THAN,
            value=1,
            points=40,
            reason="Clear, dry skies perfect for sightseeing",
        ),
        ScoringRule(
            id="outdoor_sightseeing.comfortable",
            metric=WeatherMetric.TEMPERATURE_MAX,
            operator=ComparisonOperator.BETWEEN,
            value=(18, 28),
            points=30,
            reason="Comfortable temperature for walking tours",
        ),
    ),
    ActivityType.INDOOR_SIGHTSEEING: (
        ScoringRule(
            id="indoor_sightseeing.heavy_rain",
            metric=WeatherMetric.PRECIPITATION,
            operator=ComparisonOperator.GREATER_THAN,
            value=4,
            points=40,
            reason="Heavy rain makes indoor activities ideal",
        ),
        ScoringRule(
            id="indoor_sightseeing.strong_wind",
            metric=WeatherMetric.WIND_SPEED_MAX,
            operator=ComparisonOperator.GREATER_THAN,
            value=30,
            points=20,
            reason="Strong wind suggests indoor entertainment",
        ),
    ),
}

# Used when no rule for the activity is satisfied
DEFAULT_REASONS: dict[ActivityType, str] = {
    ActivityType.SURFING: "Conditions unfavorable: low wind speed",
    ActivityType.SKIING: "Too warm for quality snow conditions",
    ActivityType.OUTDOOR_SIGHTSEEING: "Weather conditions limit outdoor touring",
    ActivityType.INDOOR_SIGHTSEEING: "Outdoor conditions are favorable",
}


def check_coverage(table: Mapping[ActivityType, object], what: str) -> None:
    """Raise ValueError unless the table has an entry for every activity."""
    missing = set(ActivityType) - set(table)
    if missing:
        names = ", ".join(sorted(a.value for a in missing))
        raise ValueError(f"No {what} defined for: {names}")


check_coverage(ACTIVITY_RULES, "rules")
check_coverage(DEFAULT_REASONS, "default reasons")


@dataclass
class ActivityEvaluation:
    """Numeric result of evaluating one activity's rules."""

    activity: ActivityType
    rules: tuple[ScoringRule, ...]
    matched_rule_ids: list[str] = field(default_factory=list)
    points: int = 0

    @property
    def matched_rules(self) -> list[ScoringRule]:
        """Satisfied rules, in declaration order."""
        matched = set(self.matched_rule_ids)
        return [rule for rule in self.rules if rule.id in matched]

    @property
    def max_points(self) -> int:
        """Points earned if every rule were satisfied."""
        return sum(rule.points for rule in self.rules)

    def render_reason(self, default: str | None = None) -> str:
        """Join matched rule reasons, or fall back to the default text."""
        reasons = [rule.reason for rule in self.matched_rules]
        if not reasons:
            return default or DEFAULT_REASONS[self.activity]
        return REASON_CONJUNCTION.join(reasons)

    def to_score(self) -> ActivityScore:
        """Build the public score entry for this evaluation."""
        return ActivityScore(
            activity=self.activity,
            score=self.points,
            reason=self.render_reason(),
        )


class ScoringEngine:
    """Engine for scoring every activity against a weather summary.

    Example:
        ```python
        engine = ScoringEngine()

        # One entry per activity, in ActivityType declaration order
        scores = engine.score(summary)

        # Inspect which rules matched without the wording
        evaluation = engine.evaluate(ActivityType.SURFING, summary)
        evaluation.matched_rule_ids  # ["surfing.strong_wind", ...]
        ```
    """

    def __init__(
        self,
        rules: dict[ActivityType, tuple[ScoringRule, ...]] | None = None,
    ):
        """Initialize the scoring engine.

        Args:
            rules: Rule sets per activity. Defaults to ACTIVITY_RULES.
                Every ActivityType must be present.
        """
        self.rules = rules if rules is not None else ACTIVITY_RULES
        check_coverage(self.rules, "rules")

    def evaluate(
        self, activity: ActivityType, summary: WeatherSummary
    ) -> ActivityEvaluation:
        """Evaluate all rules for one activity.

        Args:
            activity: Activity to evaluate
            summary: Period-averaged weather

        Returns:
            ActivityEvaluation with points and matched rule ids
        """
        rules = self.rules[activity]
        evaluation = ActivityEvaluation(activity=activity, rules=rules)

        for rule in rules:
            if rule.matches(summary):
                evaluation.matched_rule_ids.append(rule.id)
                evaluation.points += rule.points

        return evaluation

    def score(self, summary: WeatherSummary) -> list[ActivityScore]:
        """Score every activity against the summary.

        Args:
            summary: Period-averaged weather

        Returns:
            One ActivityScore per ActivityType, unsorted
        """
        return [
            self.evaluate(activity, summary).to_score() for activity in ActivityType
        ]

    def max_score(self, activity: ActivityType) -> int:
        """Highest score an activity can reach."""
        return sum(rule.points for rule in self.rules[activity])
