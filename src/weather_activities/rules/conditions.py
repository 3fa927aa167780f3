"""Scoring rule definitions.

A rule is a single (threshold condition, points, reason) triple. Rules read
one metric from a WeatherSummary and compare it against a fixed value.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from weather_activities.models.weather import WeatherSummary


class WeatherMetric(str, Enum):
    """Summary fields that rules can be evaluated against."""

    TEMPERATURE_MAX = "temperature_max_c"
    TEMPERATURE_MIN = "temperature_min_c"
    PRECIPITATION = "precipitation_mm"
    WIND_SPEED_MAX = "wind_speed_max_kmh"

    @property
    def unit(self) -> str:
        """Unit of measurement for this metric."""
        if self in (WeatherMetric.TEMPERATURE_MAX, WeatherMetric.TEMPERATURE_MIN):
            return "°C"
        if self == WeatherMetric.PRECIPITATION:
            return "mm"
        return "km/h"


class ComparisonOperator(str, Enum):
    """Operators for comparing values."""

    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "lte"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    BETWEEN = "between"  # Inclusive on both ends


class ScoringRule(BaseModel):
    """A single threshold rule that awards points to an activity.

    Example:
        ```python
        # Award 30 points when the average daily max wind is at least 25 km/h
        rule = ScoringRule(
            id="surfing.strong_wind",
            metric=WeatherMetric.WIND_SPEED_MAX,
            operator=ComparisonOperator.GREATER_THAN_OR_EQUAL,
            value=25,
            points=30,
            reason="Strong wind creates rideable swells",
        )
        ```
    """

    model_config = {"frozen": True}

    id: str = Field(..., min_length=1, description="Stable rule identifier")
    metric: WeatherMetric = Field(..., description="Summary field to evaluate")
    operator: ComparisonOperator = Field(..., description="Comparison operator")
    value: float | tuple[float, float] = Field(
        ..., description="Threshold, or (low, high) for BETWEEN"
    )
    points: int = Field(..., gt=0, description="Points awarded when satisfied")
    reason: str = Field(..., min_length=1, description="Justification when satisfied")

    @model_validator(mode="after")
    def validate_value_shape(self) -> ScoringRule:
        """BETWEEN takes a (low, high) pair, every other operator a number."""
        is_range = isinstance(self.value, tuple)
        if self.operator == ComparisonOperator.BETWEEN:
            if not is_range or self.value[0] > self.value[1]:
                raise ValueError("BETWEEN requires a (low, high) pair with low <= high")
        elif is_range:
            raise ValueError(f"{self.operator.value} requires a single threshold")
        return self

    def extract_value(self, summary: WeatherSummary) -> float:
        """Read this rule's metric from a summary."""
        return getattr(summary, self.metric.value)

    def matches(self, summary: WeatherSummary) -> bool:
        """Check whether the summary satisfies this rule."""
        return _compare(self.operator, self.extract_value(summary), self.value)

    def describe(self) -> str:
        """Describe the condition, e.g. 'wind_speed_max_kmh >= 25 km/h'."""
        unit = self.metric.unit
        if self.operator == ComparisonOperator.BETWEEN:
            low, high = self.value
            return f"{low} <= {self.metric.value} <= {high} {unit}"
        symbol = _SYMBOLS[self.operator]
        return f"{self.metric.value} {symbol} {self.value} {unit}"


_SYMBOLS = {
    ComparisonOperator.LESS_THAN: "<",
    ComparisonOperator.LESS_THAN_OR_EQUAL: "<=",
    ComparisonOperator.GREATER_THAN: ">",
    ComparisonOperator.GREATER_THAN_OR_EQUAL: ">=",
}


def _compare(operator: ComparisonOperator, actual: float, expected: Any) -> bool:
    """Compare actual value against expected using the operator."""
    comparisons = {
        ComparisonOperator.LESS_THAN: lambda a, e: a < e,
        ComparisonOperator.LESS_THAN_OR_EQUAL: lambda a, e: a <= e,
        ComparisonOperator.GREATER_THAN: lambda a, e: a > e,
        ComparisonOperator.GREATER_THAN_OR_EQUAL: lambda a, e: a >= e,
        ComparisonOperator.BETWEEN: lambda a, e: e[0] <= a <= e[1],
    }
    return comparisons[operator](actual, expected)
