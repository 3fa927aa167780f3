"""Forecast aggregation.

Reduces a multi-day forecast window into one representative WeatherSummary
by averaging each field independently. Activity scoring works on this
period average rather than on individual days.
"""

from __future__ import annotations

from collections.abc import Sequence
from statistics import fmean

from weather_activities.models.weather import DailyObservation, WeatherSummary


class InvalidInputError(ValueError):
    """Raised when aggregation is asked to summarize no observations."""

    code = "INVALID_INPUT"


def aggregate(observations: Sequence[DailyObservation]) -> WeatherSummary:
    """Average daily observations into a single weather summary.

    No rounding is applied, so downstream threshold comparisons see the
    exact mean.

    Args:
        observations: Daily observations in the forecast window

    Returns:
        WeatherSummary whose fields are the per-field arithmetic means

    Raises:
        InvalidInputError: If observations is empty
    """
    if not observations:
        raise InvalidInputError("Cannot aggregate an empty forecast window")

    return WeatherSummary(
        temperature_max_c=fmean(o.temperature_max_c for o in observations),
        temperature_min_c=fmean(o.temperature_min_c for o in observations),
        precipitation_mm=fmean(o.precipitation_mm for o in observations),
        wind_speed_max_kmh=fmean(o.wind_speed_max_kmh for o in observations),
        days=len(observations),
    )
