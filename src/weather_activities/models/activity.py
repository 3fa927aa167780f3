"""Activity models: the closed set of activities and their ranking results."""

from __future__ import annotations

from enum import Enum
from typing import Self

from pydantic import BaseModel, Field, model_validator


class ActivityType(str, Enum):
    """Activities the system can recommend.

    Declaration order is the canonical order used to break ties when two
    activities score the same.
    """

    SURFING = "SURFING"
    SKIING = "SKIING"
    OUTDOOR_SIGHTSEEING = "OUTDOOR_SIGHTSEEING"
    INDOOR_SIGHTSEEING = "INDOOR_SIGHTSEEING"

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. 'Outdoor sightseeing'."""
        return self.value.replace("_", " ").capitalize()

    @property
    def canonical_index(self) -> int:
        """Position in the canonical tie-break order."""
        return list(ActivityType).index(self)


class ActivityScore(BaseModel):
    """Score and justification for one activity."""

    model_config = {"frozen": True}

    activity: ActivityType = Field(..., description="Activity being scored")
    score: int = Field(..., ge=0, description="Points earned from satisfied rules")
    reason: str = Field(..., min_length=1, description="Why the activity scored this way")


class ActivityRanking(BaseModel):
    """Activities ordered from most to least suitable."""

    scores: list[ActivityScore] = Field(
        ..., min_length=1, description="Scores sorted by score, best first"
    )
    recommended: ActivityType = Field(..., description="The single best activity")

    @model_validator(mode="after")
    def validate_recommended_is_first(self) -> Self:
        """Ensure the recommendation is the top-ranked activity."""
        if self.recommended != self.scores[0].activity:
            raise ValueError(
                f"Recommended activity {self.recommended.value} is not the "
                f"top-ranked activity {self.scores[0].activity.value}"
            )
        return self

    def get_score(self, activity: ActivityType) -> ActivityScore | None:
        """Get the score entry for an activity."""
        for entry in self.scores:
            if entry.activity == activity:
                return entry
        return None
