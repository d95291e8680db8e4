"""Runner profile models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ActivityKind(str, Enum):
    """What kind of run is planned."""

    WORKOUT = "workout"  # Intervals, tempo; runs hot
    LONG_RUN = "long_run"  # Duration matters; consults the forecast
    EASY = "easy"


class Gender(str, Enum):
    """Affects base layers at the warm end and male top removal."""

    FEMALE = "female"
    MALE = "male"


class RunProfile(BaseModel):
    """Per-runner settings passed explicitly into every evaluation."""

    model_config = ConfigDict(frozen=True)

    activity: ActivityKind = Field(default=ActivityKind.EASY, description="Kind of run")
    gender: Gender = Field(default=Gender.FEMALE, description="Runner gender")
    cold_hands: bool = Field(
        default=False, description="Hands get cold earlier than average"
    )
    temp_sensitivity: float = Field(
        default=0.0,
        description="Comfort offset; each unit shifts effective temperature by 5°F",
    )
    boldness: int = Field(
        default=0,
        ge=-2,
        le=2,
        description="How cautious the coaching tips are; -2 very cautious, 2 bold",
    )

    @property
    def is_workout(self) -> bool:
        return self.activity == ActivityKind.WORKOUT

    @property
    def is_long_run(self) -> bool:
        return self.activity == ActivityKind.LONG_RUN
