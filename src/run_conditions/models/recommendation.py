"""Recommendation models: gear lists, road warnings and run timing."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GearItem(BaseModel):
    """A single piece of gear or clothing from the fixed catalog."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Stable catalog key (e.g., 'light_gloves')")
    label: str = Field(..., description="Display label")
    cold_hands: bool = Field(
        default=False,
        description="Recommended because the runner marked cold-hands sensitivity",
    )


class SockTier(str, Enum):
    """Sock insulation tier; values are catalog keys."""

    LIGHT = "light_socks"
    HEAVY = "heavy_socks"
    DOUBLE = "double_socks"


class OutfitResult(BaseModel):
    """Two ordered gear lists plus hand and sock tiers."""

    model_config = ConfigDict(frozen=True)

    performance: list[GearItem] = Field(
        default_factory=list, description="Lighter kit for running fast"
    )
    comfort: list[GearItem] = Field(
        default_factory=list, description="Warmer kit for staying comfortable"
    )
    hands_level: int = Field(
        ..., description="Hand protection 0 (none) to 4 (mittens + liner)"
    )
    sock_tier: SockTier
    effective_temp_f: float = Field(
        ..., description="Apparent temperature adjusted for the runner and conditions"
    )
    adjusted_temp_f: float = Field(
        ..., description="Effective temperature adjusted for the kind of run"
    )

    def performance_keys(self) -> list[str]:
        return [item.key for item in self.performance]

    def comfort_keys(self) -> list[str]:
        return [item.key for item in self.comfort]


class RoadSeverity(str, Enum):
    """Overall road hazard severity, mildest first."""

    SAFE = "safe"
    CAUTION = "caution"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def rank(self) -> int:
        return list(RoadSeverity).index(self)


class RoadHazard(str, Enum):
    ICE = "ice"
    WET = "wet"
    VISIBILITY = "visibility"
    HEAT = "heat"


class RoadWarning(BaseModel):
    """A single road surface or visibility hazard."""

    model_config = ConfigDict(frozen=True)

    hazard: RoadHazard
    level: RoadSeverity
    message: str
    advice: str


class RoadConditions(BaseModel):
    """Road hazards for a weather sample."""

    model_config = ConfigDict(frozen=True)

    severity: RoadSeverity = RoadSeverity.SAFE
    warnings: list[RoadWarning] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


class RunningCondition(BaseModel):
    """Performance-focused guidance for a temperature zone."""

    model_config = ConfigDict(frozen=True)

    zone: str = Field(..., description="Zone key (e.g., 'pr', 'bitter')")
    text: str = Field(..., description="Headline")
    performance: str = Field(..., description="Expected effect on performance")
    action: str = Field(..., description="What to do about it")


class RunTimeCandidate(BaseModel):
    """A scored hour inside the runner's preferred hours."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    score: float = Field(..., description="Running score for this hour")
    apparent_f: float
    wind_mph: float
    precip_prob: float
    uv_index: float


class BestRunTimes(BaseModel):
    """Best hour per day, plus every candidate ranked best first."""

    model_config = ConfigDict(frozen=True)

    by_day: dict[date, RunTimeCandidate] = Field(default_factory=dict)
    ranked: list[RunTimeCandidate] = Field(default_factory=list)

    @property
    def best(self) -> RunTimeCandidate | None:
        return self.ranked[0] if self.ranked else None


class ApproachTips(BaseModel):
    """Coaching advice for how to approach a run."""

    model_config = ConfigDict(frozen=True)

    tips: list[str] = Field(default_factory=list, description="Coaching tips, most important first")
    pace: str = Field(..., description="Pace adjustment guidance")
