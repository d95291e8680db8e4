"""Result models for dew point, heat stress and the running score."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ComfortLevel(str, Enum):
    """Dew point comfort buckets, driest first."""

    DRY = "dry"
    COMFORTABLE = "comfortable"
    SLIGHTLY_MUGGY = "slightly-muggy"
    MODERATE = "moderate"
    MUGGY = "muggy"
    VERY_HUMID = "very-humid"
    OPPRESSIVE = "oppressive"


class SeverityColor(str, Enum):
    """Display color attached to a dew point comfort level."""

    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"


class DewPointComfort(BaseModel):
    """Qualitative comfort classification of a dew point."""

    model_config = ConfigDict(frozen=True)

    level: ComfortLevel
    label: str
    description: str
    color: SeverityColor


class DewPointAssessment(BaseModel):
    """Dew point with its comfort classification."""

    model_config = ConfigDict(frozen=True)

    dew_point_f: float = Field(..., description="Dew point in °F")
    comfort: DewPointComfort


class RiskTier(str, Enum):
    """Heat stress risk tier."""

    IDEAL = "ideal"
    CAUTION = "caution"
    HIGH_RISK = "high-risk"
    DANGER = "danger"


class FlagColor(str, Enum):
    """Race-safety flag color."""

    NONE = "none"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    BLACK = "black"


class RiskAssessment(BaseModel):
    """Activity-aware WBGT risk decision."""

    model_config = ConfigDict(frozen=True)

    tier: RiskTier
    flag: FlagColor
    message: str


class HeatStressAssessment(BaseModel):
    """WBGT and heat index together with the risk decision."""

    model_config = ConfigDict(frozen=True)

    wbgt_f: float = Field(..., description="Wet Bulb Globe Temperature in °F")
    heat_index_f: float = Field(..., description="NWS heat index in °F")
    risk: RiskAssessment

    @property
    def tier(self) -> RiskTier:
        return self.risk.tier

    @property
    def flag(self) -> FlagColor:
        return self.risk.flag

    @property
    def message(self) -> str:
        return self.risk.message


class ImpactLevel(str, Enum):
    """How much of a factor's maximum penalty was used."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ScoreBreakdownPart(BaseModel):
    """A single factor's contribution to the running score."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Factor key (e.g., 'wind')")
    label: str = Field(..., description="Human-readable factor name")
    penalty: float = Field(..., description="Penalty points applied (0..max_penalty)")
    max_penalty: float = Field(..., description="Largest penalty this factor can apply")
    reason: str = Field(..., description="Why the penalty was applied")
    tip: str | None = Field(default=None, description="How to adapt to this factor")

    @computed_field
    @property
    def impact(self) -> ImpactLevel:
        """Share of the maximum penalty: 60% or more is high, 30% medium."""
        if not self.max_penalty:
            return ImpactLevel.LOW
        share = self.penalty / self.max_penalty
        if share >= 0.6:
            return ImpactLevel.HIGH
        if share >= 0.3:
            return ImpactLevel.MEDIUM
        return ImpactLevel.LOW


class ScoreLabel(BaseModel):
    """Headline text for a score bucket."""

    model_config = ConfigDict(frozen=True)

    text: str
    tone: str


class Tone(BaseModel):
    """Display colors derived from a score or temperature."""

    model_config = ConfigDict(frozen=True)

    rgb: tuple[int, int, int]
    fill: str = Field(..., description="CSS rgb() fill color")
    background: str = Field(..., description="CSS rgba() light background")
    border: str = Field(..., description="CSS rgba() border color")


class RunningScore(BaseModel):
    """The 0-100 running condition score with its explanation."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(..., description="Condition score, whole number in 0-100")
    label: ScoreLabel
    tone: Tone
    ideal_f: float = Field(..., description="Ideal apparent temperature for the activity")
    dew_point_f: float = Field(..., description="Dew point used for the humidity terms")
    total_penalty: float = Field(..., description="Sum of all penalty terms before capping")
    breakdown: list[ScoreBreakdownPart] = Field(default_factory=list)

    def dominant_keys(self, limit: int = 2) -> list[str]:
        """Keys of the largest penalties, ignoring parts under half a point."""
        visible = [part for part in self.breakdown if part.penalty >= 0.5]
        visible.sort(key=lambda part: part.penalty, reverse=True)
        return [part.key for part in visible[:limit]]
