"""Domain models for running condition decisions."""

from run_conditions.models.weather import ForecastPoint, WeatherSample
from run_conditions.models.profile import ActivityKind, Gender, RunProfile
from run_conditions.models.assessment import (
    ComfortLevel,
    DewPointAssessment,
    DewPointComfort,
    FlagColor,
    HeatStressAssessment,
    ImpactLevel,
    RiskAssessment,
    RiskTier,
    RunningScore,
    ScoreBreakdownPart,
    ScoreLabel,
    SeverityColor,
    Tone,
)
from run_conditions.models.recommendation import (
    ApproachTips,
    BestRunTimes,
    GearItem,
    OutfitResult,
    RoadConditions,
    RoadHazard,
    RoadSeverity,
    RoadWarning,
    RunningCondition,
    RunTimeCandidate,
    SockTier,
)

__all__ = [
    # Weather
    "WeatherSample",
    "ForecastPoint",
    # Profile
    "ActivityKind",
    "Gender",
    "RunProfile",
    # Assessment
    "ComfortLevel",
    "DewPointAssessment",
    "DewPointComfort",
    "FlagColor",
    "HeatStressAssessment",
    "ImpactLevel",
    "RiskAssessment",
    "RiskTier",
    "RunningScore",
    "ScoreBreakdownPart",
    "ScoreLabel",
    "SeverityColor",
    "Tone",
    # Recommendation
    "ApproachTips",
    "BestRunTimes",
    "GearItem",
    "OutfitResult",
    "RoadConditions",
    "RoadHazard",
    "RoadSeverity",
    "RoadWarning",
    "RunningCondition",
    "RunTimeCandidate",
    "SockTier",
]
