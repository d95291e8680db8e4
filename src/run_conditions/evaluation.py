"""Entry points for renderers.

Each call is pure: it takes a weather sample (and a runner profile where
relevant) and returns plain result models. Nothing here reads configuration
or keeps state between calls, so evaluations for many forecast hours can run
in parallel.
"""

from __future__ import annotations

import logging
from typing import Sequence

from pydantic import BaseModel, ConfigDict

from run_conditions.models.assessment import (
    DewPointAssessment,
    HeatStressAssessment,
    RunningScore,
)
from run_conditions.models.profile import ActivityKind, RunProfile
from run_conditions.models.recommendation import (
    ApproachTips,
    OutfitResult,
    RoadConditions,
    RunningCondition,
)
from run_conditions.models.weather import ForecastPoint, WeatherSample
from run_conditions.physics.dew_point import dew_point_f, get_dew_point_comfort_level
from run_conditions.physics.heat_stress import (
    assess_wbgt_risk,
    calculate_heat_index,
    calculate_wbgt,
)
from run_conditions.recommendations.approach import make_approach_tips
from run_conditions.recommendations.conditions import get_running_condition
from run_conditions.recommendations.outfit import LookAhead, OutfitSelector
from run_conditions.recommendations.road import calculate_road_conditions
from run_conditions.scoring.engine import compute_score_breakdown

logger = logging.getLogger(__name__)

# Below this apparent temperature the condition zone uses feels-like guidance
WBGT_ZONE_MIN_APPARENT_F = 50


def evaluate_dew_point(temp_f: float, humidity: float) -> DewPointAssessment:
    dew_point = dew_point_f(temp_f, humidity)
    return DewPointAssessment(
        dew_point_f=dew_point,
        comfort=get_dew_point_comfort_level(dew_point),
    )


def evaluate_heat_stress(
    temp_f: float,
    humidity: float,
    wind_mph: float = 0.0,
    activity: ActivityKind = ActivityKind.EASY,
    pressure_hpa: float | None = None,
    solar_radiation_wm2: float | None = None,
    cloud_cover: float | None = None,
) -> HeatStressAssessment:
    """WBGT, heat index and the activity-aware risk tier."""
    wbgt = calculate_wbgt(
        temp_f,
        humidity,
        wind_mph,
        pressure_hpa=pressure_hpa,
        solar_radiation_wm2=solar_radiation_wm2,
        cloud_cover=50 if cloud_cover is None else cloud_cover,
    )
    return HeatStressAssessment(
        wbgt_f=wbgt,
        heat_index_f=calculate_heat_index(temp_f, humidity),
        risk=assess_wbgt_risk(wbgt, activity),
    )


def evaluate_score(
    sample: WeatherSample,
    activity: ActivityKind = ActivityKind.EASY,
) -> RunningScore:
    return compute_score_breakdown(sample, activity)


def evaluate_outfit(
    sample: WeatherSample,
    profile: RunProfile,
    forecast: Sequence[ForecastPoint] | None = None,
) -> OutfitResult:
    """Outfit for a run; ``forecast`` holds upcoming points, nearest first."""
    return OutfitSelector().select(sample, profile, forecast or ())


def evaluate_approach(
    sample: WeatherSample,
    profile: RunProfile,
    forecast: Sequence[ForecastPoint] | None = None,
    score: RunningScore | None = None,
    heat_stress: HeatStressAssessment | None = None,
    road: RoadConditions | None = None,
) -> ApproachTips:
    """Coaching tips; parts already evaluated for the sample can be passed in.

    Only long runs look at ``forecast``, for the coming temperature rise and
    rain.
    """
    if score is None:
        score = evaluate_score(sample, profile.activity)
    if heat_stress is None:
        heat_stress = _heat_stress_for(sample, profile)
    if road is None:
        road = calculate_road_conditions(sample)
    if profile.is_long_run:
        look_ahead = LookAhead.scan(sample, forecast or ())
    else:
        look_ahead = LookAhead.current_only(sample)
    return make_approach_tips(
        score,
        sample,
        profile,
        heat_stress=heat_stress,
        road=road,
        temp_change=look_ahead.temp_change,
        will_rain=look_ahead.will_rain,
    )


def _heat_stress_for(sample: WeatherSample, profile: RunProfile) -> HeatStressAssessment:
    return evaluate_heat_stress(
        sample.temp_f,
        sample.humidity,
        sample.wind_mph,
        profile.activity,
        pressure_hpa=sample.pressure_hpa,
        solar_radiation_wm2=sample.solar_radiation_wm2,
        cloud_cover=sample.cloud_cover,
    )


class RunReport(BaseModel):
    """Everything the renderer shows for one sample."""

    model_config = ConfigDict(frozen=True)

    dew_point: DewPointAssessment
    heat_stress: HeatStressAssessment
    score: RunningScore
    outfit: OutfitResult
    road: RoadConditions
    condition: RunningCondition
    approach: ApproachTips


def evaluate_all(
    sample: WeatherSample,
    profile: RunProfile,
    forecast: Sequence[ForecastPoint] | None = None,
) -> RunReport:
    """Run every evaluation for one sample and profile."""
    heat_stress = _heat_stress_for(sample, profile)
    if sample.apparent_f >= WBGT_ZONE_MIN_APPARENT_F:
        condition = get_running_condition(heat_stress.wbgt_f, is_wbgt=True)
    else:
        condition = get_running_condition(sample.apparent_f)

    score = evaluate_score(sample, profile.activity)
    road = calculate_road_conditions(sample)
    report = RunReport(
        dew_point=evaluate_dew_point(sample.temp_f, sample.humidity),
        heat_stress=heat_stress,
        score=score,
        outfit=evaluate_outfit(sample, profile, forecast),
        road=road,
        condition=condition,
        approach=evaluate_approach(
            sample, profile, forecast, score=score, heat_stress=heat_stress, road=road
        ),
    )
    logger.debug(
        f"Evaluated {profile.activity.value} run: score={report.score.score} "
        f"risk={heat_stress.tier.value} road={report.road.severity.value}"
    )
    return report
