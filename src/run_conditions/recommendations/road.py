"""Road surface and visibility hazards."""

from __future__ import annotations

from run_conditions.models.recommendation import (
    RoadConditions,
    RoadHazard,
    RoadSeverity,
    RoadWarning,
)
from run_conditions.models.weather import WeatherSample

BLACK_ICE = RoadWarning(
    hazard=RoadHazard.ICE,
    level=RoadSeverity.DANGER,
    message="Black ice likely on roads and sidewalks",
    advice=(
        "Avoid running outdoors. Treadmill strongly recommended. If you must run "
        "outside, choose well-salted main roads and wear trail shoes with aggressive "
        "tread. Shorten your stride significantly."
    ),
)
ICY_PATCHES = RoadWarning(
    hazard=RoadHazard.ICE,
    level=RoadSeverity.WARNING,
    message="Potential for icy patches in shaded areas",
    advice=(
        "Use extreme caution on bridges, overpasses, and shaded sections. Test "
        "footing before committing to speed. Consider postponing to afternoon when "
        "temps rise."
    ),
)
SLIPPERY_ROADS = RoadWarning(
    hazard=RoadHazard.WET,
    level=RoadSeverity.WARNING,
    message="Slippery roads and reduced visibility",
    advice=(
        "Avoid painted road markings, manhole covers, and metal grates, which are "
        "extremely slippery when wet. Shorten stride and increase cadence for better "
        "traction. Stay visible with bright colors and reflective gear."
    ),
)
WET_SURFACES = RoadWarning(
    hazard=RoadHazard.WET,
    level=RoadSeverity.CAUTION,
    message="Wet road surfaces possible",
    advice=(
        "Watch for puddles hiding potholes. Leaves and debris become slippery when "
        "wet. Give extra space when crossing driveways (oil residue + water = slick)."
    ),
)
LOW_VISIBILITY = RoadWarning(
    hazard=RoadHazard.VISIBILITY,
    level=RoadSeverity.CAUTION,
    message="Reduced visibility for drivers",
    advice=(
        "Wear bright/reflective clothing even during daytime. Make eye contact with "
        "drivers at intersections. Use sidewalks and crosswalks; don't assume "
        "you're seen."
    ),
)
HOT_PAVEMENT = RoadWarning(
    hazard=RoadHazard.HEAT,
    level=RoadSeverity.CAUTION,
    message="Hot pavement can reach 140-160°F",
    advice=(
        "Choose light-colored asphalt or concrete over dark pavement where possible. "
        "Run on grass/dirt paths if available, which are significantly cooler. Peak "
        "surface temps occur 2-4pm; run early morning or evening."
    ),
)


def calculate_road_conditions(sample: WeatherSample) -> RoadConditions:
    """Collect road hazards; overall severity is the worst warning found.

    A missing cloud cover reading counts as clear sky for visibility.
    """
    temp = sample.temp_f
    prob = sample.precip_prob
    amount = sample.precip_in
    cloud = sample.cloud_cover if sample.cloud_cover is not None else 0

    warnings: list[RoadWarning] = []

    if temp <= 32 and (prob > 20 or amount > 0):
        warnings.append(BLACK_ICE)
    elif 32 < temp <= 35 and prob > 40:
        warnings.append(ICY_PATCHES)

    if prob > 70 or amount > 0.2:
        warnings.append(SLIPPERY_ROADS)
    elif prob > 40 or amount > 0.05:
        warnings.append(WET_SURFACES)

    if cloud > 85 and (prob > 50 or amount > 0.1):
        warnings.append(LOW_VISIBILITY)

    if sample.apparent_f >= 85:
        warnings.append(HOT_PAVEMENT)

    severity = RoadSeverity.SAFE
    for warning in warnings:
        if warning.level.rank > severity.rank:
            severity = warning.level

    return RoadConditions(severity=severity, warnings=warnings)
