"""Heat stress: WBGT approximation, activity-aware risk and NWS heat index.

## WBGT

WBGT is approximated with the simplified Australian Bureau of Meteorology
formula::

    WBGT(°C) = 0.567 × Ta + 0.393 × e + 3.94

where ``e`` is vapor pressure in hPa from the Magnus saturation formula scaled
by relative humidity. Pressure, solar radiation and cloud cover are accepted
so callers can pass everything they have, but the simplified formula does not
use them. Wind does not enter the formula either.

## Risk tiers

WBGT is not meaningful below 60°F; in that regime the assessment is ``ideal``
with no flag and callers should use feels-like guidance instead. Above it the
tier and flag come from a per-activity table. Hard workouts and long runs hit
``danger`` at 73°F; easy runs stay one tier lower until the 82°F black flag.
"""

from __future__ import annotations

import math

from run_conditions.models.assessment import FlagColor, RiskAssessment, RiskTier
from run_conditions.models.profile import ActivityKind
from run_conditions.physics.units import (
    c_to_f,
    f_to_c,
    rothfusz_heat_index,
    round_half_up,
)

WBGT_THRESHOLDS = {
    "ideal": 50,
    "caution": 60,
    "high_risk": 65,
    "danger": 73,
    "extreme": 82,
}

COOL_MESSAGE = "Cool conditions - use feels-like temperature for guidance."

# Checked top-down; first threshold the WBGT reaches wins.
_RISK_TABLES: dict[ActivityKind, list[tuple[float, RiskTier, FlagColor, str]]] = {
    ActivityKind.WORKOUT: [
        (82, RiskTier.DANGER, FlagColor.BLACK,
         "WBGT ≥82°F—Extreme Heat. Organized events cancelled. "
         "Indoor workout strongly recommended."),
        (73, RiskTier.DANGER, FlagColor.RED,
         "WBGT 73-82°F—Hot/High Risk. Postpone hard workout. "
         "High heat illness risk during intervals."),
        (65, RiskTier.HIGH_RISK, FlagColor.YELLOW,
         "WBGT 65-73°F—Warm/Caution. Reduce intensity. "
         "Performance declines ~0.3-0.4% per °F above ideal."),
        (60, RiskTier.CAUTION, FlagColor.GREEN,
         "WBGT 60-65°F—Upper ideal range. Monitor effort, stay well hydrated."),
    ],
    ActivityKind.LONG_RUN: [
        (82, RiskTier.DANGER, FlagColor.BLACK,
         "WBGT ≥82°F—Extreme Heat. Do not attempt long run. "
         "Extreme heat illness risk over time."),
        (73, RiskTier.DANGER, FlagColor.RED,
         "WBGT 73-82°F—Hot/High Risk. Postpone long run. "
         "Cumulative heat stress too high."),
        (65, RiskTier.HIGH_RISK, FlagColor.YELLOW,
         "WBGT 65-73°F—Warm/Caution. Shorten by 25-30%. "
         "Heat stress compounds over duration."),
        (60, RiskTier.CAUTION, FlagColor.GREEN,
         "WBGT 60-65°F—Manageable but monitor closely. Hydrate every 15-20 min."),
    ],
    ActivityKind.EASY: [
        (82, RiskTier.DANGER, FlagColor.BLACK,
         "WBGT ≥82°F—Extreme Heat. Skip run or move indoors. "
         "Too hot even for easy pace."),
        (73, RiskTier.HIGH_RISK, FlagColor.RED,
         "WBGT 73-82°F—Hot/High Risk. Run very easy, stay in shade, "
         "bring extra water."),
        (65, RiskTier.CAUTION, FlagColor.YELLOW,
         "WBGT 65-73°F—Warm/Caution. Slow down significantly, use shaded routes."),
        (60, RiskTier.CAUTION, FlagColor.GREEN,
         "WBGT 60-65°F—Warm but manageable. Pace by effort, not time."),
    ],
}

# Reached only when no comparison holds, i.e. a NaN WBGT
_FALLBACK_MESSAGES = {
    ActivityKind.WORKOUT: "WBGT 50-60°F—Ideal for hard workouts. Optimal performance conditions.",
    ActivityKind.LONG_RUN: "WBGT 50-60°F—Ideal for long runs. Optimal endurance conditions.",
    ActivityKind.EASY: "WBGT 50-60°F—Ideal running conditions. Comfortable and safe.",
}


def calculate_wbgt(
    temp_f: float,
    humidity: float,
    wind_mph: float = 0.0,
    pressure_hpa: float | None = None,
    solar_radiation_wm2: float | None = None,
    cloud_cover: float | None = 50,
) -> float:
    """Approximate Wet Bulb Globe Temperature in °F.

    Example:
        ```python
        calculate_wbgt(temp_f=85, humidity=70, wind_mph=5)  # ~89.5
        ```
    """
    temp_c = f_to_c(temp_f)
    saturation_hpa = 6.112 * math.exp((17.67 * temp_c) / (temp_c + 243.5))
    vapor_hpa = (humidity / 100) * saturation_hpa
    return c_to_f(0.567 * temp_c + 0.393 * vapor_hpa + 3.94)


def assess_wbgt_risk(
    wbgt_f: float,
    activity: ActivityKind = ActivityKind.EASY,
) -> RiskAssessment:
    """Classify WBGT into a risk tier and flag for the given activity."""
    if wbgt_f < WBGT_THRESHOLDS["caution"]:
        return RiskAssessment(tier=RiskTier.IDEAL, flag=FlagColor.NONE, message=COOL_MESSAGE)

    for threshold, tier, flag, message in _RISK_TABLES[activity]:
        if wbgt_f >= threshold:
            return RiskAssessment(tier=tier, flag=flag, message=message)

    return RiskAssessment(
        tier=RiskTier.IDEAL,
        flag=FlagColor.GREEN,
        message=_FALLBACK_MESSAGES[activity],
    )


def get_wbgt_flag(wbgt_f: float) -> FlagColor:
    """Activity-independent flag color; 82°F and above is black."""
    if wbgt_f < 60:
        return FlagColor.NONE
    if wbgt_f < 65:
        return FlagColor.GREEN
    if wbgt_f < 73:
        return FlagColor.YELLOW
    if wbgt_f < 82:
        return FlagColor.RED
    return FlagColor.BLACK


def calculate_heat_index(temp_f: float, humidity: float) -> float:
    """NWS heat index in °F, rounded to the nearest degree.

    Below 80°F the temperature is returned unchanged. Otherwise the Rothfusz
    regression is applied with the standard adjustments for very dry air
    (RH < 13%, 80-112°F) and very humid air (RH > 85%, 80-87°F).
    """
    if temp_f < 80:
        return temp_f

    heat_index = rothfusz_heat_index(temp_f, humidity)

    if humidity < 13 and 80 <= temp_f <= 112:
        heat_index -= ((13 - humidity) / 4) * math.sqrt((17 - abs(temp_f - 95)) / 17)
    elif humidity > 85 and 80 <= temp_f <= 87:
        heat_index += ((humidity - 85) / 10) * ((87 - temp_f) / 5)

    return round_half_up(heat_index)
