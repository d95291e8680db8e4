"""Dew point and humidity comfort.

Dew point is computed with the Magnus formula (a=17.62, b=243.12). Relative
humidity is floored at 1e-6 before the logarithm so that 0% humidity yields a
very low but finite dew point.
"""

from __future__ import annotations

import math

from run_conditions.models.assessment import (
    ComfortLevel,
    DewPointComfort,
    SeverityColor,
)
from run_conditions.physics.units import c_to_f, clamp, f_to_c

MAGNUS_A = 17.62
MAGNUS_B = 243.12
MIN_HUMIDITY = 1e-6

# (upper bound exclusive, comfort); the last entry catches everything else
COMFORT_LEVELS: list[tuple[float, DewPointComfort]] = [
    (50, DewPointComfort(
        level=ComfortLevel.DRY,
        label="Dry",
        description="Comfortable for most people",
        color=SeverityColor.GREEN,
    )),
    (55, DewPointComfort(
        level=ComfortLevel.COMFORTABLE,
        label="Comfortable",
        description="Pleasant conditions",
        color=SeverityColor.GREEN,
    )),
    (60, DewPointComfort(
        level=ComfortLevel.SLIGHTLY_MUGGY,
        label="Slightly Muggy",
        description="Noticeable humidity",
        color=SeverityColor.YELLOW,
    )),
    (65, DewPointComfort(
        level=ComfortLevel.MODERATE,
        label="Moderately Humid",
        description="Sticky feeling outdoors",
        color=SeverityColor.YELLOW,
    )),
    (70, DewPointComfort(
        level=ComfortLevel.MUGGY,
        label="Muggy",
        description="Uncomfortable for most",
        color=SeverityColor.ORANGE,
    )),
    (75, DewPointComfort(
        level=ComfortLevel.VERY_HUMID,
        label="Very Humid",
        description="Very uncomfortable, oppressive",
        color=SeverityColor.RED,
    )),
    (math.inf, DewPointComfort(
        level=ComfortLevel.OPPRESSIVE,
        label="Oppressive",
        description="Dangerous heat stress possible",
        color=SeverityColor.RED,
    )),
]


def _gamma(temp_c: float, humidity: float) -> float:
    rh = max(humidity, MIN_HUMIDITY)
    return math.log(rh / 100) + (MAGNUS_A * temp_c) / (MAGNUS_B + temp_c)


def dew_point_c(temp_c: float, humidity: float) -> float:
    """Dew point in °C from air temperature (°C) and relative humidity (%)."""
    gamma = _gamma(temp_c, humidity)
    return (MAGNUS_B * gamma) / (MAGNUS_A - gamma)


def dew_point_f(temp_f: float, humidity: float) -> float:
    """Dew point in °F from air temperature (°F) and relative humidity (%).

    Example:
        ```python
        dew_point_f(75, 60)  # ~60.3
        ```
    """
    return c_to_f(dew_point_c(f_to_c(temp_f), humidity))


def get_dew_point_comfort_level(dew_point: float) -> DewPointComfort:
    """Classify a dew point (°F) into one of seven comfort buckets.

    Each bucket is ``[previous bound, bound)``; 75°F and above is oppressive.
    """
    for upper, comfort in COMFORT_LEVELS:
        if dew_point < upper:
            return comfort
    return COMFORT_LEVELS[-1][1]


def relative_humidity_from_dew_point(temp_f: float, dew_point: float) -> float:
    """Relative humidity (%) implied by a temperature and dew point, both °F."""
    temp_c = f_to_c(temp_f)
    dew_c = f_to_c(dew_point)
    actual = math.exp((MAGNUS_A * dew_c) / (MAGNUS_B + dew_c))
    saturation = math.exp((MAGNUS_A * temp_c) / (MAGNUS_B + temp_c))
    return clamp((actual / saturation) * 100, 0, 100)
