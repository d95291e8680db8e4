"""Unit conversions and small numeric helpers.

Weather providers report SI units (°C, m/s, mm) while every decision in this
package is made in imperial units, so conversions live in one place.
"""

from __future__ import annotations

import math

MPH_PER_MS = 2.2369362921
INCHES_PER_MM = 0.0393701


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a value into ``[low, high]``.

    NaN passes through unchanged, matching plain ``min``/``max`` arithmetic
    rather than raising.
    """
    return min(max(value, low), high)


def round_half_up(value: float) -> float:
    """Round to the nearest integer with halves going up.

    Python's ``round`` uses banker's rounding; scores and heat index values
    are reported with .5 always rounding toward positive infinity. Non-finite
    values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def round1(value: float) -> float:
    """Round to one decimal place."""
    return round_half_up(value * 10) / 10


def c_to_f(temp_c: float) -> float:
    return temp_c * 9 / 5 + 32


def f_to_c(temp_f: float) -> float:
    return (temp_f - 32) * 5 / 9


def ms_to_mph(speed_ms: float) -> float:
    return speed_ms * MPH_PER_MS


def mm_to_inches(amount_mm: float) -> float:
    return amount_mm * INCHES_PER_MM


def wind_chill_f(temp_f: float, wind_mph: float) -> float:
    """NWS wind chill formula (no applicability check)."""
    v16 = wind_mph**0.16
    return 35.74 + 0.6215 * temp_f - 35.75 * v16 + 0.4275 * temp_f * v16


def rothfusz_heat_index(temp_f: float, humidity: float) -> float:
    """Raw NWS Rothfusz regression, without correction terms or rounding."""
    t = temp_f
    rh = humidity
    return (
        -42.379
        + 2.04901523 * t
        + 10.14333127 * rh
        - 0.22475541 * t * rh
        - 0.00683783 * t * t
        - 0.05481717 * rh * rh
        + 0.00122874 * t * t * rh
        + 0.00085282 * t * rh * rh
        - 0.00000199 * t * t * rh * rh
    )


def compute_feels_like_f(temp_c: float, wind_ms: float, humidity: float) -> float:
    """Derive a feels-like temperature in °F from SI readings.

    Wind chill applies at or below 50°F with wind above 3 mph; the heat index
    applies at or above 80°F with humidity of at least 40%, and never reports
    a value cooler than the air. Otherwise the air temperature is returned.
    """
    temp_f = c_to_f(temp_c)
    wind_mph = ms_to_mph(wind_ms)

    if temp_f <= 50 and wind_mph > 3:
        return wind_chill_f(temp_f, wind_mph)
    if temp_f >= 80 and humidity >= 40:
        return max(temp_f, rothfusz_heat_index(temp_f, humidity))
    return temp_f
