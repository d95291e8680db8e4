"""Temperature models and tier tables used by the outfit selector.

## Effective temperature

The outfit selector does not use the score engine's temperature model. It
starts from the apparent temperature and shifts it for the runner and for
conditions the feels-like value ignores:

- ``+5°F`` per unit of temperature sensitivity
- wind: up to ``-5°F`` when below 50°F with wind above 10 mph
- humidity: up to ``+8°F`` when above 55°F with humidity above 60%
- sun: up to ``+6°F`` in daylight with UV above 3 and above 45°F
- rain: ``-3°F`` when precipitation is likely below 60°F

## Glove tiers

A tier is required when the glove comparison temperature falls below its
threshold *or* the wind reaches its wind threshold. Runners with cold hands
use a warmer table and compare 3°F colder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from run_conditions.models.profile import Gender
from run_conditions.models.recommendation import SockTier
from run_conditions.models.weather import WeatherSample
from run_conditions.physics.units import wind_chill_f

NO_GLOVES_ABOVE_F = 60
COLD_HANDS_OFFSET_F = 3

HANDS_LABELS = ("None", "Light gloves", "Medium gloves", "Mittens", "Mittens + liner")


@dataclass(frozen=True)
class GloveThresholds:
    """Temperatures (°F) below which, and winds (mph) at which, a tier is needed."""

    light: float
    medium: float
    mittens: float
    liner: float
    wind_light: float
    wind_medium: float
    wind_mittens: float


STANDARD_GLOVES = GloveThresholds(
    light=55, medium=45, mittens=30, liner=15,
    wind_light=8, wind_medium=12, wind_mittens=15,
)
COLD_HANDS_GLOVES = GloveThresholds(
    light=60, medium=42, mittens=30, liner=18,
    wind_light=5, wind_medium=8, wind_mittens=12,
)


def calculate_effective_temp(sample: WeatherSample, temp_sensitivity: float = 0.0) -> float:
    """Apparent temperature adjusted for the runner, wind, humidity, sun and rain."""
    apparent = sample.apparent_f
    effective = apparent + temp_sensitivity * 5

    if apparent < 50 and sample.wind_mph > 10:
        effective -= min((sample.wind_mph - 10) * 0.3, 5)
    if apparent > 55 and sample.humidity > 60:
        effective += ((sample.humidity - 60) / 40) * 8
    if sample.is_day and sample.uv_index > 3 and apparent > 45:
        effective += min((sample.uv_index - 3) * 1.5, 6)
    if sample.precip_prob > 50 and apparent < 60:
        effective -= 3

    return effective


def face_wind_chill(temp_f: float, wind_mph: float) -> float:
    """Wind chill used for face protection; passthrough above 50°F or below 3 mph."""
    if temp_f > 50 or wind_mph < 3:
        return temp_f
    return wind_chill_f(temp_f, wind_mph)


# (upper bound exclusive, garments); bands from coldest to warmest
_BASE_LAYER_BANDS: list[tuple[float, tuple[str, ...]]] = [
    (0, ("thermal_tights", "long_sleeve", "insulated_jacket", "balaclava", "beanie",
         "neck_gaiter", "mittens", "mittens_liner")),
    (10, ("thermal_tights", "long_sleeve", "insulated_jacket", "balaclava",
          "neck_gaiter", "mittens", "mittens_liner")),
    (20, ("thermal_tights", "long_sleeve", "insulated_jacket", "beanie",
          "neck_gaiter", "mittens")),
    (32, ("thermal_tights", "long_sleeve", "vest", "beanie", "medium_gloves",
          "neck_gaiter")),
    (38, ("tights", "long_sleeve", "vest", "headband", "light_gloves")),
    (45, ("tights", "long_sleeve", "headband", "light_gloves")),
    (52, ("tights", "long_sleeve", "light_gloves")),
    (62, ("shorts", "short_sleeve")),
]


def base_layers_for_temp(adjusted_f: float, gender: Gender) -> frozenset[str]:
    """Base garment set for a temperature band.

    Female profiles always include a sports bra. Between 62°F and 70°F the top
    is a tank (female) or tee (male); at 70°F and above it is split shorts and
    a cap, with a tank for female profiles.
    """
    gear: set[str] = set()
    for upper, garments in _BASE_LAYER_BANDS:
        if adjusted_f < upper:
            gear.update(garments)
            break
    else:
        if adjusted_f < 70:
            gear.add("shorts")
            gear.add("tank_top" if gender == Gender.FEMALE else "short_sleeve")
        else:
            gear.update(("split_shorts", "cap"))
            if gender == Gender.FEMALE:
                gear.add("tank_top")

    if gender == Gender.FEMALE:
        gear.add("sports_bra")
    return frozenset(gear)


def required_glove_keys(
    glove_temp_f: float,
    wind_mph: float,
    thresholds: GloveThresholds,
) -> frozenset[str]:
    """Glove items for the single required tier; empty when none is needed."""
    if not glove_temp_f < NO_GLOVES_ABOVE_F:
        return frozenset()
    if glove_temp_f < thresholds.liner:
        return frozenset(("mittens", "mittens_liner"))
    if glove_temp_f < thresholds.mittens or wind_mph >= thresholds.wind_mittens:
        return frozenset(("mittens",))
    if glove_temp_f < thresholds.medium or wind_mph >= thresholds.wind_medium:
        return frozenset(("medium_gloves",))
    if glove_temp_f < thresholds.light or wind_mph >= thresholds.wind_light:
        return frozenset(("light_gloves",))
    return frozenset()


def choose_socks(sample: WeatherSample) -> SockTier:
    """Sock tier from apparent temperature, precipitation, wind and humidity.

    Cold and wet or windy conditions escalate to double socks; warm, or mild
    and humid, conditions always get light socks.
    """
    apparent = sample.apparent_f
    tier = SockTier.LIGHT

    if apparent <= 50:
        tier = SockTier.HEAVY
    if (
        apparent <= 25
        or (apparent <= 32 and (sample.precip_in > 0 or sample.precip_prob >= 60))
        or (apparent <= 30 and sample.wind_mph >= 15)
    ):
        tier = SockTier.DOUBLE
    if apparent >= 70 or (apparent >= 60 and sample.humidity >= 75):
        tier = SockTier.LIGHT

    return tier


def hands_level_from_gear(keys: Iterable[str]) -> int:
    """Hand protection 0-4 from a set of gear keys."""
    keys = set(keys)
    if "mittens" in keys and "mittens_liner" in keys:
        return 4
    if "mittens" in keys:
        return 3
    if "medium_gloves" in keys:
        return 2
    if "light_gloves" in keys:
        return 1
    return 0


def hands_label(level: int) -> str:
    if 0 <= level < len(HANDS_LABELS):
        return HANDS_LABELS[level]
    return HANDS_LABELS[0]
