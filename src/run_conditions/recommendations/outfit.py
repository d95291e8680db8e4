"""Outfit selection.

Builds two gear lists for a run, "performance" (lighter, less restrictive) and
"comfort" (warmer, more coverage), from a weather sample, a runner profile
and, for long runs, the next couple of forecast hours.

## Pipeline

Every stage is a pure function ``(gear, context) -> gear`` over a frozenset of
catalog keys, so each rule can be tested on its own:

1. base layers for the adjusted temperature
2. shared modifiers (outer layers, rain, wind, sun, humidity, arm sleeves,
   face and head, long-run kit)
3. the single required glove tier
4. variant tweaks, applied separately to a performance and a comfort copy
5. exclusive-group conflict resolution
6. the sock tier, identical for both variants

Example:
    ```python
    selector = OutfitSelector()
    result = selector.select(sample, RunProfile(activity=ActivityKind.LONG_RUN))
    for item in result.comfort:
        print(item.label)
    ```
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Sequence

from run_conditions.models.profile import Gender, RunProfile
from run_conditions.models.recommendation import OutfitResult
from run_conditions.models.weather import ForecastPoint, WeatherSample
from run_conditions.recommendations.catalog import (
    COMFORT_ORDER,
    GLOVE_KEYS,
    PERFORMANCE_ORDER,
    SOCK_KEYS,
    resolve_conflicts,
    to_items,
)
from run_conditions.recommendations.layers import (
    COLD_HANDS_GLOVES,
    COLD_HANDS_OFFSET_F,
    STANDARD_GLOVES,
    base_layers_for_temp,
    calculate_effective_temp,
    choose_socks,
    face_wind_chill,
    hands_level_from_gear,
    required_glove_keys,
)

logger = logging.getLogger(__name__)

LOOK_AHEAD_POINTS = 2
RAIN_PROB_THRESHOLD = 50
RAIN_AMOUNT_THRESHOLD = 0.05
WORKOUT_WARMTH_F = 10
LONG_RUN_WARMING_CAP_F = 5


@dataclass(frozen=True)
class LookAhead:
    """What the next forecast hours add to a long-run decision."""

    temp_change: float
    max_precip_prob: float
    max_uv: float
    will_rain: bool

    @classmethod
    def scan(
        cls,
        sample: WeatherSample,
        forecast: Sequence[ForecastPoint],
        points: int = LOOK_AHEAD_POINTS,
    ) -> LookAhead:
        """Scan upcoming points; missing fields are skipped.

        ``temp_change`` is the largest rise in apparent temperature, never
        negative. A NaN apparent temperature, current or forecast, makes it
        NaN for the rest of the scan.
        """
        temp_change = 0.0
        max_precip_prob = sample.precip_prob
        max_uv = sample.uv_index
        will_rain = (
            sample.precip_prob > RAIN_PROB_THRESHOLD
            or sample.precip_in > RAIN_AMOUNT_THRESHOLD
        )

        for point in forecast[:points]:
            if point.apparent_f is not None:
                rise = point.apparent_f - sample.apparent_f
                temp_change = rise if math.isnan(rise) else max(temp_change, rise)
            if point.precip_prob is not None:
                max_precip_prob = max(max_precip_prob, point.precip_prob)
                if point.precip_prob > RAIN_PROB_THRESHOLD:
                    will_rain = True
            if point.precip_in is not None and point.precip_in > RAIN_AMOUNT_THRESHOLD:
                will_rain = True
            if point.uv_index is not None:
                max_uv = max(max_uv, point.uv_index)

        return cls(
            temp_change=temp_change,
            max_precip_prob=max_precip_prob,
            max_uv=max_uv,
            will_rain=will_rain,
        )

    @classmethod
    def current_only(cls, sample: WeatherSample) -> LookAhead:
        return cls.scan(sample, ())


@dataclass(frozen=True)
class OutfitContext:
    """Everything a stage may look at; built once per selection."""

    sample: WeatherSample
    profile: RunProfile
    effective_f: float
    adjusted_f: float
    glove_f: float
    look_ahead: LookAhead

    @property
    def apparent(self) -> float:
        return self.sample.apparent_f

    @property
    def wind(self) -> float:
        return self.sample.wind_mph

    @property
    def workout(self) -> bool:
        return self.profile.is_workout

    @property
    def long_run(self) -> bool:
        return self.profile.is_long_run

    @property
    def male(self) -> bool:
        return self.profile.gender == Gender.MALE

    @classmethod
    def build(
        cls,
        sample: WeatherSample,
        profile: RunProfile,
        forecast: Sequence[ForecastPoint] = (),
    ) -> OutfitContext:
        effective = calculate_effective_temp(sample, profile.temp_sensitivity)
        if profile.is_long_run:
            look_ahead = LookAhead.scan(sample, forecast)
            adjusted = effective + min(look_ahead.temp_change * 0.5, LONG_RUN_WARMING_CAP_F)
        else:
            look_ahead = LookAhead.current_only(sample)
            adjusted = effective
            if profile.is_workout:
                adjusted += WORKOUT_WARMTH_F

        glove = adjusted - COLD_HANDS_OFFSET_F if profile.cold_hands else adjusted
        return cls(
            sample=sample,
            profile=profile,
            effective_f=effective,
            adjusted_f=adjusted,
            glove_f=glove,
            look_ahead=look_ahead,
        )


Stage = Callable[[frozenset, OutfitContext], frozenset]


def _swap(gear: frozenset[str], old: str, new: str) -> frozenset[str]:
    return (gear - {old}) | {new}


# -- Shared modifiers ------------------------------------------------------


def adaptive_outer_layer(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    """Light jacket when cold and breezy or damp; vest when cool and windy."""
    sample = ctx.sample
    if ctx.effective_f <= 35 and (
        ctx.wind >= 10 or sample.precip_prob > 30 or sample.precip_in > 0.02
    ):
        gear = gear | {"light_jacket"}
    if ctx.effective_f <= 42 and ctx.wind >= 8:
        gear = gear | {"vest"}
    return gear


def rain_protection(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    sample = ctx.sample
    if (
        sample.precip_prob > RAIN_PROB_THRESHOLD
        or sample.precip_in > RAIN_AMOUNT_THRESHOLD
        or (ctx.long_run and ctx.look_ahead.will_rain)
    ):
        gear = gear | {"rain_shell", "brim_cap"}
    return gear


def windbreaker(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    """Windbreaker by apparent-temperature band.

    Never at 60°F or above, and never below 35°F where jackets take over.
    """
    ambient = ctx.apparent
    covered = "rain_shell" in gear or "light_jacket" in gear

    if ambient >= 60:
        needed = False
    elif ambient >= 55:
        needed = ctx.long_run and ctx.wind >= 20
    elif ambient >= 50:
        needed = ctx.wind >= 10 and "rain_shell" not in gear
    elif ambient >= 40:
        needed = not covered
    elif ambient >= 35:
        if "long_sleeve" not in gear and "light_jacket" not in gear:
            gear = gear | {"long_sleeve"}
        needed = not covered
    else:
        needed = False

    if needed:
        gear = gear | {"windbreaker"}
    return gear


def wind_vest(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    """Core wind protection below the windbreaker range."""
    if (
        ctx.wind >= 15
        and ctx.apparent < 35
        and not gear & {"windbreaker", "rain_shell", "light_jacket"}
    ):
        gear = gear | {"vest"}
    return gear


def sun_protection(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    if ctx.sample.uv_index >= 7 or (ctx.long_run and ctx.look_ahead.max_uv >= 6):
        if "brim_cap" not in gear:
            gear = gear | {"cap"}
        gear = gear | {"sunglasses", "sunscreen"}
    return gear


def humid_heat_kit(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    if ctx.sample.humidity >= 75 and ctx.apparent >= 65:
        gear = gear | {"anti_chafe", "hydration"}
    return gear


def arm_sleeves(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    """Required or optional arm sleeves from temperature, UV, humidity and wind."""
    feels = ctx.effective_f
    uv = ctx.sample.uv_index
    humidity = ctx.sample.humidity
    max_uv = ctx.look_ahead.max_uv

    needed = False
    optional = False

    if feels < 45:
        needed = True
    elif 45 <= feels <= 60:
        optional = True

    if uv >= 8:
        needed = True
    elif 3 <= uv < 8:
        if feels <= 60 or (ctx.long_run and max_uv >= 6):
            needed = True
        elif feels > 60:
            optional = True

    # Dry full sun: thin sleeves help evaporative cooling
    if feels > 60 and humidity < 50 and uv >= 3:
        needed, optional = True, False
    # Humid heat: sleeves feel clammy
    if feels > 60 and humidity >= 75 and uv < 8:
        needed, optional = False, uv >= 3
    if feels < 60 and ctx.wind >= 15:
        needed, optional = True, False

    if ctx.long_run:
        if ctx.look_ahead.temp_change > 8:
            optional = True
        if max_uv >= 6 and feels <= 65:
            needed = True

    if needed:
        return gear | {"arm_sleeves"}
    if optional:
        return gear | {"arm_sleeves_optional"}
    return gear


def face_and_head(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    """Balaclava, beanie and neck gaiter tiers; colder tiers add to milder ones."""
    effective = ctx.effective_f
    wind = ctx.wind

    if effective <= 20 and wind >= 15:
        if ctx.workout:
            gear = (gear | {"balaclava"}) - {"beanie"}
        else:
            gear = gear | {"neck_gaiter"}

    if effective <= 10:
        if ctx.workout:
            gear = (gear | {"balaclava"}) - {"beanie"}
        else:
            gear = gear | {"balaclava"}
            if ctx.long_run:
                gear = gear | {"neck_gaiter"}

    if effective <= 0 or face_wind_chill(effective, wind) <= 0:
        gear = gear | {"balaclava", "neck_gaiter"}
        if not ctx.workout:
            gear = gear | {"beanie"}

    # Hard efforts in milder cold only need an ear band
    if ctx.workout and 20 < effective < 35 and "beanie" in gear and wind < 10:
        gear = _swap(gear, "beanie", "headband")

    return gear


def long_run_kit(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    if not ctx.long_run:
        return gear
    gear = gear | {"hydration", "anti_chafe"}
    if ctx.apparent > 50:
        gear = gear | {"energy_nutrition"}
    if ctx.look_ahead.max_precip_prob > RAIN_PROB_THRESHOLD:
        gear = gear | {"rain_shell"}
    return gear


def glove_tier(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    """Replace whatever gloves are present with the single required tier."""
    thresholds = COLD_HANDS_GLOVES if ctx.profile.cold_hands else STANDARD_GLOVES
    required = required_glove_keys(ctx.glove_f, ctx.wind, thresholds)
    return (gear - frozenset(GLOVE_KEYS)) | required


SHARED_STAGES: tuple[Stage, ...] = (
    adaptive_outer_layer,
    rain_protection,
    windbreaker,
    wind_vest,
    sun_protection,
    humid_heat_kit,
    arm_sleeves,
    face_and_head,
    long_run_kit,
    glove_tier,
)


# -- Variant tweaks --------------------------------------------------------


def performance_tweaks(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    """Lighter kit: downgrade insulation, gloves and coverage."""
    effective = ctx.effective_f
    wind = ctx.wind

    if "insulated_jacket" in gear and (ctx.workout or effective > 15):
        gear = _swap(gear, "insulated_jacket", "light_jacket")
    if "vest" in gear and "light_jacket" in gear:
        gear = gear - {"vest"}

    gear = gear - {"mittens_liner"}
    if "mittens" in gear and effective > 25:
        gear = _swap(gear, "mittens", "medium_gloves")
    if "medium_gloves" in gear and effective > 40:
        gear = _swap(gear, "medium_gloves", "light_gloves")
    if "light_gloves" in gear and ctx.glove_f > 50:
        gear = gear - {"light_gloves"}

    if "vest" in gear and effective >= 38 and wind < 10:
        gear = gear - {"vest"}
    if "tights" in gear and 40 <= effective < 45 and wind < 10:
        gear = _swap(gear, "tights", "shorts")
    if "tights" in gear and effective >= 45:
        gear = _swap(gear, "tights", "shorts")
    if "long_sleeve" in gear and effective >= 52:
        gear = _swap(gear, "long_sleeve", "short_sleeve")

    if ctx.male:
        if ctx.workout and effective >= 50:
            gear = gear - {"long_sleeve", "short_sleeve", "tank_top"}
        elif not ctx.workout and effective > 60:
            gear = gear - {"short_sleeve", "tank_top"}

    return gear


def comfort_tweaks(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    """Warmer kit: add insulation earlier and upgrade gloves."""
    effective = ctx.effective_f

    if effective <= 35:
        gear = gear | {"light_jacket"}
    if effective <= 42:
        gear = gear | {"vest"}

    if "light_gloves" in gear and effective < 40:
        gear = _swap(gear, "light_gloves", "medium_gloves")
    if "medium_gloves" in gear and effective < 25:
        gear = _swap(gear, "medium_gloves", "mittens")
    if effective < 10 and "mittens" in gear:
        gear = gear | {"mittens_liner"}

    if effective < 33 or ctx.wind >= 18:
        gear = gear | {"neck_gaiter"}
    if ctx.male and ctx.adjusted_f >= 70:
        gear = gear | {"short_sleeve"}

    return gear


def with_socks(gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
    return (gear - frozenset(SOCK_KEYS)) | {choose_socks(ctx.sample).value}


class OutfitSelector:
    """Runs the outfit pipeline.

    Stages can be swapped for experiments; the defaults reproduce the standard
    recommendations.
    """

    def __init__(
        self,
        shared_stages: Sequence[Stage] = SHARED_STAGES,
        performance_stage: Stage = performance_tweaks,
        comfort_stage: Stage = comfort_tweaks,
    ):
        self.shared_stages = tuple(shared_stages)
        self.performance_stage = performance_stage
        self.comfort_stage = comfort_stage

    def unified_gear(self, ctx: OutfitContext) -> frozenset[str]:
        """Gear shared by both variants, before any variant tweak."""
        gear = base_layers_for_temp(ctx.adjusted_f, ctx.profile.gender)
        for stage in self.shared_stages:
            gear = stage(gear, ctx)
        return gear

    def _finish(self, gear: frozenset[str], ctx: OutfitContext) -> frozenset[str]:
        return with_socks(resolve_conflicts(gear), ctx)

    def select(
        self,
        sample: WeatherSample,
        profile: RunProfile,
        forecast: Sequence[ForecastPoint] = (),
    ) -> OutfitResult:
        """Pick performance and comfort outfits.

        Args:
            sample: Current conditions
            profile: Runner profile
            forecast: Upcoming points, nearest first; consulted for long runs only

        Returns:
            OutfitResult with both ordered gear lists
        """
        ctx = OutfitContext.build(sample, profile, forecast)
        unified = self.unified_gear(ctx)

        performance = self._finish(self.performance_stage(unified, ctx), ctx)
        comfort = self._finish(self.comfort_stage(unified, ctx), ctx)

        # Glove picks are driven by the cold-hands table when the flag is set
        tagged = frozenset(GLOVE_KEYS) if profile.cold_hands else frozenset()
        sock_tier = choose_socks(sample)

        logger.debug(
            f"Outfit for {profile.activity.value}: effective={ctx.effective_f:.1f}°F "
            f"adjusted={ctx.adjusted_f:.1f}°F, {len(performance)} performance / "
            f"{len(comfort)} comfort items"
        )

        return OutfitResult(
            performance=to_items(performance, PERFORMANCE_ORDER, tagged),
            comfort=to_items(comfort, COMFORT_ORDER, tagged),
            hands_level=hands_level_from_gear(comfort),
            sock_tier=sock_tier,
            effective_temp_f=ctx.effective_f,
            adjusted_temp_f=ctx.adjusted_f,
        )


def outfit_for(
    sample: WeatherSample,
    profile: RunProfile,
    forecast: Sequence[ForecastPoint] = (),
) -> OutfitResult:
    """Convenience wrapper around a default ``OutfitSelector``."""
    return OutfitSelector().select(sample, profile, forecast)
