"""Running condition score.

The score starts at 100 and loses points for each weather factor. Penalties
are computed independently, summed, capped at 99 and subtracted, so the
lowest score weather alone can produce is 1.

## Factors

| Factor        | Shape                                                        |
|---------------|--------------------------------------------------------------|
| temperature   | asymmetric: steep power curve above ideal, gentle below       |
| dew point     | 7-step table keyed to the dew point comfort levels            |
| humidity      | quadratic above 80% when apparent temperature is above 60°F   |
| wind          | quadratic above 2 mph                                         |
| precipitation | probability + amount + ice danger at or below 34°F            |
| UV            | above 6 (long runs: above 5, with a larger cap)               |
| cold synergy  | wind on top of cold, below 35°F apparent                      |
| heat synergy  | dew point above 70°F plus extreme apparent heat above 100°F   |

The ideal apparent temperature depends on the kind of run: hard workouts
generate the most heat and prefer 43°F, long runs 48°F, easy runs 50°F.
"""

from __future__ import annotations

from dataclasses import dataclass

from run_conditions.models.assessment import RunningScore, ScoreBreakdownPart
from run_conditions.models.profile import ActivityKind
from run_conditions.models.weather import WeatherSample
from run_conditions.physics.dew_point import dew_point_f
from run_conditions.physics.units import clamp, round1, round_half_up, wind_chill_f
from run_conditions.scoring.tone import score_based_tone, score_label

IDEAL_TEMP_F = {
    ActivityKind.WORKOUT: 43,
    ActivityKind.LONG_RUN: 48,
    ActivityKind.EASY: 50,
}

HEAT_PENALTY_MAX_TEMP = 85
COLD_PENALTY_MULTIPLIER = 28
COLD_PENALTY_WIDTH_WORKOUT = 22
COLD_PENALTY_WIDTH = 20
PENALTY_CAP = 99
# Ratios are capped before squaring so huge finite inputs cannot overflow
SQUARED_RATIO_MAX = 1e3

# (dew point upper bound exclusive, penalty); 40 at 75°F and above
DEW_POINT_PENALTIES = [(50, 0), (55, 2), (60, 5), (65, 10), (70, 18), (75, 28)]
DEW_POINT_PENALTY_MAX = 40

HUMIDITY_THRESHOLD = 80
HUMIDITY_TEMP_THRESHOLD = 60
HUMIDITY_PENALTY_MAX = 8

WIND_OFFSET = 2
WIND_DIVISOR = 25
WIND_PENALTY_MAX = 40

PRECIP_PROB_PENALTY_MAX = 15
PRECIP_AMOUNT_MULTIPLIER = 160
PRECIP_AMOUNT_PENALTY_MAX = 20
ICE_DANGER_TEMP = 34
ICE_DANGER_PENALTY = 10

UV_THRESHOLD = 6
UV_MULTIPLIER = 2.5
UV_PENALTY_MAX = 10
UV_HEAT_TEMP = 70
UV_WORKOUT_HEAT_PENALTY = 5
UV_LONG_RUN_THRESHOLD = 5
UV_LONG_RUN_MULTIPLIER = 3
UV_LONG_RUN_MAX = 15
UV_LONG_RUN_HEAT_PENALTY = 3

COLD_SYNERGY_TEMP = 35
COLD_SYNERGY_MULTIPLIER = 0.3
COLD_SYNERGY_WIND = 10
COLD_SYNERGY_WIND_MULTIPLIER = 0.6
HEAT_SYNERGY_DEW_POINT = 70
HEAT_SYNERGY_DEW_POINT_MULTIPLIER = 0.6
HEAT_SYNERGY_TEMP = 100
HEAT_SYNERGY_TEMP_DIVISOR = 5
HEAT_SYNERGY_TEMP_MULTIPLIER = 20

_ACTIVITY_NOUNS = {
    ActivityKind.WORKOUT: "workouts",
    ActivityKind.LONG_RUN: "long runs",
    ActivityKind.EASY: "easy runs",
}


@dataclass(frozen=True)
class PenaltyTerms:
    """Raw penalty terms for one weather sample, before any capping."""

    ideal_f: float
    dew_point_f: float
    temperature: float
    dew_point: float
    humidity: float
    wind: float
    precipitation: float
    uv: float
    cold_synergy: float
    heat_synergy: float

    @property
    def total(self) -> float:
        return (
            self.temperature
            + self.dew_point
            + self.humidity
            + self.wind
            + self.precipitation
            + self.uv
            + self.cold_synergy
            + self.heat_synergy
        )


def _squared(ratio: float) -> float:
    return min(ratio, SQUARED_RATIO_MAX) ** 2


def _temperature_penalty(apparent_f: float, ideal: float, activity: ActivityKind) -> float:
    diff = apparent_f - ideal
    if diff >= 0:
        warm_span = max(5, HEAT_PENALTY_MAX_TEMP - ideal)
        return clamp(diff / warm_span, 0, 1) ** 1.6 * 99
    cool_width = (
        COLD_PENALTY_WIDTH_WORKOUT if activity == ActivityKind.WORKOUT else COLD_PENALTY_WIDTH
    )
    return _squared(abs(diff) / cool_width) * COLD_PENALTY_MULTIPLIER


def _dew_point_penalty(dew_point: float) -> float:
    for upper, penalty in DEW_POINT_PENALTIES:
        if dew_point < upper:
            return penalty
    return DEW_POINT_PENALTY_MAX


def _uv_penalty(uv_index: float, apparent_f: float, activity: ActivityKind) -> float:
    # Long runs replace the base UV penalty rather than adding to it
    if activity == ActivityKind.LONG_RUN:
        penalty = clamp(
            max(uv_index - UV_LONG_RUN_THRESHOLD, 0) * UV_LONG_RUN_MULTIPLIER,
            0,
            UV_LONG_RUN_MAX,
        )
        if apparent_f >= UV_HEAT_TEMP:
            penalty += UV_LONG_RUN_HEAT_PENALTY
        return penalty

    penalty = clamp(max(uv_index - UV_THRESHOLD, 0) * UV_MULTIPLIER, 0, UV_PENALTY_MAX)
    if activity == ActivityKind.WORKOUT and apparent_f >= UV_HEAT_TEMP:
        penalty += UV_WORKOUT_HEAT_PENALTY
    return penalty


def compute_penalty_terms(sample: WeatherSample, activity: ActivityKind) -> PenaltyTerms:
    """Compute every penalty term for a sample without capping."""
    apparent = sample.apparent_f
    humidity = sample.humidity
    wind = sample.wind_mph
    ideal = IDEAL_TEMP_F[activity]
    dew_point = dew_point_f(sample.temp_f, humidity)

    humidity_penalty = 0.0
    if humidity > HUMIDITY_THRESHOLD and apparent > HUMIDITY_TEMP_THRESHOLD:
        humidity_penalty = _squared((humidity - HUMIDITY_THRESHOLD) / 20) * HUMIDITY_PENALTY_MAX

    wind_penalty = _squared(max(wind - WIND_OFFSET, 0) / WIND_DIVISOR) * WIND_PENALTY_MAX

    precip_penalty = clamp(
        (sample.precip_prob / 100) * PRECIP_PROB_PENALTY_MAX, 0, PRECIP_PROB_PENALTY_MAX
    ) + clamp(sample.precip_in * PRECIP_AMOUNT_MULTIPLIER, 0, PRECIP_AMOUNT_PENALTY_MAX)
    if apparent <= ICE_DANGER_TEMP and sample.precip_in > 0:
        precip_penalty += ICE_DANGER_PENALTY

    cold_synergy = 0.0
    if apparent < COLD_SYNERGY_TEMP:
        wind_factor = COLD_SYNERGY_WIND_MULTIPLIER if wind > COLD_SYNERGY_WIND else 0
        cold_synergy = (COLD_SYNERGY_TEMP - apparent) * COLD_SYNERGY_MULTIPLIER * wind_factor

    heat_synergy = 0.0
    if dew_point > HEAT_SYNERGY_DEW_POINT:
        heat_synergy += (dew_point - HEAT_SYNERGY_DEW_POINT) * HEAT_SYNERGY_DEW_POINT_MULTIPLIER
    if apparent > HEAT_SYNERGY_TEMP:
        heat_synergy += (
            _squared((apparent - HEAT_SYNERGY_TEMP) / HEAT_SYNERGY_TEMP_DIVISOR)
            * HEAT_SYNERGY_TEMP_MULTIPLIER
        )

    return PenaltyTerms(
        ideal_f=ideal,
        dew_point_f=dew_point,
        temperature=_temperature_penalty(apparent, ideal, activity),
        dew_point=_dew_point_penalty(dew_point),
        humidity=humidity_penalty,
        wind=wind_penalty,
        precipitation=precip_penalty,
        uv=_uv_penalty(sample.uv_index, apparent, activity),
        cold_synergy=cold_synergy,
        heat_synergy=heat_synergy,
    )


def score_from_penalty(total_penalty: float) -> float:
    """Cap the summed penalty at 99, invert and round into 0-100."""
    capped = clamp(total_penalty, 0, PENALTY_CAP)
    return clamp(round_half_up(100 - capped), 0, 100)


def compute_running_score(
    sample: WeatherSample,
    activity: ActivityKind = ActivityKind.EASY,
) -> float:
    """Return the 0-100 running score for a weather sample.

    Example:
        ```python
        sample = WeatherSample(temp_f=50, apparent_f=50, humidity=40)
        compute_running_score(sample)  # 100
        ```
    """
    return score_from_penalty(compute_penalty_terms(sample, activity).total)


# -- Breakdown text ---------------------------------------------------------


def _temperature_reason(diff: float, ideal: float, activity: ActivityKind) -> str:
    if diff >= 0:
        return (
            f"Feels {round_half_up(diff):.0f}°F warmer than ideal for "
            f"{_ACTIVITY_NOUNS[activity]} ({ideal:.0f}°F)"
        )
    return f"Feels {round_half_up(abs(diff)):.0f}°F cooler than ideal ({ideal:.0f}°F)"


def _temperature_tip(diff: float) -> str:
    if diff >= 0:
        if diff > 35:
            return ("Dangerous heat—consider moving indoors. If outside: run very easy, "
                    "take walk breaks every 5-10 min, pour water on head/neck.")
        if diff > 25:
            return ("Extreme heat stress—shorten distance 30-50%, slow pace 60-90s/mile, "
                    "run early morning (before 7am) or late evening only.")
        if diff > 15:
            return ("Significant heat—reduce intensity, add 30-60s/mile to easy pace, "
                    "walk through aid/water stops to keep heart rate controlled.")
        if diff > 8:
            return ("Moderately warm—slow easy pace by 15-30s/mile, sip water every "
                    "15-20 min, choose shaded routes.")
        return ("Slightly warm—dress lighter than you think, stay hydrated, you'll feel "
                "great once you warm up.")

    cold = abs(diff)
    if cold > 25:
        return ("Dangerous cold—indoor run strongly recommended. Outside: cover all skin, "
                "run loops near shelter, bring phone + tell someone your route.")
    if cold > 15:
        return ("Very cold—extend warm-up to 15 min, dress in layers, protect face + "
                "extremities. Watch for ice patches.")
    if cold > 8:
        return ("Cold start—add 5-10 min warm-up, wear gloves + hat, you'll shed layers "
                "after 10-15 min of running.")
    if cold > 3:
        return ("Slightly cool—ideal for faster paces once warmed up. One light extra "
                "layer for the first mile.")
    return "Perfect temperature—minimal adjustments needed."


def _moisture_word(dew_point: float) -> str:
    if dew_point >= 70:
        return "very high"
    if dew_point >= 60:
        return "elevated"
    if dew_point >= 55:
        return "moderate"
    return "comfortable"


def _humidity_tip(dew_point: float) -> str:
    if dew_point >= 75:
        return ("Oppressive humidity—sweat won't evaporate. Slow pace 45-75s/mile, take "
                "walk breaks, hydrate every 10 min. Heat illness escalates fast.")
    if dew_point >= 70:
        return ("Very humid—cooling is impaired. Reduce effort 10-15%, extra hydration, "
                "seek shade, plan bailout points.")
    if dew_point >= 65:
        return ("Muggy conditions—expect to feel warmer than thermometer suggests. Slow "
                "20-30s/mile, stay hydrated, use anti-chafe liberally.")
    if dew_point >= 60:
        return ("Moderate humidity—slight impact on cooling. Stay on top of hydration, "
                "adjust pace by feel.")
    if dew_point >= 55:
        return "Comfortable humidity—minimal impact. Normal hydration strategy works fine."
    return "Low humidity—optimal evaporative cooling. Great day for pushing pace."


def _wind_reason(wind: float, apparent: float) -> str:
    speed = f"{round_half_up(wind):.0f} mph"
    if wind >= 15:
        effect = "+ cold = wind chill danger" if apparent < 40 else "= high aerodynamic cost"
        return f"Strong {speed} winds {effect}"
    effect = "increasing cold perception" if apparent < 50 else "adding resistance"
    return f"{speed} winds {effect}"


def _wind_tip(wind: float, apparent: float) -> str:
    if apparent < 40 and wind >= 15:
        return ("Dangerous wind chill—frostbite possible in 30 min. Cover all skin, "
                "windproof outer layer required. Indoor run recommended.")
    if wind >= 20:
        return ("Very strong winds—plan short out-and-back (start into wind). Accept "
                "20-40s/mile slower into headwind. Use buildings/trees for wind breaks.")
    if wind >= 15:
        return ("Strong winds—tactical route planning matters. Start into wind, finish "
                "with tailwind when tired. Effort > pace today.")
    if wind >= 10 and apparent < 50:
        return ("Breezy + cold combo—windproof layer helps. Face wind early, save "
                "tailwind for when you're fatigued.")
    if wind >= 10:
        return ("Moderate winds—slight aerodynamic drag. Plan loops to alternate wind "
                "directions, or embrace it as resistance training.")
    return "Calm conditions—wind won't be a factor today."


def _precipitation_reason(sample: WeatherSample) -> str:
    chance = f"{round_half_up(sample.precip_prob):.0f}%"
    if sample.apparent_f <= ICE_DANGER_TEMP and sample.precip_in > 0:
        return f"{chance} precip chance + freezing temps = ICE RISK"
    return f'{chance} chance, {sample.precip_in:.2f}" expected'


def _precipitation_tip(sample: WeatherSample) -> str:
    prob = sample.precip_prob
    amount = sample.precip_in
    if sample.apparent_f <= ICE_DANGER_TEMP and (prob >= 40 or amount > 0.02):
        return ("DANGER: Ice/freezing rain likely. Treadmill strongly recommended. "
                "Outside = high injury risk from falls.")
    if prob >= 80 or amount > 0.25:
        return ("Heavy rain expected—waterproof shell + cap mandatory. Change routes to "
                "avoid trail/unpaved (will be muddy). Dry socks + shoes ready post-run.")
    if prob >= 60 or amount > 0.1:
        return ("Likely rain—bring packable shell even if dry at start. Avoid painted "
                "road markings (slick when wet). Body Glide on feet prevents wet blisters.")
    if prob >= 40:
        return ("Rain possible—check radar before heading out. Cap keeps rain off face, "
                "rain shell in pocket as insurance.")
    if prob >= 20:
        return ("Slight rain chance—probably fine without rain gear, but check forecast "
                "right before you go.")
    return "Dry conditions expected—no rain gear needed."


def _uv_reason(uv_index: float) -> str:
    suffix = ""
    if uv_index >= 8:
        suffix = " — skin damage risk"
    elif uv_index >= 6:
        suffix = " — high exposure"
    return f"UV index {round_half_up(uv_index):.0f}{suffix}"


def _uv_tip(uv_index: float) -> str:
    if uv_index >= 9:
        return ("Extreme UV—skin damage in 15 min. SPF 50+ required, reapply if sweating "
                "heavily. Sunglasses + visor/cap mandatory. Run before 9am or after 5pm.")
    if uv_index >= 7:
        return ("Very high UV—SPF 30+ sunscreen 20 min before run. Cover shoulders, wear "
                "hat + sunglasses. Early morning or evening strongly preferred.")
    if uv_index >= 5:
        return ("High UV—sunscreen recommended for runs >30 min. Wear a cap, consider "
                "arm sleeves for long runs.")
    if uv_index >= 3:
        return ("Moderate UV—sunscreen for runs >60 min or if fair-skinned. Less concern "
                "in early morning/evening.")
    return "Low UV—minimal sun protection needed today."


def _uv_max(activity: ActivityKind) -> float:
    if activity == ActivityKind.LONG_RUN:
        return UV_LONG_RUN_MAX + UV_LONG_RUN_HEAT_PENALTY
    if activity == ActivityKind.WORKOUT:
        return UV_PENALTY_MAX + UV_WORKOUT_HEAT_PENALTY
    return UV_PENALTY_MAX


def _part(
    key: str,
    label: str,
    raw: float,
    max_penalty: float,
    reason: str,
    tip: str | None,
) -> ScoreBreakdownPart:
    return ScoreBreakdownPart(
        key=key,
        label=label,
        penalty=clamp(round1(raw), 0, max_penalty),
        max_penalty=max_penalty,
        reason=reason,
        tip=tip,
    )


def build_breakdown(
    sample: WeatherSample,
    activity: ActivityKind,
    terms: PenaltyTerms,
) -> list[ScoreBreakdownPart]:
    """Explain each penalty term, in a fixed factor order."""
    apparent = sample.apparent_f
    diff = apparent - terms.ideal_f
    dew_point = terms.dew_point_f

    if terms.cold_synergy > 0:
        chill = wind_chill_f(apparent, sample.wind_mph)
        cold_reason = (
            f"Feels like {round_half_up(chill):.0f}°F "
            f"({round_half_up(apparent - chill):.0f}°F colder due to wind) — frostbite risk"
        )
        cold_tip = ("Cover all exposed skin—ears, face, hands. Windproof layers critical. "
                    "Frostbite can occur in <30 min in severe wind chill.")
    else:
        cold_reason, cold_tip = "No wind chill penalty", None

    if terms.heat_synergy > 0:
        heat_reason = (
            "Heat + humidity = compounding thermal load. Effective temp feels "
            f"{round_half_up(apparent + (dew_point - 60) * 0.5):.0f}°F"
        )
        heat_tip = ("Heat illness develops fast in humid heat—slow pace significantly, "
                    "hydrate aggressively, pour water on head/neck, take walk breaks liberally.")
    else:
        heat_reason, heat_tip = "No compounding heat stress", None

    return [
        _part("temperature", "Temperature", terms.temperature, 99,
              _temperature_reason(diff, terms.ideal_f, activity), _temperature_tip(diff)),
        _part("dew_point", "Dew Point", terms.dew_point, DEW_POINT_PENALTY_MAX,
              f"Dew point {round_half_up(dew_point):.0f}°F — "
              f"{_moisture_word(dew_point)} moisture in air",
              _humidity_tip(dew_point)),
        _part("humidity", "Humidity", terms.humidity, HUMIDITY_PENALTY_MAX,
              f"{round_half_up(sample.humidity):.0f}% relative humidity",
              _humidity_tip(dew_point) if terms.humidity > 0 else None),
        _part("wind", "Wind", terms.wind, WIND_PENALTY_MAX,
              _wind_reason(sample.wind_mph, apparent), _wind_tip(sample.wind_mph, apparent)),
        _part("precipitation", "Precipitation", terms.precipitation,
              PRECIP_PROB_PENALTY_MAX + PRECIP_AMOUNT_PENALTY_MAX + ICE_DANGER_PENALTY,
              _precipitation_reason(sample), _precipitation_tip(sample)),
        _part("uv", "UV / Sun", terms.uv, _uv_max(activity),
              _uv_reason(sample.uv_index), _uv_tip(sample.uv_index)),
        _part("cold_synergy", "Wind Chill", terms.cold_synergy, 15, cold_reason, cold_tip),
        _part("heat_synergy", "Heat Stress", terms.heat_synergy, 99, heat_reason, heat_tip),
    ]


def compute_score_breakdown(
    sample: WeatherSample,
    activity: ActivityKind = ActivityKind.EASY,
) -> RunningScore:
    """Score a sample and explain every contributing factor.

    The score is computed from the raw penalty sum; the per-part penalties in
    the breakdown are rounded to one decimal and clamped to each factor's
    maximum for display.
    """
    terms = compute_penalty_terms(sample, activity)
    score = score_from_penalty(terms.total)
    return RunningScore(
        score=score,
        label=score_label(score),
        tone=score_based_tone(score),
        ideal_f=terms.ideal_f,
        dew_point_f=terms.dew_point_f,
        total_penalty=terms.total,
        breakdown=build_breakdown(sample, activity, terms),
    )
