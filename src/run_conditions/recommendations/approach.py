"""Coaching tips for how to approach a run.

Tips are built from the score band, the dominant score factors, road hazards,
the WBGT risk and, for long runs, what the next forecast hours bring. The
runner's boldness shifts every score band by 7 points per step and trims the
more cautious warnings for bold runners.

## Score bands (after the boldness shift)

| Band   | Headline                               |
|--------|----------------------------------------|
| 85+    | go for it                              |
| 70-84  | heads-up about the lead factor         |
| 55-69  | adjust effort for the lead factor      |
| 40-54  | shorten it and stay close to home      |
| < 40   | move indoors                           |

Example:
    ```python
    score = compute_score_breakdown(sample, profile.activity)
    approach = make_approach_tips(score, sample, profile)
    print(approach.pace)
    ```
"""

from __future__ import annotations

import logging

from run_conditions.models.assessment import HeatStressAssessment, RiskTier, RunningScore
from run_conditions.models.profile import RunProfile
from run_conditions.models.recommendation import (
    ApproachTips,
    RoadConditions,
    RoadSeverity,
)
from run_conditions.models.weather import WeatherSample

logger = logging.getLogger(__name__)

BOLDNESS_SCORE_STEP = 7
GREAT_SCORE = 85
GOOD_SCORE = 70
FAIR_SCORE = 55
POOR_SCORE = 40

EXTREME_COLD_F = 10
VERY_COLD_F = 32
EXTREME_HEAT_F = 85
VERY_HOT_F = 75
HUMID_DEW_POINT_F = 65
VERY_HUMID_DEW_POINT_F = 70
WINDY_MPH = 15
VERY_WINDY_MPH = 20
ICE_TEMP_F = 34
WBGT_TIPS_MIN_APPARENT_F = 65
DEFAULT_CLOUD_COVER = 50

HUMIDITY_KEYS = ("humidity", "dew_point")


def _penalty(score: RunningScore, key: str) -> float:
    return next((part.penalty for part in score.breakdown if part.key == key), 0.0)


# -- Headline ----------------------------------------------------------------


def _good_day_context(lead: str | None, apparent: float) -> str:
    if lead == "temperature":
        return "warmth" if apparent > 60 else "cold"
    if lead in HUMIDITY_KEYS:
        return "humidity"
    if lead == "wind":
        return "wind"
    return "conditions"


def _fair_day_reason(lead: str | None, apparent: float) -> str:
    if lead == "temperature" and apparent > 70:
        return "heat"
    if lead == "temperature" and apparent < 40:
        return "cold"
    if lead in HUMIDITY_KEYS:
        return "humidity making it hard to cool down"
    if lead == "wind":
        return "strong winds"
    if lead == "heat_synergy":
        return "heat and humidity combo"
    if lead == "cold_synergy":
        return "wind chill"
    return "weather"


def _poor_day_factor(key: str, apparent: float) -> str | None:
    if key == "temperature" and apparent > 75:
        return "heat"
    if key == "temperature" and apparent < 35:
        return "cold"
    if key in HUMIDITY_KEYS:
        return "oppressive humidity"
    if key == "wind":
        return "high winds"
    if key == "precipitation":
        return "rain/precipitation"
    if key == "heat_synergy":
        return "dangerous heat index"
    if key == "cold_synergy":
        return "severe wind chill"
    return None


def _critical_factor(key: str, apparent: float) -> str | None:
    if key == "temperature" and apparent > 85:
        return "extreme heat"
    if key == "temperature" and apparent < 20:
        return "extreme cold"
    if key == "heat_synergy":
        return "heat illness risk"
    if key == "cold_synergy":
        return "frostbite risk"
    if key == "precipitation" and apparent <= ICE_TEMP_F:
        return "ice danger"
    if key == "wind" and apparent < 35:
        return "dangerous wind chill"
    return None


def _headline(adjusted: float, tops: list[str], apparent: float, profile: RunProfile) -> str:
    """One sentence setting the tone for the day."""
    lead = tops[0] if tops else None

    if adjusted >= GREAT_SCORE:
        if profile.is_workout:
            return "Great day for a hard workout! Conditions are dialed in."
        if profile.is_long_run:
            return "Beautiful day for miles. Enjoy it out there."
        return "Perfect running weather. Get after it!"

    if adjusted >= GOOD_SCORE:
        context = _good_day_context(lead, apparent)
        if profile.is_workout:
            return (f"Solid conditions for speed work. The {context} will make it feel a "
                    "bit harder, but nothing major.")
        if profile.is_long_run:
            return (f"Good day for your long run. The {context} will add some resistance, "
                    "but you'll be fine.")
        return (f"Nice day for a run. The {context} might slow you down slightly—just run "
                "by feel rather than chasing the watch.")

    if adjusted >= FAIR_SCORE:
        reason = _fair_day_reason(lead, apparent)
        if profile.is_workout:
            return (f"Tough day for intervals with the {reason}. Shorten the reps or convert "
                    "to a tempo if you're not feeling it. No shame in being smart.")
        if profile.is_long_run:
            return (f"The {reason} is going to make this a grind. Maybe trim a couple miles "
                    "or slow down 30s/mile. Save the suffer-fest for race day.")
        return (f"The {reason} will make your run feel harder than it should. Let the pace "
                "drift and focus on time on feet instead.")

    if adjusted >= POOR_SCORE:
        factors = [f for f in (_poor_day_factor(key, apparent) for key in tops) if f]
        listed = " and ".join(factors[:2]) or "conditions"
        if profile.is_workout:
            return (f"This is not the day for speed work with {listed}. Either bail to the "
                    "treadmill or just run easy. The workout can wait.")
        if profile.is_long_run:
            return (f"Rough conditions for a long run with {listed}. Cut it by 30%, stay on "
                    "short loops near home, and bring your phone. If things deteriorate—"
                    "weather worsens, you feel off—you're close to shelter.")
        return (f"The {listed} make it tough out there. Shorten it up today, stay on loops "
                "close to home so you can bail quickly if conditions worsen or you're not "
                "feeling it.")

    factors = [f for f in (_critical_factor(key, apparent) for key in tops) if f]
    listed = f"with {' and '.join(factors)}" if factors else "in these conditions"
    return (f"Seriously, hit the treadmill today {listed}. If you absolutely have to go "
            "outside, tell someone your route and expected finish time, carry your phone, "
            "and run short loops—this keeps you near shelter if weather suddenly turns or "
            "you run into trouble.")


# -- Pace --------------------------------------------------------------------


def pace_guidance(adjusted: float, profile: RunProfile) -> str:
    """Pace adjustment for a boldness-shifted score."""
    bold = profile.boldness >= 1
    if adjusted >= GREAT_SCORE:
        if profile.is_workout:
            return "Hit your target paces. You've got this."
        return "Run your normal pace. Nothing's holding you back today."
    if adjusted >= GOOD_SCORE:
        if profile.is_workout:
            return ("Add 5-15 seconds per mile to your interval paces. Respect the "
                    "conditions, still get the work done.")
        return "Slow down 10-20 seconds per mile from your usual easy pace. It'll feel right."
    if adjusted >= FAIR_SCORE:
        if profile.is_workout:
            return ("Tack on 15-30 seconds per mile to your workout paces, or just cut the "
                    "volume by 20%. Quality over ego today.")
        return ("Expect to slow down 25-40 seconds per mile. The effort's what counts, not "
                "the numbers.")
    if adjusted >= POOR_SCORE:
        if profile.is_workout and bold:
            return ("Add 30-50 seconds per mile or seriously cut the reps. This isn't your "
                    "day for a breakthrough.")
        if profile.is_workout:
            return ("Add 30-50 seconds per mile or just convert to an easy run. Better yet, "
                    "hit the treadmill and actually get the workout done right.")
        if bold:
            return "Slow down 45-75 seconds per mile. It's survival mode out there."
        return ("Slow down 45-75 seconds per mile, or just cut the distance by 30%. Don't "
                "be a hero.")
    if bold:
        return "Conditions are brutal. Manage expectations heavily or move indoors."
    return ("Seriously, just hop on the treadmill. There's no point suffering through this "
            "for a junk run.")


# -- Tips --------------------------------------------------------------------


def make_approach_tips(
    score: RunningScore,
    sample: WeatherSample,
    profile: RunProfile,
    heat_stress: HeatStressAssessment | None = None,
    road: RoadConditions | None = None,
    temp_change: float = 0.0,
    will_rain: bool = False,
) -> ApproachTips:
    """Coach-style tips and pace guidance for one sample.

    Args:
        score: Score breakdown for the sample and the profile's activity.
        sample: The weather being run in.
        profile: Runner profile; ``boldness`` trims the cautious warnings.
        heat_stress: WBGT risk for the profile's activity, for warm workout and
            long-run advice.
        road: Road hazards to repeat as tips.
        temp_change: Largest apparent-temperature rise over the next forecast
            hours (long runs).
        will_rain: Whether rain is expected during the run (long runs).

    Returns:
        ApproachTips with the headline first.
    """
    boldness = profile.boldness
    cautious = boldness <= 0
    adjusted = score.score + boldness * BOLDNESS_SCORE_STEP
    tops = score.dominant_keys(2)

    apparent = sample.apparent_f
    wind = sample.wind_mph
    precip_prob = sample.precip_prob
    dew_point = score.dew_point_f
    cloud = DEFAULT_CLOUD_COVER if sample.cloud_cover is None else sample.cloud_cover
    precip_penalty = _penalty(score, "precipitation")

    extreme_cold = apparent <= EXTREME_COLD_F
    very_cold = apparent <= VERY_COLD_F
    extreme_heat = apparent >= EXTREME_HEAT_F
    very_hot = apparent >= VERY_HOT_F
    humid = dew_point >= HUMID_DEW_POINT_F
    very_humid = dew_point >= VERY_HUMID_DEW_POINT_F
    windy = wind >= WINDY_MPH
    very_windy = wind >= VERY_WINDY_MPH
    icy = apparent <= ICE_TEMP_F and (precip_prob >= 30 or precip_penalty > 5)

    tips = [_headline(adjusted, tops, apparent, profile)]

    if very_hot and very_humid:
        if cautious:
            tips.append(
                "Heat + humidity combo prevents your body from cooling through sweat. This "
                "means core temp rises fast. Run early morning only, take walk breaks every "
                "10 minutes to let your heart rate drop, and pour water on your head and "
                "neck. If you stop sweating or feel confused, you're in trouble—stop "
                "immediately."
            )
        else:
            tips.append(
                "Heat stress is real today. Early morning, walk breaks, aggressive "
                "hydration. Know the signs of heat illness."
            )

    if very_cold and windy:
        if cautious:
            tips.append(
                "Wind chill accelerates heat loss from exposed skin—frostbite can happen in "
                "under 30 minutes on fingers, ears, and face. Cover every inch of skin, "
                "layer a windproof shell over insulation, and run short loops so you're "
                "never more than 5-10 minutes from shelter."
            )
        else:
            tips.append(
                "Frostbite risk is real. Cover exposed skin, windproof up, and stay on "
                "short loops."
            )

    if icy:
        if boldness <= 1:
            tips.append(
                "Ice or freezing rain creates slick surfaces where one wrong step means a "
                "hard fall (and potential injury). Traction devices (like Yaktrax) help, "
                "but treadmill is the smart call today."
            )
        else:
            tips.append("Icy out there. Traction devices or treadmill.")

    if profile.is_long_run:
        tips.extend(
            _long_run_tips(
                adjusted, apparent, cloud, precip_prob, precip_penalty, boldness,
                temp_change, will_rain, very_hot or humid,
            )
        )

    if "temperature" in tops:
        if extreme_heat and cautious:
            shade = (
                " Seek heavily shaded routes—trees and buildings can drop radiant heat by "
                "10-15°F vs full sun."
                if cloud < 50
                else " Even with cloud cover, heat stress is severe."
            )
            tips.append(
                "Extreme heat warning. Pre-cool with a cold shower, pour water on your head "
                "and neck every 10 minutes, and run short loops. If you feel confused or "
                f"stop sweating, stop running immediately.{shade}"
            )
        elif extreme_heat:
            tips.append(
                "Extreme heat. Pre-cool, frequent water on head/neck, watch for heat "
                "illness." + (" Full sun = seek shade." if cloud < 50 else "")
            )
        if extreme_cold and cautious:
            tips.append(
                "Extreme cold means business. Warm up indoors first, cover all skin "
                "including a balaclava for your face, and run short loops near shelter."
            )
        elif extreme_cold:
            tips.append("Extreme cold. Cover everything, warm up indoors first.")

    if "wind" in tops or "cold_synergy" in tops:
        if very_windy and very_cold and cautious:
            tips.append(
                "Wind chill is dangerous today. Windproof shell over everything, cover your "
                "face and ears, and start into the wind so you finish with it at your back. "
                "Check your fingers and face for numbness every 5 minutes."
            )
        elif very_windy and very_cold:
            tips.append("Wind chill warning. Windproof layers, cover face, start into wind.")
        elif very_windy and boldness <= 1:
            tips.append(
                "Strong winds today. Start into the wind and finish with a tailwind—trust "
                "me, you'll thank yourself. This is an effort run, not a pace run."
            )

    if "precipitation" in tops:
        if precip_prob >= 70 and cautious:
            tips.append(
                "Heavy rain expected. Use a cap to keep water off your face, good shell, "
                "and avoid painted road markings—they're slick as ice when wet."
            )
        elif precip_prob >= 80 and not cautious:
            tips.append("Heavy rain. Cap, shell, watch painted surfaces.")

    if road is not None:
        if road.has_warnings and cautious:
            tips.extend(f"{w.message}: {w.advice}" for w in road.warnings)
        elif road.severity == RoadSeverity.DANGER and not cautious:
            tips.extend(w.message for w in road.warnings if w.level == RoadSeverity.DANGER)

    if heat_stress is not None and apparent > WBGT_TIPS_MIN_APPARENT_F:
        tips.extend(_heat_stress_tips(heat_stress, profile))

    logger.debug(
        f"Approach tips: score={score.score} adjusted={adjusted} tops={tops} "
        f"tips={len(tips)}"
    )
    return ApproachTips(tips=tips, pace=pace_guidance(adjusted, profile))


def _long_run_tips(
    adjusted: float,
    apparent: float,
    cloud: float,
    precip_prob: float,
    precip_penalty: float,
    boldness: int,
    temp_change: float,
    will_rain: bool,
    hot_or_humid: bool,
) -> list[str]:
    cautious = boldness <= 0
    tips = []

    if apparent >= 70 and cloud < 50 and cautious:
        tips.append(
            "Plan your route through shaded areas—parks with tree cover, north sides of "
            "buildings. Full sun can make it feel 10-15°F hotter than the air temperature. "
            "Your body will thank you."
        )
    elif apparent >= 75 and cloud < 50 and not cautious:
        tips.append("Route through shade when possible. Full sun adds major radiant heat.")

    # temp_change is the largest rise ahead, so the swing is always warming
    if temp_change > 12 and cautious:
        tips.append(
            f"Temperature's going to climb {temp_change:.0f}°F during your run. What feels "
            "good at the start will get uncomfortable fast—start with layers you can peel "
            "off and tie around your waist as you heat up."
        )
    elif temp_change > 15 and not cautious:
        tips.append(f"Expect a {temp_change:.0f}°F temp rise. Layer smart.")

    if cautious and (will_rain or (precip_prob >= 60 and precip_penalty > 10)):
        tips.append(
            "Rain's coming during your run. Bring a shell and a cap, slap some Body Glide "
            "on your feet to prevent blisters, and change your shoes the second you finish."
        )
    elif not cautious and (will_rain or (precip_prob >= 70 and precip_penalty > 10)):
        tips.append("Rain incoming. Shell, cap, done.")

    if adjusted < 60 and hot_or_humid and cautious:
        tips.append(
            "You'll need water out there. Carry a bottle or plan stops every 3-4 miles. "
            "Drink every 15-20 minutes, not just when you're thirsty."
        )
    elif adjusted < 50 and hot_or_humid and not cautious:
        tips.append("Plan water stops or carry fluids.")

    return tips


def _heat_stress_tips(heat_stress: HeatStressAssessment, profile: RunProfile) -> list[str]:
    """WBGT advice for hard workouts and long runs; easy runs get none."""
    tier = heat_stress.tier
    message = heat_stress.risk.message

    if profile.is_workout:
        if tier == RiskTier.DANGER:
            return [f"Hard workout + heat: {message} Performance suffers ~0.3-0.4% per °C "
                    "above ideal WBGT—move to treadmill or reschedule."]
        if tier == RiskTier.HIGH_RISK:
            return [f"Workout + heat: {message} Consider converting to tempo effort instead "
                    "of intervals, or postponing to cooler conditions."]
        if tier == RiskTier.CAUTION:
            return [f"Workout + warmth: {message} Extend recovery intervals by 30-60s, move "
                    "hard reps to shaded areas."]
        return []

    if profile.is_long_run:
        if tier in (RiskTier.DANGER, RiskTier.HIGH_RISK):
            return [f"Long run + heat: {message} Research shows heat stress compounds over "
                    "60+ minutes—this is not a safe day for long distance."]
        if tier == RiskTier.CAUTION:
            return [f"Long run heat management: {message} Start slower than usual (first "
                    "2-3 mi at easy-easy pace), plan route with water/bailout points every "
                    "3-4 mi."]
    return []
