"""Running condition zones.

Warm weather is judged on WBGT, cool weather on feels-like temperature. Each
zone pairs a headline with the expected effect on performance and what to do.
"""

from __future__ import annotations

import math

from run_conditions.models.recommendation import RunningCondition

# (lower bound inclusive, zone); scanned top-down
_FEELS_LIKE_ZONES: list[tuple[float, RunningCondition]] = [
    (41, RunningCondition(
        zone="pr",
        text="PR conditions — optimal for fast times",
        performance=("Perfect racing weather. Cool enough to prevent overheating, "
                     "warm enough for muscle function."),
        action=("Great day for tempo runs, intervals, or races. Dress light — "
                "you'll warm up fast."),
    )),
    (30, RunningCondition(
        zone="fast",
        text="Fast conditions — dress in layers",
        performance=("Still good for performance. Extend warm-up 5-10 min, expect "
                     "slight stiffness initially."),
        action="Layer appropriately, protect hands. You'll feel great once warmed up.",
    )),
    (20, RunningCondition(
        zone="cold",
        text="Cold — performance impacted, discomfort increases",
        performance=("Expect 1-2% slower pace. Muscles need longer to warm up, "
                     "breathing may be uncomfortable."),
        action="15 min warm-up, layer carefully, protect face/hands. Ease into your pace.",
    )),
    (10, RunningCondition(
        zone="very_cold",
        text="Very cold — significant performance challenge",
        performance=("Expect 2-4% slower pace. Cold air strains breathing, "
                     "extremities lose function."),
        action=("Cover all skin, windproof layers critical. Shorten distance, focus "
                "on effort not pace."),
    )),
    (0, RunningCondition(
        zone="bitter",
        text="Bitter cold — severe conditions",
        performance=("Performance severely compromised. Breathing painful, frostbite "
                     "risk on exposed skin."),
        action=("Advanced runners only. Full face coverage, run near shelter, bring "
                "phone. Consider treadmill."),
    )),
    (-24, RunningCondition(
        zone="frostbite_risk",
        text="High risk — frostbite in ~30 min on exposed skin",
        performance="Performance irrelevant. Survival and injury prevention are priorities.",
        action=("Treadmill strongly recommended. Outside: full coverage, run loops "
                "near warmth, alert someone."),
    )),
    (-math.inf, RunningCondition(
        zone="extreme_cold",
        text="Extreme danger — frostbite in ~15 min, training not recommended",
        performance="Life-threatening cold exposure. No performance benefit possible.",
        action="Cancel outdoor run. Extreme frostbite and hypothermia risk.",
    )),
]

EXTREME_HEAT = RunningCondition(
    zone="extreme_heat",
    text="Extreme danger — races cancelled, training strongly discouraged",
    performance="Life-threatening heat stress risk. Body cannot dissipate heat fast enough.",
    action="Cancel outdoor run. Heat stroke risk far outweighs any training benefit.",
)
HIGH_HEAT = RunningCondition(
    zone="high_heat",
    text="High risk — dramatically slower times, heat illness common",
    performance=("Expect 3-5%+ slower pace. Heat exhaustion and heat stroke spike in "
                 "this range."),
    action=("Only if heat-acclimated. Shorten distance 30-50%, add 60-90s/mile, take "
            "walk breaks every 10 min."),
)
WARM_CAUTION = RunningCondition(
    zone="warm",
    text="Caution — performance declines ~0.3-0.4% per degree",
    performance=("Expect 1-3% slower pace. Heat loss less efficient, fatigue comes "
                 "sooner."),
    action="Slow easy pace 20-40s/mile, hydrate every 15 min, seek shade, monitor closely.",
)
IDEAL_HEAT = RunningCondition(
    zone="ideal",
    text="Ideal — peak performance, minimal heat stress",
    performance="Optimal zone for fast times. Body regulates temperature easily.",
    action="Go for it! Conditions support your best effort with minimal adjustments.",
)


def get_running_condition(temp_f: float, is_wbgt: bool = False) -> RunningCondition:
    """Zone for a WBGT reading (``is_wbgt``) or a feels-like temperature."""
    if is_wbgt:
        if temp_f > 82:
            return EXTREME_HEAT
        if temp_f >= 73:
            return HIGH_HEAT
        if temp_f >= 65:
            return WARM_CAUTION
        return IDEAL_HEAT

    for lower, condition in _FEELS_LIKE_ZONES:
        if temp_f >= lower:
            return condition
    return _FEELS_LIKE_ZONES[-1][1]
