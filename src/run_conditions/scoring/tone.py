"""Score labels and display colors.

Colors are interpolated between fixed RGB anchors; they carry no decision
weight and exist so every renderer shows the same shades.
"""

from __future__ import annotations

import math

from run_conditions.models.assessment import ScoreLabel, Tone
from run_conditions.physics.units import clamp, round_half_up

RGB = tuple[int, int, int]

BLUE: RGB = (59, 130, 246)
GREEN: RGB = (34, 197, 94)
YELLOW: RGB = (234, 179, 8)
RED: RGB = (239, 68, 68)
PURPLE: RGB = (147, 51, 234)

# (minimum score, text, tone); scanned top-down
SCORE_LABELS = [
    (90, "Ideal conditions", "Perfect for peak performance"),
    (80, "Excellent", "Great time to fly"),
    (70, "Great for running", "Strong conditions"),
    (60, "Good", "Solid conditions"),
    (50, "Decent conditions", "Manageable"),
    (40, "Fair / Not ideal", "Consider adjustments"),
    (30, "Not ideal", "Challenging"),
    (20, "Tough conditions", "Proceed with care"),
    (10, "Very tough", "High risk"),
]
FLOOR_LABEL = ScoreLabel(text="Extreme / Unsafe", tone="Consider skipping")


def score_label(score: float) -> ScoreLabel:
    """Headline text for a score, in buckets of ten."""
    for minimum, text, tone in SCORE_LABELS:
        if score >= minimum:
            return ScoreLabel(text=text, tone=tone)
    return FLOOR_LABEL


def _lerp(a: RGB, b: RGB, t: float) -> RGB:
    # Display only: an undefined position falls back to the first anchor
    if math.isnan(t):
        t = 0.0
    t = clamp(t, 0, 1)
    return tuple(int(round_half_up(x + (y - x) * t)) for x, y in zip(a, b))


def _tone(rgb: RGB) -> Tone:
    r, g, b = rgb
    return Tone(
        rgb=rgb,
        fill=f"rgb({r}, {g}, {b})",
        background=f"rgba({r}, {g}, {b}, 0.1)",
        border=f"rgba({r}, {g}, {b}, 0.3)",
    )


def score_tone(score: float, apparent_f: float) -> Tone:
    """Color keyed to apparent temperature: blue when cold, red when hot.

    ``score`` is accepted for call compatibility and does not affect the color.
    """
    if apparent_f <= 20:
        return _tone(BLUE)
    if apparent_f >= 85:
        return _tone(RED)
    if apparent_f < 45:
        return _tone(_lerp(BLUE, GREEN, (apparent_f - 20) / 25))
    if apparent_f < 65:
        return _tone(_lerp(GREEN, YELLOW, (apparent_f - 45) / 20))
    return _tone(_lerp(YELLOW, RED, (apparent_f - 65) / 20))


def score_based_tone(score: float) -> Tone:
    """Color keyed to the score: purple at 1, red at 10, yellow at 50, green at 100."""
    if score <= 10:
        return _tone(_lerp(PURPLE, RED, (score - 1) / 9))
    if score <= 50:
        return _tone(_lerp(RED, YELLOW, (score - 10) / 40))
    return _tone(_lerp(YELLOW, GREEN, (score - 50) / 50))
