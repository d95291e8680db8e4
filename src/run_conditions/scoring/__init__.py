"""Running condition scoring."""

from run_conditions.scoring.engine import (
    IDEAL_TEMP_F,
    PenaltyTerms,
    compute_penalty_terms,
    compute_running_score,
    compute_score_breakdown,
)
from run_conditions.scoring.tone import score_based_tone, score_label, score_tone

__all__ = [
    "IDEAL_TEMP_F",
    "PenaltyTerms",
    "compute_penalty_terms",
    "compute_running_score",
    "compute_score_breakdown",
    "score_based_tone",
    "score_label",
    "score_tone",
]
