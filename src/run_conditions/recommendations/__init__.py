"""Recommendations: outfits, road hazards, condition zones, run timing and coaching tips."""

from run_conditions.recommendations.outfit import OutfitSelector, outfit_for
from run_conditions.recommendations.layers import (
    base_layers_for_temp,
    calculate_effective_temp,
    choose_socks,
    hands_level_from_gear,
    hands_label,
)
from run_conditions.recommendations.road import calculate_road_conditions
from run_conditions.recommendations.conditions import get_running_condition
from run_conditions.recommendations.approach import make_approach_tips, pace_guidance
from run_conditions.recommendations.time_slots import (
    BestRunTimeFinder,
    find_best_run_times,
)

__all__ = [
    "OutfitSelector",
    "outfit_for",
    "calculate_effective_temp",
    "base_layers_for_temp",
    "choose_socks",
    "hands_level_from_gear",
    "hands_label",
    "calculate_road_conditions",
    "get_running_condition",
    "make_approach_tips",
    "pace_guidance",
    "BestRunTimeFinder",
    "find_best_run_times",
]
