"""Weather physics: unit conversion, dew point and heat stress."""

from run_conditions.physics.dew_point import (
    dew_point_c,
    dew_point_f,
    get_dew_point_comfort_level,
    relative_humidity_from_dew_point,
)
from run_conditions.physics.heat_stress import (
    WBGT_THRESHOLDS,
    assess_wbgt_risk,
    calculate_heat_index,
    calculate_wbgt,
    get_wbgt_flag,
)

__all__ = [
    "dew_point_c",
    "dew_point_f",
    "get_dew_point_comfort_level",
    "relative_humidity_from_dew_point",
    "WBGT_THRESHOLDS",
    "assess_wbgt_risk",
    "calculate_heat_index",
    "calculate_wbgt",
    "get_wbgt_flag",
]
