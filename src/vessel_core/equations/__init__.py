"""Numeric models evaluated on vessel telemetry samples."""

from vessel_core.equations.speed_through_water import (
    MODELED_STW_BIAS,
    MODELED_STW_COEFFICIENTS,
    MODELED_STW_INPUTS,
    modeled_stw,
    modeled_stw_from_values,
)
from vessel_core.equations.projection import scalar_projection

__all__ = [
    "MODELED_STW_BIAS",
    "MODELED_STW_COEFFICIENTS",
    "MODELED_STW_INPUTS",
    "modeled_stw",
    "modeled_stw_from_values",
    "scalar_projection",
]
