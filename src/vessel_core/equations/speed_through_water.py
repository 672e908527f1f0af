"""Linear speed-through-water model driven by hindcast weather and propulsion."""

from __future__ import annotations

from typing import Mapping

import numpy as np

from vessel_core import labels
from vessel_core.equations.projection import scalar_projection
from vessel_core.runtime.shared import SupportsPropertySample

__all__ = [
    "MODELED_STW_BIAS",
    "MODELED_STW_COEFFICIENTS",
    "MODELED_STW_INPUTS",
    "modeled_stw",
    "modeled_stw_from_values",
]


# Ordered as: shaft speed, draft aft, trim, significant wave height,
# current projection squared, current projection, wind projection,
# wind projection squared.
MODELED_STW_COEFFICIENTS = np.array(
    [
        0.191637416,
        -0.153619789,
        -0.123217962,
        -0.324622524,
        0.057272980,
        0.044914439,
        -0.035553420,
        -0.000633009,
    ],
    dtype=float,
)
MODELED_STW_BIAS = 1.4246

MODELED_STW_INPUTS: tuple[str, ...] = (
    labels.SHAFT_SPEED,
    labels.DRAFT_AFT,
    labels.TRIM,
    labels.SIG_WAVE_HEIGHT,
    labels.HEADING,
    labels.TRUE_WIND_SPEED,
    labels.TRUE_WIND_DIR,
    labels.SEA_CURRENT_SPEED,
    labels.SEA_CURRENT_DIR,
)


def modeled_stw_from_values(values: Mapping[str, float | None]) -> float | None:
    """Evaluate the model for already extracted ``values``.

    Returns ``None`` when any of :data:`MODELED_STW_INPUTS` is missing or not
    finite; the model never substitutes defaults for physical inputs.
    """

    inputs: dict[str, float] = {}
    for label in MODELED_STW_INPUTS:
        value = values.get(label)
        if value is None:
            return None
        numeric = float(value)
        if not np.isfinite(numeric):
            return None
        inputs[label] = numeric

    heading = inputs[labels.HEADING]
    wind = scalar_projection(
        inputs[labels.TRUE_WIND_SPEED], inputs[labels.TRUE_WIND_DIR], heading
    )
    current = scalar_projection(
        inputs[labels.SEA_CURRENT_SPEED], inputs[labels.SEA_CURRENT_DIR], heading
    )
    features = np.array(
        [
            inputs[labels.SHAFT_SPEED],
            inputs[labels.DRAFT_AFT],
            inputs[labels.TRIM],
            inputs[labels.SIG_WAVE_HEIGHT],
            current * current,
            current,
            wind,
            wind * wind,
        ],
        dtype=float,
    )
    return float(np.dot(MODELED_STW_COEFFICIENTS, features) + MODELED_STW_BIAS)


def modeled_stw(sample: SupportsPropertySample) -> float | None:
    """Return the modeled speed through water for ``sample`` or ``None``."""

    return modeled_stw_from_values({label: sample.get(label) for label in MODELED_STW_INPUTS})
