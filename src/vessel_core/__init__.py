"""Core computation utilities for vessel telemetry cleanup.

The namespace bundles the sample capability protocols, the canonical
property labels and the numeric models that corrections may evaluate.
"""

from __future__ import annotations

from vessel_core import equations, labels, runtime
from vessel_core.conversions import as_optional_float, convert
from vessel_core.equations import modeled_stw, scalar_projection
from vessel_core.runtime import Position, SupportsPropertyClean, SupportsPropertySample

__all__ = [
    "Position",
    "SupportsPropertySample",
    "SupportsPropertyClean",
    "as_optional_float",
    "convert",
    "equations",
    "labels",
    "modeled_stw",
    "runtime",
    "scalar_projection",
]
