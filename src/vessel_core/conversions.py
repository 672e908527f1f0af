"""Numeric coercion and the small unit table needed by unit-fix corrections."""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Mapping

__all__ = [
    "UNIT_DIMENSIONS",
    "as_optional_float",
    "convert",
]


# unit -> (dimension, factor to the dimension's base unit)
UNIT_DIMENSIONS: Mapping[str, tuple[str, float]] = MappingProxyType(
    {
        "W": ("power", 1.0),
        "kW": ("power", 1e3),
        "MW": ("power", 1e6),
        "kg/h": ("mass_flow", 1.0),
        "t/h": ("mass_flow", 1e3),
        "MT/hr": ("mass_flow", 1e3),
        "m3/h": ("volume_flow", 1.0),
        "l/h": ("volume_flow", 1e-3),
        "kn": ("speed", 1.0),
        "m/s": ("speed", 3600.0 / 1852.0),
    }
)


def as_optional_float(value: object) -> float | None:
    """Coerce ``value`` into a finite float, returning ``None`` when absent."""

    if value is None:
        return None
    try:
        numeric = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(numeric):
        return None
    return numeric


def convert(value: float, from_unit: str, to_unit: str) -> float:
    """Convert ``value`` between two units of the same dimension."""

    try:
        from_dimension, from_factor = UNIT_DIMENSIONS[from_unit]
        to_dimension, to_factor = UNIT_DIMENSIONS[to_unit]
    except KeyError as exc:
        raise ValueError(f"Unknown unit {exc.args[0]!r}") from exc
    if from_dimension != to_dimension:
        raise ValueError(
            f"Cannot convert {from_unit!r} ({from_dimension}) to {to_unit!r} ({to_dimension})"
        )
    return value * from_factor / to_factor
