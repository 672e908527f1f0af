"""Vector helpers resolving environmental vectors onto the vessel heading."""

from __future__ import annotations

from typing import Any

import numpy as np

__all__ = ["scalar_projection"]


def scalar_projection(speed: Any, direction: Any, heading: Any) -> Any:
    """Project a ``(speed, direction)`` vector onto the ``heading`` axis.

    Directions and headings are compass bearings in degrees. Scalars return a
    ``float``; array-likes are broadcast with :mod:`numpy` and returned as an
    array.
    """

    speed_arr = np.asarray(speed, dtype=float)
    angle = np.deg2rad(np.asarray(direction, dtype=float) - np.asarray(heading, dtype=float))
    projected = speed_arr * np.cos(angle)
    if projected.ndim == 0:
        return float(projected)
    return projected
