"""Runtime primitives shared across the core namespaces."""

from vessel_core.runtime.shared import (
    Position,
    SupportsPropertyClean,
    SupportsPropertySample,
)

__all__ = [
    "Position",
    "SupportsPropertySample",
    "SupportsPropertyClean",
]
