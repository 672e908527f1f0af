"""Sample capabilities shared between the equations and the cleanup engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable


__all__ = [
    "Position",
    "SupportsPropertySample",
    "SupportsPropertyClean",
]


@dataclass(frozen=True, slots=True)
class Position:
    """Geographic position expressed as a latitude/longitude pair in degrees."""

    latitude: float
    longitude: float


@runtime_checkable
class SupportsPropertySample(Protocol):
    """Timestamped, per-ship bag of named numeric properties.

    Absent values are reported as ``None``; reads never raise for unknown
    labels. Positions are always read and written as a pair.
    """

    @property
    def ship_id(self) -> int: ...

    @property
    def time(self) -> datetime: ...

    def get(self, label: str) -> float | None: ...

    def set(self, label: str, value: float | None) -> None: ...

    def position(self) -> Position | None: ...

    def set_position(self, latitude: float | None, longitude: float | None) -> None: ...

    def previous(self, label: str) -> float | None: ...

    def previous_position(self) -> Position | None: ...

    def get_at_offset(self, label: str, offset: int) -> float | None: ...

    def set_with_unit(self, label: str, value: float | None, unit: str) -> None: ...

    def unit(self, label: str) -> str | None: ...


@runtime_checkable
class SupportsPropertyClean(SupportsPropertySample, Protocol):
    """Sample that additionally allows bulk invalidation of its properties."""

    def clear(self, label: str) -> None: ...

    def clear_prefixed(self, prefix: str) -> None: ...

    def clear_all(self) -> None: ...
