"""In-memory property store backed by :mod:`pandas` frames.

A :class:`TelemetryFrame` holds one ship's samples as rows of a
:class:`pandas.DataFrame` indexed by UTC timestamps. Each row is exposed as a
:class:`FrameSample`, which implements both the basic and the clearable sample
capabilities so it can be swept by compiled cleanup guards.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from vessel_core.conversions import as_optional_float
from vessel_core.runtime.shared import Position
from vessel_cleanup.cleanup.rules import CleanupGuard, run_guards

__all__ = ["FrameSample", "TelemetryFrame"]


DEFAULT_POSITION_COLUMNS: Tuple[str, str] = ("latitude", "longitude")


class TelemetryFrame:
    """Sequence of samples for one ship stored column-wise."""

    def __init__(
        self,
        ship_id: int,
        frame: pd.DataFrame,
        *,
        units: Optional[Mapping[str, str]] = None,
        position_columns: Tuple[str, str] = DEFAULT_POSITION_COLUMNS,
    ) -> None:
        if not isinstance(frame.index, pd.DatetimeIndex):
            raise TypeError("TelemetryFrame requires a DatetimeIndex")
        index = frame.index
        if index.tz is None:
            index = index.tz_localize("UTC")
        else:
            index = index.tz_convert("UTC")

        unlabelled = [column for column in frame.columns if not isinstance(column, str)]
        if unlabelled:
            raise TypeError(f"TelemetryFrame columns must be property labels, got {unlabelled!r}")

        data = frame.astype(float).copy()
        data.index = index
        for column in position_columns:
            if column not in data.columns:
                data[column] = np.nan

        self.ship_id = int(ship_id)
        self.units: dict[str, str] = dict(units or {})
        self.position_columns = position_columns
        self._frame = data

    @classmethod
    def from_records(
        cls,
        ship_id: int,
        records: Iterable[Mapping[str, Any]],
        *,
        time_key: str = "time",
        units: Optional[Mapping[str, str]] = None,
        position_columns: Tuple[str, str] = DEFAULT_POSITION_COLUMNS,
    ) -> "TelemetryFrame":
        """Build a frame from mappings carrying a ``time_key`` timestamp."""

        rows = [dict(record) for record in records]
        times = pd.DatetimeIndex([pd.Timestamp(row.pop(time_key)) for row in rows])
        frame = pd.DataFrame(rows, index=times)
        return cls(ship_id, frame, units=units, position_columns=position_columns)

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame

    def __len__(self) -> int:
        return len(self._frame.index)

    def __iter__(self) -> Iterator["FrameSample"]:
        for row in range(len(self)):
            yield FrameSample(self, row)

    def sample(self, row: int) -> "FrameSample":
        size = len(self)
        if row < 0:
            row += size
        if not 0 <= row < size:
            raise IndexError(f"Sample index {row} out of range for {size} samples")
        return FrameSample(self, row)

    def sweep(self, guards: Sequence[CleanupGuard]) -> int:
        """Run ``guards`` over every sample in time order.

        Returns the total number of rule matches.
        """

        matched = 0
        for sample in self:
            matched += run_guards(guards, sample)
        return matched

    # -- storage helpers -------------------------------------------------

    def property_columns(self) -> List[str]:
        return [column for column in self._frame.columns if column not in self.position_columns]

    def _read(self, label: str, row: int) -> float | None:
        if not 0 <= row < len(self) or label not in self._frame.columns:
            return None
        return as_optional_float(self._frame.iat[row, self._frame.columns.get_loc(label)])

    def _write(self, label: str, row: int, value: float | None) -> None:
        if label not in self._frame.columns:
            if value is None:
                return
            self._frame[label] = np.nan
        numeric = np.nan if value is None else float(value)
        self._frame.iat[row, self._frame.columns.get_loc(label)] = numeric

    def _clear_columns(self, row: int, columns: Iterable[str]) -> None:
        locations = [self._frame.columns.get_loc(column) for column in columns]
        if locations:
            self._frame.iloc[row, locations] = np.nan

    def _position(self, row: int) -> Position | None:
        latitude = self._read(self.position_columns[0], row)
        longitude = self._read(self.position_columns[1], row)
        if latitude is None or longitude is None:
            return None
        return Position(latitude, longitude)


class FrameSample:
    """Row view over a :class:`TelemetryFrame`."""

    __slots__ = ("_owner", "_row")

    def __init__(self, owner: TelemetryFrame, row: int) -> None:
        self._owner = owner
        self._row = row

    def __repr__(self) -> str:
        return f"FrameSample(ship_id={self.ship_id}, time={self.time.isoformat()})"

    @property
    def ship_id(self) -> int:
        return self._owner.ship_id

    @property
    def time(self) -> datetime:
        return self._owner.frame.index[self._row].to_pydatetime()

    @property
    def index(self) -> int:
        return self._row

    def get(self, label: str) -> float | None:
        return self._owner._read(label, self._row)

    def set(self, label: str, value: float | None) -> None:
        self._owner._write(label, self._row, value)

    def position(self) -> Position | None:
        return self._owner._position(self._row)

    def set_position(self, latitude: float | None, longitude: float | None) -> None:
        lat_column, lon_column = self._owner.position_columns
        self._owner._write(lat_column, self._row, latitude)
        self._owner._write(lon_column, self._row, longitude)

    def previous(self, label: str) -> float | None:
        return self.get_at_offset(label, -1)

    def previous_position(self) -> Position | None:
        if self._row == 0:
            return None
        return self._owner._position(self._row - 1)

    def get_at_offset(self, label: str, offset: int) -> float | None:
        return self._owner._read(label, self._row + offset)

    def set_with_unit(self, label: str, value: float | None, unit: str) -> None:
        self._owner.units[label] = unit
        self.set(label, value)

    def unit(self, label: str) -> str | None:
        return self._owner.units.get(label)

    def clear(self, label: str) -> None:
        self.set(label, None)

    def clear_prefixed(self, prefix: str) -> None:
        columns = [
            column for column in self._owner.property_columns() if column.startswith(prefix)
        ]
        self._owner._clear_columns(self._row, columns)

    def clear_all(self) -> None:
        self._owner._clear_columns(self._row, self._owner.property_columns())
