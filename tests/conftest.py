from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from textwrap import dedent
from typing import Any, Callable, Iterator, Mapping, Sequence

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


from vessel_cleanup.samples import TelemetryFrame


def write_pyproject(directory: Path, contents: str) -> Path:
    """Persist a ``pyproject.toml`` under ``directory`` and return its path."""

    payload = dedent(contents).lstrip()
    target = directory / "pyproject.toml"
    target.write_text(payload, encoding="utf8")
    return target


@pytest.fixture
def fixed_now() -> datetime:
    """Evaluation instant used by guards with open-ended windows."""

    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def frame_factory() -> Callable[..., TelemetryFrame]:
    """Build :class:`TelemetryFrame` objects from ``(time, values)`` pairs."""

    def _build(
        ship_id: int,
        rows: Sequence[tuple[datetime, Mapping[str, Any]]],
        **kwargs: Any,
    ) -> TelemetryFrame:
        records = [{"time": moment, **dict(values)} for moment, values in rows]
        return TelemetryFrame.from_records(ship_id, records, **kwargs)

    return _build


@pytest.fixture
def reset_package_logging() -> Iterator[None]:
    """Drop handlers installed by ``setup_logging`` once the test finishes."""

    logger = logging.getLogger("vessel_cleanup")
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if getattr(handler, "_vessel_cleanup_handler", False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
