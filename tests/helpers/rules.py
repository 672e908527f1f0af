"""Builders for synthetic correction rules."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from vessel_cleanup.cleanup.rules import CorrectionRule, Stage


WINDOW_START = datetime(2020, 1, 1, 0, 0, tzinfo=timezone.utc)
WINDOW_END = WINDOW_START + timedelta(hours=24)


def build_rule(**overrides: Any) -> CorrectionRule:
    payload: dict[str, Any] = {
        "issue": "TEST-1",
        "ship_id": 1,
        "stage": Stage.PRE,
        "start": WINDOW_START,
        "end": WINDOW_END,
        "unconditional": True,
    }
    payload.update(overrides)
    return CorrectionRule(**payload)
