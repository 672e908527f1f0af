"""Convenience re-exports for test helpers."""

from __future__ import annotations

from tests.helpers.rules import WINDOW_END, WINDOW_START, build_rule
from tests.helpers.samples import DEFAULT_TIME, StubSample

__all__ = [
    "DEFAULT_TIME",
    "StubSample",
    "WINDOW_END",
    "WINDOW_START",
    "build_rule",
]
