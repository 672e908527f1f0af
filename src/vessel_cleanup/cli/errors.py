"""Error helpers for the vessel cleanup command line tools."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

__all__ = ["CliError", "log_cli_error"]


# ``catalog``: a rule failed validation. ``config``: pyproject or logging
# settings are malformed. ``usage``: a command line value was rejected.
_CATEGORY_STATUS_CODES: Mapping[str, int] = {
    "catalog": 1,
    "config": 2,
    "usage": 2,
}

logger = logging.getLogger("vessel_cleanup.cli")


def _normalise_context(context: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for key, value in (context or {}).items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            payload[key] = value
        else:
            payload[key] = str(value)
    return payload


class CliError(RuntimeError):
    """Failure surfaced to the user with a category-specific exit code."""

    def __init__(
        self,
        message: str,
        *,
        category: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if category not in _CATEGORY_STATUS_CODES:
            raise ValueError(f"Unknown CLI error category '{category}'")
        super().__init__(message)
        self.message = message
        self.category = category
        self.status_code = _CATEGORY_STATUS_CODES[category]
        self.context = _normalise_context(context)


def log_cli_error(error: CliError) -> None:
    """Emit ``error`` through the CLI logger with structured context."""

    logger.error(
        error.message,
        extra={
            "event": "cli.error",
            "category": error.category,
            "status_code": error.status_code,
            "context": error.context,
        },
        exc_info=error,
    )
