"""Logging configuration shared by the library and the command line tools."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

__all__ = ["JsonFormatter", "setup_logging"]

_ROOT_LOGGER_NAME = "vessel_cleanup"
_HANDLER_MARKER = "_vessel_cleanup_handler"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, sort_keys=False)


def _resolve_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value or "info").upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level {value!r}")
    return level


def _build_handler(output: str) -> logging.Handler:
    target = (output or "stderr").strip()
    if target.lower() == "stdout":
        return logging.StreamHandler(sys.stdout)
    if target.lower() == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(target).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, encoding="utf8")


def setup_logging(
    config: Optional[Mapping[str, Any]] = None,
    *,
    logger_name: str = _ROOT_LOGGER_NAME,
) -> logging.Logger:
    """Install a single handler on the package logger using ``config["logging"]``.

    Recognised keys are ``level`` (default ``info``), ``output`` (``stdout``,
    ``stderr`` or a file path; default ``stderr``) and ``format`` (``json`` or
    ``text``; default ``json``). Calling it again replaces the handler.
    """

    logging_cfg: Mapping[str, Any] = {}
    if config is not None:
        candidate = config.get("logging", {})
        if isinstance(candidate, Mapping):
            logging_cfg = candidate

    level = _resolve_level(logging_cfg.get("level", "info"))
    fmt = str(logging_cfg.get("format", "json")).lower()
    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter()
    elif fmt == "text":
        formatter = logging.Formatter(_TEXT_FORMAT)
    else:
        raise ValueError(f"Unknown logging format {fmt!r}")

    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
            handler.close()

    handler = _build_handler(str(logging_cfg.get("output", "stderr")))
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_MARKER, True)

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
