from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from vessel_cleanup.logging import JsonFormatter, setup_logging


pytestmark = pytest.mark.usefixtures("reset_package_logging")


def _marked_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in logger.handlers if getattr(handler, "_vessel_cleanup_handler", False)]


def test_json_formatter_includes_extras() -> None:
    record = logging.LogRecord(
        "vessel_cleanup.cleanup.rules", logging.WARNING, __file__, 10, "skipping %s", ("ENG-756",), None
    )
    record.event = "cleanup.clean_unsupported"
    record.ship_id = 640

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "vessel_cleanup.cleanup.rules"
    assert payload["message"] == "skipping ENG-756"
    assert payload["event"] == "cleanup.clean_unsupported"
    assert payload["ship_id"] == 640
    assert "timestamp" in payload
    assert "args" not in payload


def test_setup_logging_writes_json_to_file(tmp_path: Path) -> None:
    target = tmp_path / "logs" / "cleanup.jsonl"

    logger = setup_logging({"logging": {"level": "debug", "output": str(target)}})
    logging.getLogger("vessel_cleanup.cleanup.rules").debug(
        "Compiled %d cleanup guards", 3, extra={"event": "cleanup.compiled"}
    )
    for handler in _marked_handlers(logger):
        handler.flush()

    lines = target.read_text(encoding="utf8").splitlines()
    assert logger.level == logging.DEBUG
    record = json.loads(lines[-1])
    assert record["message"] == "Compiled 3 cleanup guards"
    assert record["event"] == "cleanup.compiled"


def test_setup_logging_replaces_previous_handler() -> None:
    logger = setup_logging({"logging": {"output": "stderr"}})
    setup_logging({"logging": {"output": "stdout", "format": "text", "level": "warning"}})

    handlers = _marked_handlers(logger)

    assert len(handlers) == 1
    assert not isinstance(handlers[0].formatter, JsonFormatter)
    assert logger.level == logging.WARNING


@pytest.mark.parametrize(
    "config",
    [{"logging": {"format": "yaml"}}, {"logging": {"level": "chatty"}}],
)
def test_setup_logging_rejects_unknown_options(config: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        setup_logging(config)
