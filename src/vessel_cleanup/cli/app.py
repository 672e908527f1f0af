"""Command line application entry point for vessel telemetry cleanup."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from vessel_cleanup.configuration import load_project_config
from vessel_cleanup.logging.config import setup_logging

from vessel_cleanup.cli.errors import CliError, log_cli_error
from vessel_cleanup.cli.parser import build_parser

CONFIG_ENV_VAR = "VESSEL_CLEANUP_CONFIG"


def load_cli_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load CLI defaults from ``pyproject.toml`` files.

    An explicit ``path`` wins over :data:`CONFIG_ENV_VAR`, which wins over the
    working directory.
    """

    candidates: List[Path] = []
    if path is not None:
        candidates.append(path)
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        candidates.append(Path(env_config))
    candidates.append(Path.cwd())

    for candidate in candidates:
        loaded = load_project_config(candidate)
        if not loaded:
            continue
        payload, resolved = loaded
        data = dict(payload)
        data["_config_path"] = str(resolved)
        return data
    return {"_config_path": None}


def run_cli(args: Optional[Sequence[str]] = None) -> str:
    """Execute the vessel cleanup command line interface."""

    config_parser = argparse.ArgumentParser(add_help=False)
    config_parser.add_argument("--config", dest="config_path", type=Path, default=None)
    config_parser.add_argument("--log-level", dest="log_level", default=None)
    config_parser.add_argument("--log-output", dest="log_output", default=None)
    config_parser.add_argument("--log-format", dest="log_format", default=None)
    preliminary, remaining = config_parser.parse_known_args(args)

    config = load_cli_config(preliminary.config_path)
    logging_config = dict(config.get("logging", {}))
    if preliminary.log_level is not None:
        logging_config["level"] = preliminary.log_level
    if preliminary.log_output is not None:
        logging_config["output"] = preliminary.log_output
    if preliminary.log_format is not None:
        logging_config["format"] = preliminary.log_format
    logging_config.setdefault("level", "info")
    logging_config.setdefault("output", "stderr")
    logging_config.setdefault("format", "json")
    config["logging"] = logging_config
    try:
        setup_logging(config)
    except ValueError as exc:
        error = CliError(str(exc), category="config", context={"logging": logging_config})
        _write_line(error.message)
        raise SystemExit(error.status_code) from error

    parser = build_parser(config)
    namespace = parser.parse_args(list(remaining), namespace=preliminary)

    try:
        result = namespace.handler(namespace, config=config)
    except CliError as exc:
        log_cli_error(exc)
        _write_line(exc.message)
        raise SystemExit(exc.status_code) from exc
    _write_line(result)
    return result


def _write_line(text: str) -> None:
    if text:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")


def main() -> None:  # pragma: no cover - thin wrapper
    run_cli()


if __name__ == "__main__":  # pragma: no cover - CLI invocation guard
    main()
