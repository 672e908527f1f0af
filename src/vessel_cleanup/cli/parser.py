"""Argument parsing helpers for the vessel cleanup CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping, Optional

from vessel_cleanup.cli.commands import handle_check, handle_rules


def build_parser(config: Optional[Mapping[str, Any]] = None) -> argparse.ArgumentParser:
    config = dict(config or {})
    logging_cfg_raw = config.get("logging", {})
    logging_cfg = dict(logging_cfg_raw) if isinstance(logging_cfg_raw, Mapping) else {}

    parser = argparse.ArgumentParser(
        prog="vessel-cleanup",
        description="Inspect the time-bounded telemetry correction catalog.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to the pyproject.toml holding [tool.vessel_cleanup].",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=logging_cfg.get("level", "info"),
        help="Logging level (e.g. debug, info, warning).",
    )
    parser.add_argument(
        "--log-output",
        dest="log_output",
        default=logging_cfg.get("output", "stderr"),
        help="Logging destination (stdout, stderr or a file path).",
    )
    parser.add_argument(
        "--log-format",
        dest="log_format",
        choices=("json", "text"),
        default=logging_cfg.get("format", "json"),
        help="Logging formatter (json or text).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    rules_parser = subparsers.add_parser(
        "rules",
        help="List the rules compiled for a pipeline stage.",
    )
    rules_parser.add_argument(
        "--stage",
        required=True,
        help="Stage to compile: pre or post (or the full stage name).",
    )
    rules_parser.add_argument(
        "--only-unconditional",
        dest="only_unconditional",
        action="store_true",
        default=None,
        help="Only include rules flagged as unconditional.",
    )
    rules_parser.add_argument(
        "--ship",
        type=int,
        default=None,
        help="Restrict the listing to one ship id.",
    )
    rules_parser.set_defaults(handler=handle_rules)

    check_parser = subparsers.add_parser(
        "check",
        help="Compile every stage and fail on unattributed rules.",
    )
    check_parser.set_defaults(handler=handle_check)

    return parser
