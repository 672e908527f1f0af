"""Command handlers for the vessel cleanup CLI."""

from __future__ import annotations

import argparse
from datetime import datetime
from typing import Any, List, Mapping

from vessel_cleanup.cleanup.catalog import CATALOG
from vessel_cleanup.cleanup.rules import CatalogError, CleanupGuard, Stage, compile_guards
from vessel_cleanup.configuration import CleanupSettings
from vessel_cleanup.cli.errors import CliError

__all__ = ["handle_check", "handle_rules"]


def _settings(config: Mapping[str, Any]) -> CleanupSettings:
    try:
        return CleanupSettings.from_config(config)
    except ValueError as exc:
        raise CliError(
            str(exc),
            category="config",
            context={"config_path": config.get("_config_path")},
        ) from exc


def _compile(stage: Stage, only_unconditional: bool, settings: CleanupSettings) -> List[CleanupGuard]:
    try:
        return compile_guards(
            stage,
            only_unconditional,
            catalog=CATALOG,
            clock=settings.clock(),
        )
    except CatalogError as exc:
        raise CliError(
            str(exc),
            category="catalog",
            context={"rule_index": exc.index, "ship_id": exc.ship_id, "stage": stage.value},
        ) from exc


def _format_bound(moment: datetime | None, fallback: str) -> str:
    if moment is None:
        return fallback
    return moment.strftime("%Y-%m-%d %H:%M")


def _describe(guard: CleanupGuard) -> str:
    rule = guard.rule
    steps = [name for name, step in (("calc", rule.calc), ("clean", rule.clean)) if step is not None]
    parts = [
        f"{rule.issue:<18}",
        f"ship={rule.ship_id:<8}",
        f"{_format_bound(rule.start, '-inf')} -> {_format_bound(rule.end, 'now')}",
        "+".join(steps) or "noop",
    ]
    if rule.unconditional:
        parts.append("unconditional")
    if rule.comment:
        parts.append(f"# {rule.comment}")
    return "  ".join(parts)


def handle_rules(namespace: argparse.Namespace, config: Mapping[str, Any]) -> str:
    settings = _settings(config)
    try:
        stage = Stage.parse(namespace.stage)
    except ValueError as exc:
        raise CliError(str(exc), category="usage", context={"stage": namespace.stage}) from exc
    only_unconditional = (
        settings.only_unconditional
        if namespace.only_unconditional is None
        else bool(namespace.only_unconditional)
    )
    guards = _compile(stage, only_unconditional, settings)
    ship = getattr(namespace, "ship", None)
    if ship is not None:
        guards = [guard for guard in guards if guard.rule.ship_id == ship]
    if not guards:
        return f"No cleanup rules for {stage.value}."
    return "\n".join(_describe(guard) for guard in guards)


def handle_check(namespace: argparse.Namespace, config: Mapping[str, Any]) -> str:
    settings = _settings(config)
    lines = []
    for stage in Stage:
        guards = _compile(stage, settings.only_unconditional, settings)
        lines.append(f"{stage.value}: {len(guards)} rules")
    return "\n".join(lines)
