"""Helpers to load project-level configuration files."""

from __future__ import annotations

from collections.abc import Mapping as ABCMapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

from vessel_cleanup.cleanup.rules import Clock, utc_now


_PROJECT_FILENAME = "pyproject.toml"
_TOOL_SECTION = "vessel_cleanup"


def _as_dict(payload: ABCMapping[str, Any]) -> dict[str, Any]:
    """Recursively coerce TOML mappings into regular dictionaries."""

    result: dict[str, Any] = {}
    for key, value in payload.items():
        key_str = str(key)
        if isinstance(value, ABCMapping):
            result[key_str] = _as_dict(value)
        elif isinstance(value, list):
            result[key_str] = [
                _as_dict(item) if isinstance(item, ABCMapping) else item for item in value
            ]
        else:
            result[key_str] = value
    return result


def _resolve_pyproject_path(candidate: Path) -> Path | None:
    """Return the concrete ``pyproject.toml`` path for ``candidate`` if possible."""

    candidate = candidate.expanduser()
    if candidate.name == _PROJECT_FILENAME:
        return candidate
    if candidate.suffix:
        return None
    return candidate / _PROJECT_FILENAME


def _load_toml_mapping(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    if isinstance(data, ABCMapping):
        return _as_dict(data)
    return None


def load_project_config(path: Path) -> tuple[dict[str, Any], Path] | None:
    """Load the `[tool.vessel_cleanup]` section from ``pyproject.toml``."""

    pyproject_path = _resolve_pyproject_path(path)
    if pyproject_path is None:
        return None

    pyproject_path = pyproject_path.expanduser().resolve(strict=False)
    pyproject_payload = _load_toml_mapping(pyproject_path)
    if not pyproject_payload:
        return None

    tool_section = pyproject_payload.get("tool")
    if not isinstance(tool_section, ABCMapping):
        return None

    cleanup_section = tool_section.get(_TOOL_SECTION)
    if not isinstance(cleanup_section, ABCMapping):
        return None

    return _as_dict(cleanup_section), pyproject_path


def _coerce_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid open_end_cutoff timestamp {value!r}") from exc
    else:
        raise ValueError(f"Invalid open_end_cutoff timestamp {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _coerce_bool(value: Any, fallback: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"Expected a boolean, got {value!r}")


@dataclass(frozen=True, slots=True)
class CleanupSettings:
    """Immutable engine settings parsed from TOML sources.

    ``open_end_cutoff`` pins the end of open-ended rules to a fixed instant so
    repeated reprocessing runs resolve them identically. Without it the wall
    clock is used.
    """

    open_end_cutoff: datetime | None = None
    only_unconditional: bool = False
    logging: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None) -> "CleanupSettings":
        payload = dict(config or {})
        logging_cfg = payload.get("logging")
        return cls(
            open_end_cutoff=_coerce_timestamp(payload.get("open_end_cutoff")),
            only_unconditional=_coerce_bool(payload.get("only_unconditional"), False),
            logging=dict(logging_cfg) if isinstance(logging_cfg, ABCMapping) else {},
        )

    def clock(self) -> Clock:
        """Return the clock compiled guards should use for open-ended rules."""

        cutoff = self.open_end_cutoff
        if cutoff is None:
            return utc_now
        return lambda: cutoff


def load_settings(path: Path | None = None) -> CleanupSettings:
    """Load :class:`CleanupSettings` from ``path`` (or the working directory)."""

    loaded = load_project_config(path if path is not None else Path.cwd())
    if loaded is None:
        return CleanupSettings()
    config, _ = loaded
    return CleanupSettings.from_config(config)


__all__ = [
    "CleanupSettings",
    "load_project_config",
    "load_settings",
]
