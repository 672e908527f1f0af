from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from vessel_cleanup.cleanup.rules import utc_now
from vessel_cleanup.cleanup import Stage, compile_guards
from vessel_cleanup.configuration import CleanupSettings, load_project_config, load_settings

from tests.conftest import write_pyproject
from tests.helpers import StubSample, build_rule


def test_load_project_config_reads_tool_section(tmp_path: Path) -> None:
    pyproject = write_pyproject(
        tmp_path,
        """
        [project]
        name = "fleet-pipeline"

        [tool.vessel_cleanup]
        only_unconditional = true

        [tool.vessel_cleanup.logging]
        level = "debug"
        """,
    )

    loaded = load_project_config(tmp_path)

    assert loaded is not None
    config, path = loaded
    assert path == pyproject.resolve()
    assert config == {"only_unconditional": True, "logging": {"level": "debug"}}


@pytest.mark.parametrize(
    "contents",
    [
        """
        [project]
        name = "fleet-pipeline"
        """,
        """
        [tool.other]
        value = 1
        """,
    ],
)
def test_load_project_config_without_section(tmp_path: Path, contents: str) -> None:
    write_pyproject(tmp_path, contents)

    assert load_project_config(tmp_path) is None


def test_load_project_config_ignores_other_files(tmp_path: Path) -> None:
    assert load_project_config(tmp_path / "settings.toml") is None
    assert load_project_config(tmp_path / "absent") is None


def test_settings_defaults() -> None:
    settings = CleanupSettings.from_config(None)

    assert settings.open_end_cutoff is None
    assert settings.only_unconditional is False
    assert settings.logging == {}
    assert settings.clock() is utc_now


def test_open_end_cutoff_pins_open_ended_rules(tmp_path: Path) -> None:
    write_pyproject(
        tmp_path,
        """
        [tool.vessel_cleanup]
        open_end_cutoff = "2020-06-01T00:00:00"
        only_unconditional = "yes"
        """,
    )

    settings = load_settings(tmp_path)
    cutoff = datetime(2020, 6, 1, tzinfo=timezone.utc)

    assert settings.open_end_cutoff == cutoff
    assert settings.only_unconditional is True

    guards = compile_guards(
        Stage.PRE,
        catalog=[build_rule(end=None)],
        clock=settings.clock(),
    )
    guard = guards[0]
    assert guard.matches(StubSample(time=cutoff - timedelta(minutes=1)))
    assert not guard.matches(StubSample(time=cutoff))


def test_toml_datetime_values_are_accepted(tmp_path: Path) -> None:
    write_pyproject(
        tmp_path,
        """
        [tool.vessel_cleanup]
        open_end_cutoff = 2021-03-01T12:00:00Z
        """,
    )

    settings = load_settings(tmp_path)

    assert settings.open_end_cutoff == datetime(2021, 3, 1, 12, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "config",
    [
        {"open_end_cutoff": "soon"},
        {"open_end_cutoff": 12},
        {"only_unconditional": "maybe"},
    ],
)
def test_invalid_settings_are_rejected(config: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        CleanupSettings.from_config(config)


def test_load_settings_without_pyproject(tmp_path: Path) -> None:
    assert load_settings(tmp_path) == CleanupSettings()
