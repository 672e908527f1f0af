from __future__ import annotations

import argparse
import json
from collections.abc import Mapping
from pathlib import Path

import pytest

from vessel_cleanup.cli import app as cli_module
from vessel_cleanup.cli import commands as commands_module
from vessel_cleanup.cli import run_cli
from vessel_cleanup.cli.errors import CliError
from vessel_cleanup.cli.parser import build_parser
from vessel_cleanup.cleanup import CATALOG, Stage

from tests.conftest import write_pyproject
from tests.helpers import build_rule


pytestmark = pytest.mark.usefixtures("reset_package_logging")


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv(cli_module.CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_parser_registers_commands() -> None:
    parser = build_parser({})

    rules = parser.parse_args(["rules", "--stage", "pre"])
    check = parser.parse_args(["check"])

    assert rules.handler is commands_module.handle_rules
    assert rules.only_unconditional is None
    assert rules.ship is None
    assert check.handler is commands_module.handle_check


def test_parser_uses_configured_logging_defaults() -> None:
    parser = build_parser({"logging": {"level": "debug", "format": "text"}})

    namespace = parser.parse_args(["check"])

    assert namespace.log_level == "debug"
    assert namespace.log_format == "text"
    assert namespace.log_output == "stderr"


def test_run_cli_dispatches_registered_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[Mapping[str, object]] = []

    def dummy_handler(namespace: argparse.Namespace, *, config: Mapping[str, object]) -> str:
        calls.append(config)
        return "dummy-result"

    def build_parser_stub(config: Mapping[str, object] | None = None) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser()
        subparsers = parser.add_subparsers(dest="command", required=True)
        subparsers.add_parser("dummy").set_defaults(handler=dummy_handler)
        return parser

    monkeypatch.setattr(cli_module, "build_parser", build_parser_stub)
    monkeypatch.setattr(cli_module, "load_cli_config", lambda path: {})

    assert run_cli(["dummy"]) == "dummy-result"
    assert calls[0]["logging"] == {"level": "info", "output": "stderr", "format": "json"}


def test_rules_lists_post_stage_rules_for_one_ship(capsys: pytest.CaptureFixture[str]) -> None:
    result = run_cli(["rules", "--stage", "post", "--ship", "1"])

    lines = result.splitlines()
    assert len(lines) == 2
    assert all(line.startswith("NAUT-1860") for line in lines)
    assert "-inf -> now" in lines[0]
    assert "2018-03-01 00:00 -> now" in lines[1]
    assert "unconditional" in lines[1]
    assert capsys.readouterr().out.strip() == result


def test_rules_reports_empty_listing() -> None:
    result = run_cli(["rules", "--stage", "pre", "--ship", "999999"])

    assert result == f"No cleanup rules for {Stage.PRE.value}."


def test_only_unconditional_from_pyproject(
    isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    conditional = build_rule(issue="COND-1", unconditional=False)
    unconditional = build_rule(issue="UNCOND-1", unconditional=True)
    monkeypatch.setattr(commands_module, "CATALOG", (conditional, unconditional))

    everything = run_cli(["rules", "--stage", "pre"])
    flagged = run_cli(["rules", "--stage", "pre", "--only-unconditional"])
    write_pyproject(
        isolated_cwd,
        """
        [tool.vessel_cleanup]
        only_unconditional = true
        """,
    )
    configured = run_cli(["rules", "--stage", "pre"])

    assert [line.split()[0] for line in everything.splitlines()] == ["COND-1", "UNCOND-1"]
    assert [line.split()[0] for line in flagged.splitlines()] == ["UNCOND-1"]
    assert [line.split()[0] for line in configured.splitlines()] == ["UNCOND-1"]


def test_config_env_var_is_honoured(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_dir = tmp_path / "elsewhere"
    config_dir.mkdir()
    pyproject = write_pyproject(
        config_dir,
        """
        [tool.vessel_cleanup]
        open_end_cutoff = "2019-01-01T00:00:00"
        """,
    )
    monkeypatch.setenv(cli_module.CONFIG_ENV_VAR, str(config_dir))

    config = cli_module.load_cli_config()

    assert config["_config_path"] == str(pyproject.resolve())
    assert config["open_end_cutoff"] == "2019-01-01T00:00:00"


def test_load_cli_config_without_pyproject() -> None:
    assert cli_module.load_cli_config() == {"_config_path": None}


def test_check_counts_rules_per_stage() -> None:
    result = run_cli(["check"])

    pre_count = sum(1 for rule in CATALOG if rule.stage is Stage.PRE)
    post_count = sum(1 for rule in CATALOG if rule.stage is Stage.POST)
    assert result.splitlines() == [
        f"{Stage.PRE.value}: {pre_count} rules",
        f"{Stage.POST.value}: {post_count} rules",
    ]


def test_check_fails_on_unattributed_rule(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(
        commands_module,
        "CATALOG",
        (build_rule(issue="OK-1"), build_rule(issue="", ship_id=77)),
    )

    with pytest.raises(SystemExit) as excinfo:
        run_cli(["check"])

    assert excinfo.value.code == 1
    cause = excinfo.value.__cause__
    assert isinstance(cause, CliError)
    assert cause.category == "catalog"
    assert cause.context["rule_index"] == 1
    assert cause.context["ship_id"] == 77

    captured = capsys.readouterr()
    assert "ship 77" in captured.out
    record = json.loads(captured.err.strip().splitlines()[-1])
    assert record["level"] == "ERROR"
    assert record["event"] == "cli.error"
    assert record["status_code"] == 1


def test_unknown_stage_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        run_cli(["rules", "--stage", "middle"])

    assert excinfo.value.code == 2
    assert isinstance(excinfo.value.__cause__, CliError)


def test_invalid_cutoff_is_a_config_error(isolated_cwd: Path) -> None:
    write_pyproject(
        isolated_cwd,
        """
        [tool.vessel_cleanup]
        open_end_cutoff = "not a timestamp"
        """,
    )

    with pytest.raises(SystemExit) as excinfo:
        run_cli(["check"])

    assert excinfo.value.code == 2


@pytest.mark.parametrize(("category", "expected"), [("catalog", 1), ("config", 2), ("usage", 2)])
def test_error_categories_map_to_exit_codes(category: str, expected: int) -> None:
    error = CliError("boom", category=category, context={"path": Path("x")})

    assert error.status_code == expected
    assert error.context == {"path": "x"}


def test_unknown_error_category_is_rejected() -> None:
    with pytest.raises(ValueError):
        CliError("boom", category="io")


def test_unknown_log_level_is_a_config_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run_cli(["--log-level", "loud", "check"])

    assert excinfo.value.code == 2
    cause = excinfo.value.__cause__
    assert isinstance(cause, CliError)
    assert cause.category == "config"
    assert "loud" in capsys.readouterr().out
