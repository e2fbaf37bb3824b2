"""Tests for the root sanitize CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from sanitize import __version__
from sanitize.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "sanitize" in result.output
    for command in ("rules", "parse", "apply"):
        assert command in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_global_flags_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "-v", "--log-json", "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_project")
def test_invalid_config_exits_1(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "sanitize.toml").write_text("[engine\n")
    result = cli_runner.invoke(cli, ["rules"])
    assert result.exit_code == 1
    assert "invalid configuration" in result.output


def test_missing_config_flag_exits_1(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["--config", str(tmp_path / "nope.toml"), "rules"])
    assert result.exit_code == 1
    assert "file not found" in result.output
