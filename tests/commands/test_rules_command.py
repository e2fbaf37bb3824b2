"""Tests for the `sanitize rules` command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from sanitize.cli import cli

_PLUGIN_SRC = """\
from sanitize.plugins.hookspecs import hookimpl


@hookimpl
def register_transformers():
    return {"slug": lambda field, name, arg: None}
"""


@pytest.mark.usefixtures("_isolated_project")
class TestRulesCommand:
    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["rules"])
        assert result.exit_code == 0, result.output
        assert "OK" in result.output
        for name in ("trim_space", "strip_space", "lower", "upper", "capitalize"):
            assert name in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "rules"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "rules"
        assert data["data"]["count"] == 5

    def test_local_plugin_rules_listed(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        plugin_dir = tmp_path / ".sanitize" / "plugins"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "slug.py").write_text(_PLUGIN_SRC, encoding="utf-8")

        result = cli_runner.invoke(cli, ["--json", "rules"])
        assert result.exit_code == 0, result.output
        assert "slug" in json.loads(result.output)["data"]["rules"]

    def test_plugins_disabled_by_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        plugin_dir = tmp_path / ".sanitize" / "plugins"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "slug.py").write_text(_PLUGIN_SRC, encoding="utf-8")
        (tmp_path / "sanitize.toml").write_text("[plugins]\nenabled = false\n")

        result = cli_runner.invoke(cli, ["--json", "rules"])
        assert result.exit_code == 0, result.output
        assert "slug" not in json.loads(result.output)["data"]["rules"]
