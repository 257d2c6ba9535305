"""Tests for ``ratel run``.

Verifies:
    - A clean project produces a JSON audit report (exit code 0).
    - A drifted project is blocked with INTEGRITY_ERROR (exit code 1).
    - A malformed scenario is reported as PARSING_ERROR (exit code 2).
"""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from ratel.cli.main import cli


class TestRunCommand:
    """Validate the run command end to end."""

    def test_clean_project_produces_report(self, runner: CliRunner, node_dir: Path) -> None:
        """On a clean project the JSON report lists the scenario's actions."""
        runner.invoke(cli, ["init", "-p", str(node_dir)])
        scenario = node_dir / "tests" / "ratel" / "security.ratel"

        result = runner.invoke(cli, ["run", str(scenario), "-p", str(node_dir)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["name"] == "Access audit"
        assert data["target"] == "http://localhost:8080"
        assert data["steps"][0]["results"][0]["kind"] == "ATTACK"

    def test_drifted_project_is_blocked(self, runner: CliRunner, node_dir: Path) -> None:
        """A weakened scenario blocks the run with the drift report attached."""
        runner.invoke(cli, ["init", "-p", str(node_dir)])
        scenario = node_dir / "tests" / "ratel" / "security.ratel"
        scenario.write_text('SCENARIO "weakened"\n')

        result = runner.invoke(cli, ["run", str(scenario), "-p", str(node_dir)])

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error_type"] == "INTEGRITY_ERROR"
        assert data["check"]["verdict"] == "drifted"

    def test_syntax_error(self, runner: CliRunner, node_dir: Path) -> None:
        """A malformed scenario reports the failing line as PARSING_ERROR."""
        runner.invoke(cli, ["init", "-p", str(node_dir)])
        bad = node_dir / "bad.ratel"
        bad.write_text("NOT A SCENARIO\n")

        result = runner.invoke(cli, ["run", str(bad), "-p", str(node_dir)])

        assert result.exit_code == 2
        data = json.loads(result.output)
        assert data["error_type"] == "PARSING_ERROR"
        assert "line 1" in data["message"]
