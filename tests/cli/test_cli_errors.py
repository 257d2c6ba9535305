"""Tests for CLI error handling and global options.

Verifies:
    - --version, --help and -v on the command group.
    - Operational errors exit 2 with a message and no traceback.
"""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from ratel import __version__
from ratel.cli.main import cli


class TestGlobalOptions:
    """Validate options on the top-level command group."""

    def test_version(self, runner: CliRunner) -> None:
        """--version prints the package version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        """--help lists every subcommand."""
        result = runner.invoke(cli, ["--help"])
        for command in ("init", "check", "certify", "status", "run"):
            assert command in result.output

    def test_verbose_flag_accepted(self, runner: CliRunner, node_dir: Path) -> None:
        """-v enables verbose logging without changing the result."""
        result = runner.invoke(cli, ["-v", "init", "-p", str(node_dir)])
        assert result.exit_code == 0


class TestErrorHandling:
    """Validate that failures exit 2 with a readable error."""

    def test_missing_project_dir(self, runner: CliRunner, tmp_path: Path) -> None:
        """A project directory that does not exist exits 2 without a traceback."""
        result = runner.invoke(cli, ["check", "-p", str(tmp_path / "nowhere")])
        assert result.exit_code == 2
        assert "Error" in result.output
        assert "Traceback" not in result.output

    def test_corrupt_manifest(self, runner: CliRunner, node_dir: Path) -> None:
        """An unparseable ratel.yaml exits 2."""
        (node_dir / "ratel.yaml").write_text("::: not yaml :::\n  - [")
        result = runner.invoke(cli, ["check", "-p", str(node_dir)])
        assert result.exit_code == 2
        assert "Error" in result.output

    def test_run_missing_scenario_file(self, runner: CliRunner, node_dir: Path) -> None:
        """run with a scenario path that does not exist exits 2."""
        result = runner.invoke(cli, ["run", str(node_dir / "nope.ratel"), "-p", str(node_dir)])
        assert result.exit_code == 2
