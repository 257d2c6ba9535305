"""Shared fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def node_dir(tmp_path: Path) -> Path:
    """A Node project directory (package.json at the root)."""
    project = tmp_path / "web"
    project.mkdir()
    (project / "package.json").write_text('{"name": "web"}')
    return project
