"""Shared fixtures for ratel tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ratel.artifacts import Artifact
from ratel.core.engine import TraceabilityEngine
from ratel.profile import ProjectProfile, detect_project

T1_PATH = "tests/ratel/t1.ratel"
T1_CONTENT = 'SCENARIO "T1"\nSTEP "only"\n    ATTACK sqli\n'


def single_artifact_catalog(profile: ProjectProfile, context: str) -> tuple[Artifact, ...]:
    """Catalog yielding the one-file Artifact Set {T1}."""
    return (Artifact(T1_PATH, T1_CONTENT),)


@pytest.fixture
def engine() -> TraceabilityEngine:
    """Engine with the built-in catalog and injector."""
    return TraceabilityEngine()


@pytest.fixture
def t1_engine() -> TraceabilityEngine:
    """Engine whose Artifact Set is exactly {T1}."""
    return TraceabilityEngine(catalog=single_artifact_catalog)


@pytest.fixture
def generic_project(tmp_path: Path) -> ProjectProfile:
    """An empty directory, detected as a generic project."""
    project = tmp_path / "generic-app"
    project.mkdir()
    return detect_project(project)


@pytest.fixture
def node_project(tmp_path: Path) -> ProjectProfile:
    """A directory with a package.json, detected as a Node project."""
    project = tmp_path / "node-app"
    project.mkdir()
    (project / "package.json").write_text(json.dumps({"name": "node-app"}))
    return detect_project(project)


@pytest.fixture
def t1() -> Artifact:
    """The single artifact tracked by ``t1_engine``."""
    return Artifact(T1_PATH, T1_CONTENT)
