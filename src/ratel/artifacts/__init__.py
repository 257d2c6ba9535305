"""Expert artifact catalog and injector."""

from ratel.artifacts.catalog import (
    BASE_SCENARIO_FILENAME,
    CONTEXT_SCENARIOS,
    DEFAULT_CONTEXT,
    Artifact,
    ArtifactSet,
    artifact_set_for,
)
from ratel.artifacts.injector import ArtifactInjector

__all__ = [
    "Artifact",
    "ArtifactInjector",
    "ArtifactSet",
    "BASE_SCENARIO_FILENAME",
    "CONTEXT_SCENARIOS",
    "DEFAULT_CONTEXT",
    "artifact_set_for",
]
