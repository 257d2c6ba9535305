"""Project-type detection from well-known marker files.

The marker table is fixed and ordered: the first marker found at the
project root decides the type. JVM markers come before ``package.json``
because Maven and Gradle projects routinely carry a frontend build.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ratel.exceptions import ProjectNotFoundError
from ratel.profile.models import ProjectProfile, ProjectType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectMarker:
    """One row of the detection table.

    Attributes:
        project_type: Type assigned when any of ``filenames`` exists.
        filenames: Marker files looked up at the project root.
        test_dir: Where scenarios go for this project type.
    """

    project_type: ProjectType
    filenames: tuple[str, ...]
    test_dir: str


MARKERS: tuple[ProjectMarker, ...] = (
    ProjectMarker(ProjectType.JVM_MAVEN, ("pom.xml",), "src/test/ratel"),
    ProjectMarker(
        ProjectType.JVM_GRADLE,
        ("build.gradle", "build.gradle.kts"),
        "src/test/ratel",
    ),
    ProjectMarker(ProjectType.NODE, ("package.json",), "tests/ratel"),
    ProjectMarker(
        ProjectType.PYTHON,
        ("pyproject.toml", "setup.py", "setup.cfg", "requirements.txt"),
        "tests/ratel",
    ),
    ProjectMarker(ProjectType.GO, ("go.mod",), "test/ratel"),
    ProjectMarker(ProjectType.RUST, ("Cargo.toml",), "tests/ratel"),
)

GENERIC_TEST_DIR = "."


def detect_project(root: Path) -> ProjectProfile:
    """Build the ``ProjectProfile`` for a directory.

    Args:
        root: Project root directory.

    Returns:
        Profile with the first matching marker's type and test dir, or a
        ``generic`` profile when no marker is present.

    Raises:
        ProjectNotFoundError: If ``root`` is not an existing directory.
    """
    resolved = root.resolve()
    if not resolved.is_dir():
        raise ProjectNotFoundError(f"Project directory not found: {root}", root)

    for marker in MARKERS:
        for filename in marker.filenames:
            if (resolved / filename).is_file():
                logger.debug(
                    "Detected %s project via %s", marker.project_type.value, filename
                )
                return ProjectProfile(marker.project_type, resolved, marker.test_dir)

    logger.debug("No project marker found in %s, using generic profile", resolved)
    return ProjectProfile(ProjectType.GENERIC, resolved, GENERIC_TEST_DIR)
