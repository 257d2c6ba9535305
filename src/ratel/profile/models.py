"""Project profile data models.

A ``ProjectProfile`` is produced once per invocation and threaded through
every engine call. It is frozen so nothing downstream can retarget an
operation at another project halfway through.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath


class ProjectType(str, Enum):
    """The fixed set of host project kinds Ratel knows how to inject into.

    Values are the identifiers written to the manifest's ``project_type``.
    """

    JVM_MAVEN = "jvm-maven"
    JVM_GRADLE = "jvm-gradle"
    NODE = "node"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    GENERIC = "generic"

    @classmethod
    def from_value(cls, value: str) -> ProjectType:
        """Look up a member by manifest value, tolerating display names.

        Manifests written by older ``ratel`` builds store names such as
        ``"Node.js"`` or ``"Generic"``.

        Raises:
            ValueError: If ``value`` names no known project type.
        """
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        if normalized in _LEGACY_NAMES:
            return _LEGACY_NAMES[normalized]
        raise ValueError(f"Unknown project type: {value!r}")


_LEGACY_NAMES: dict[str, ProjectType] = {
    "node.js": ProjectType.NODE,
    "nodejs": ProjectType.NODE,
    "maven": ProjectType.JVM_MAVEN,
    "gradle": ProjectType.JVM_GRADLE,
}


@dataclass(frozen=True)
class ProjectProfile:
    """Immutable description of the host project.

    Attributes:
        project_type: Detected project kind.
        root: Absolute path of the project root. The manifest lives here.
        test_dir: POSIX path, relative to ``root``, where expert scenarios
            are injected. ``"."`` means the root itself.
    """

    project_type: ProjectType
    root: Path
    test_dir: str = "."

    def artifact_path(self, filename: str) -> str:
        """Return the manifest key for a scenario file in ``test_dir``."""
        return str(PurePosixPath(self.test_dir) / filename)

    def resolve(self, relative_path: str) -> Path:
        """Map a manifest key to an absolute filesystem path."""
        return self.root.joinpath(*PurePosixPath(relative_path).parts)
