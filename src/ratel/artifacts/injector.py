"""Materializes expert artifacts inside the host project."""

from __future__ import annotations

import logging
from pathlib import Path

from ratel.artifacts.catalog import Artifact
from ratel.exceptions import InjectionFailedError
from ratel.profile.models import ProjectProfile

logger = logging.getLogger(__name__)


class ArtifactInjector:
    """Writes canonical scenario files to their place in the project.

    The engine only depends on ``inject``; tests substitute their own
    injector to simulate failures or alternative content.
    """

    def inject(self, profile: ProjectProfile, artifacts: tuple[Artifact, ...]) -> list[Path]:
        """Write every artifact, creating parent directories as needed.

        Existing files are overwritten with the canonical content.

        Args:
            profile: Target project.
            artifacts: Artifacts to materialize.

        Returns:
            Absolute paths written, in artifact order.

        Raises:
            InjectionFailedError: On the first artifact that cannot be
                written.
        """
        written: list[Path] = []
        for artifact in artifacts:
            target = profile.resolve(artifact.relative_path)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(artifact.data)
            except OSError as exc:
                raise InjectionFailedError(
                    f"Failed to inject {artifact.relative_path}: {exc.strerror or exc}",
                    target,
                ) from exc
            logger.info("Expert scenario injected into %s", artifact.relative_path)
            written.append(target)
        return written
