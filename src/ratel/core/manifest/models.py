"""Manifest data model.

A ``Manifest`` binds each tracked artifact path to its certified digest
and records when the project was initialized and last re-certified. It is
frozen: lifecycle changes produce a new instance through ``recertified``,
which is the only place ``customized_at`` moves.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from ratel import __version__
from ratel.profile.models import ProjectType

SCHEMA_VERSION: str = "1.0"

GENERATED_BY: str = f"ratel {__version__}"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Manifest:
    """Certified baseline for one project.

    Attributes:
        project_type: Project kind recorded at ``init``.
        context: Context label given at ``init`` (e.g. "banking").
        initialized_at: When ``init`` created the manifest. Never changes.
        expert_hashes: Tracked relative path -> hex digest, in path order.
        customized_at: Last ``certify`` time, or None if never certified.
        schema_version: Manifest format identifier.
        generated_by: Tool name and version that last wrote the file.
    """

    project_type: ProjectType
    context: str
    initialized_at: datetime
    expert_hashes: dict[str, str] = field(default_factory=dict)
    customized_at: datetime | None = None
    schema_version: str = SCHEMA_VERSION
    generated_by: str = GENERATED_BY

    @classmethod
    def create(
        cls,
        project_type: ProjectType,
        context: str,
        expert_hashes: dict[str, str],
        initialized_at: datetime | None = None,
    ) -> Manifest:
        """Build a fresh, never-certified manifest."""
        return cls(
            project_type=project_type,
            context=context,
            initialized_at=initialized_at or utc_now(),
            expert_hashes=dict(sorted(expert_hashes.items())),
        )

    @property
    def is_customized(self) -> bool:
        """True once the baseline has been re-certified at least once."""
        return self.customized_at is not None

    @property
    def tracked_paths(self) -> list[str]:
        """Tracked artifact paths in manifest order."""
        return list(self.expert_hashes)

    def recertified(
        self, expert_hashes: dict[str, str], at: datetime | None = None
    ) -> Manifest:
        """Return a copy with a new baseline and a stamped ``customized_at``.

        ``customized_at`` never moves backwards: if ``at`` is earlier than
        the stored value (clock skew), the stored value is kept.

        Args:
            expert_hashes: The complete new baseline.
            at: Certification time. Defaults to now.
        """
        stamp = at or utc_now()
        if self.customized_at is not None and stamp < self.customized_at:
            stamp = self.customized_at
        return replace(
            self,
            expert_hashes=dict(sorted(expert_hashes.items())),
            customized_at=stamp,
            generated_by=GENERATED_BY,
        )
