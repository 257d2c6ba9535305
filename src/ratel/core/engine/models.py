"""Report types produced by the traceability engine.

Drift is classified per path as a three-way tag (``DriftStatus``) and only
aggregated into a pass/fail ``Verdict`` at the report level, so a report
can always say *which* file drifted and *how*.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class DriftStatus(str, Enum):
    """Classification of one tracked path."""

    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    MISSING = "missing"


class Verdict(str, Enum):
    """Overall outcome of ``check``."""

    CLEAN = "clean"
    DRIFTED = "drifted"


class ProjectState(str, Enum):
    """Lifecycle state of a project, computed on demand and never stored.

    - ``UNINITIALIZED``: no manifest.
    - ``CERTIFIED_CLEAN``: every tracked file matches the ``init`` baseline.
    - ``DRIFTED``: at least one tracked file is modified or missing.
    - ``RECERTIFIED``: clean against a baseline accepted by ``certify``.
    """

    UNINITIALIZED = "uninitialized"
    CERTIFIED_CLEAN = "certified_clean"
    DRIFTED = "drifted"
    RECERTIFIED = "recertified"


@dataclass(frozen=True)
class DriftEntry:
    """Comparison result for one tracked path.

    Attributes:
        path: Manifest key (relative POSIX path).
        status: Drift classification.
        expected: Certified digest from the manifest.
        actual: Live digest, or None when the file is missing.
    """

    path: str
    status: DriftStatus
    expected: str
    actual: str | None = None


@dataclass(frozen=True)
class CheckReport:
    """Aggregated result of ``check``.

    Attributes:
        entries: One entry per tracked path, in manifest order.
        context: Context label from the manifest.
        initialized_at: Manifest creation time.
        customized_at: Last certification time, or None.
    """

    entries: tuple[DriftEntry, ...]
    context: str
    initialized_at: datetime
    customized_at: datetime | None = None

    @property
    def verdict(self) -> Verdict:
        """CLEAN iff every tracked path is unchanged."""
        if all(e.status is DriftStatus.UNCHANGED for e in self.entries):
            return Verdict.CLEAN
        return Verdict.DRIFTED

    @property
    def is_clean(self) -> bool:
        return self.verdict is Verdict.CLEAN

    @property
    def state(self) -> ProjectState:
        """Lifecycle state implied by this report."""
        if not self.is_clean:
            return ProjectState.DRIFTED
        if self.customized_at is not None:
            return ProjectState.RECERTIFIED
        return ProjectState.CERTIFIED_CLEAN

    @property
    def exit_code(self) -> int:
        """Process exit code for automated gates: 0 clean, 1 drifted."""
        return 0 if self.is_clean else 1

    def by_status(self, status: DriftStatus) -> list[DriftEntry]:
        """Entries with the given classification."""
        return [e for e in self.entries if e.status is status]

    @property
    def modified(self) -> list[DriftEntry]:
        return self.by_status(DriftStatus.MODIFIED)

    @property
    def missing(self) -> list[DriftEntry]:
        return self.by_status(DriftStatus.MISSING)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "verdict": self.verdict.value,
            "state": self.state.value,
            "context": self.context,
            "initialized_at": self.initialized_at.isoformat(),
            "customized_at": (
                self.customized_at.isoformat() if self.customized_at else None
            ),
            "entries": [
                {
                    "path": e.path,
                    "status": e.status.value,
                    "expected": e.expected,
                    "actual": e.actual,
                }
                for e in self.entries
            ],
        }
