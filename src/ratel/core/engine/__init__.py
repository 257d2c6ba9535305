"""Traceability engine --- ``init``, ``check`` and ``certify``.

Re-exports the engine and its report types::

    from ratel.core.engine import TraceabilityEngine, Verdict
"""

from ratel.core.engine.engine import TraceabilityEngine
from ratel.core.engine.models import (
    CheckReport,
    DriftEntry,
    DriftStatus,
    ProjectState,
    Verdict,
)

__all__ = [
    "CheckReport",
    "DriftEntry",
    "DriftStatus",
    "ProjectState",
    "TraceabilityEngine",
    "Verdict",
]
