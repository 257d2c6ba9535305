"""Ratel exception hierarchy.

All public exceptions inherit from RatelError, giving callers a single
base class to catch when they want to handle any Ratel-specific failure
without swallowing unrelated errors. Drift is never an exception: it is a
normal ``CheckReport`` outcome.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class RatelError(Exception):
    """Base exception for all Ratel errors."""


class _PathError(RatelError):
    """A failure tied to one filesystem location."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class NotInitializedError(_PathError):
    """Raised when an operation needs a manifest and none exists.

    ``ratel init`` has not been run for the project root.
    """


class AlreadyInitializedError(_PathError):
    """Raised by ``init`` when a manifest already exists and no overwrite
    was requested."""


class ReadError(_PathError):
    """Raised when a tracked artifact exists but cannot be read.

    Covers permission errors, directories where a file was expected, and
    any other OS-level failure while fingerprinting.
    """


class WriteError(_PathError):
    """Raised when the manifest cannot be persisted.

    The previously saved manifest, if any, is left untouched.
    """


class InjectionFailedError(_PathError):
    """Raised when the expert artifacts cannot be materialized on disk."""


class ManifestError(_PathError):
    """Raised when an existing manifest is malformed.

    Covers invalid YAML, missing required fields, bad timestamps, bad
    digests, and tracked paths escaping the project root.
    """


class ProjectNotFoundError(_PathError):
    """Raised when the project root does not exist or is not a directory."""


class ScenarioSyntaxError(RatelError):
    """Raised when a ``.ratel`` scenario file cannot be parsed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class IntegrityGateError(RatelError):
    """Raised when a scenario run is refused because the tests drifted.

    Attributes:
        report: The ``CheckReport`` that blocked the run.
    """

    def __init__(self, message: str, report: Any) -> None:
        super().__init__(message)
        self.report = report


class ExecutionError(RatelError):
    """Raised by an action executor when one scenario action cannot run.

    The audit runner records it as an ``ERROR`` result and continues with
    the next action.
    """
