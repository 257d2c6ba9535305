"""Integrity-gated scenario runs.

An audit run never starts on tampered tests: ``AuditRunner.run`` performs
a full ``check`` first and refuses with ``IntegrityGateError`` unless the
verdict is ``CLEAN``. Only then is the scenario parsed and each action
handed to an ``ActionExecutor``.

Attack execution lives outside this package. ``DryRunExecutor`` is the
built-in executor: it validates and plans every action without touching
the target, which is what ``ratel run`` uses by default.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from ratel.core.engine import TraceabilityEngine
from ratel.exceptions import ExecutionError, IntegrityGateError
from ratel.profile.models import ProjectProfile
from ratel.scenario.models import Action, Scenario
from ratel.scenario.parser import parse_scenario_file

logger = logging.getLogger(__name__)


class ActionStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    ERROR = "ERROR"
    PLANNED = "PLANNED"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one action.

    Attributes:
        kind: ``ATTACK`` or ``CHECK``.
        value: Attack identifier or check expression.
        status: Execution status.
        message: Human-readable detail from the executor.
        target: Target URL the action ran against, if any.
    """

    kind: str
    value: str
    status: ActionStatus
    message: str = ""
    target: str | None = None


@dataclass
class StepResult:
    title: str
    results: list[ActionResult] = field(default_factory=list)


@dataclass
class AuditReport:
    """Consolidated result of a scenario run."""

    name: str
    target: str
    scope: str
    steps: list[StepResult] = field(default_factory=list)
    executed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def succeeded(self) -> bool:
        """True if no action failed or errored."""
        return all(
            r.status in (ActionStatus.SUCCESS, ActionStatus.PLANNED)
            for step in self.steps
            for r in step.results
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "target": self.target,
            "scope": self.scope,
            "steps": [
                {
                    "title": step.title,
                    "results": [
                        {
                            "kind": r.kind,
                            "value": r.value,
                            "target": r.target,
                            "status": r.status.value,
                            "message": r.message,
                        }
                        for r in step.results
                    ],
                }
                for step in self.steps
            ],
            "executed_at": self.executed_at.isoformat(),
        }


class ActionExecutor(ABC):
    """Runs a single scenario action against the scenario's target."""

    @abstractmethod
    def execute(self, action: Action, scenario: Scenario) -> ActionResult:
        """Execute ``action``.

        Raises:
            ExecutionError: If the action could not be carried out at all.
                A failed security check is a ``FAILED`` result, not an
                exception.
        """


class DryRunExecutor(ActionExecutor):
    """Plans actions without executing them."""

    def execute(self, action: Action, scenario: Scenario) -> ActionResult:
        return ActionResult(
            kind=action.kind.value,
            value=action.value,
            status=ActionStatus.PLANNED,
            message="Dry run: action not executed",
            target=scenario.target or None,
        )


class AuditRunner:
    """Runs a scenario once the tracked tests pass the integrity check.

    Args:
        engine: Engine used for the integrity gate.
        executor: Action executor. Defaults to ``DryRunExecutor``.
    """

    def __init__(
        self,
        engine: TraceabilityEngine | None = None,
        executor: ActionExecutor | None = None,
    ) -> None:
        self.engine = engine if engine is not None else TraceabilityEngine()
        self.executor = executor if executor is not None else DryRunExecutor()

    def run(self, profile: ProjectProfile, scenario_path: Path) -> AuditReport:
        """Gate on ``check``, then execute every action of the scenario.

        Raises:
            IntegrityGateError: If ``check`` reports drift.
            NotInitializedError: If the project has no manifest.
            ReadError: If a tracked file or the scenario cannot be read.
            ScenarioSyntaxError: If the scenario is malformed.
        """
        check = self.engine.check(profile)
        if not check.is_clean:
            drifted = ", ".join(e.path for e in check.modified + check.missing)
            raise IntegrityGateError(
                f"Audit aborted: expert tests drifted from the certified baseline ({drifted})",
                check,
            )

        scenario = parse_scenario_file(scenario_path)
        report = AuditReport(name=scenario.name, target=scenario.target, scope=scenario.scope)
        for step in scenario.steps:
            step_result = StepResult(title=step.title)
            for action in step.actions:
                step_result.results.append(self._execute(action, scenario))
            report.steps.append(step_result)

        logger.info(
            "Scenario %r: %d action(s) across %d step(s)",
            scenario.name,
            scenario.action_count,
            len(scenario.steps),
        )
        return report

    def _execute(self, action: Action, scenario: Scenario) -> ActionResult:
        try:
            return self.executor.execute(action, scenario)
        except ExecutionError as exc:
            logger.warning("Action %s %s failed to execute: %s", action.kind.value, action.value, exc)
            return ActionResult(
                kind=action.kind.value,
                value=action.value,
                status=ActionStatus.ERROR,
                message=str(exc),
                target=scenario.target or None,
            )
