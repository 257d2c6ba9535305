"""``.ratel`` scenario files: parsing and integrity-gated audit runs."""

from ratel.scenario.models import Action, ActionKind, Scenario, Step
from ratel.scenario.parser import parse_scenario, parse_scenario_file
from ratel.scenario.runner import (
    ActionExecutor,
    ActionResult,
    ActionStatus,
    AuditReport,
    AuditRunner,
    DryRunExecutor,
    StepResult,
)

__all__ = [
    "Action",
    "ActionExecutor",
    "ActionKind",
    "ActionResult",
    "ActionStatus",
    "AuditReport",
    "AuditRunner",
    "DryRunExecutor",
    "Scenario",
    "Step",
    "StepResult",
    "parse_scenario",
    "parse_scenario_file",
]
