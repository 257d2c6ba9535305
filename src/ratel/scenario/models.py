"""Parsed representation of a ``.ratel`` scenario."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ActionKind(str, Enum):
    ATTACK = "ATTACK"
    CHECK = "CHECK"


@dataclass(frozen=True)
class Action:
    """One ``ATTACK`` or ``CHECK`` line inside a step.

    Attributes:
        kind: Action keyword.
        value: Attack identifier, or the full check expression.
        line: 1-based source line, for error reporting.
    """

    kind: ActionKind
    value: str
    line: int = 0


@dataclass
class Step:
    title: str
    actions: list[Action] = field(default_factory=list)


@dataclass
class Scenario:
    """A complete scenario file.

    Attributes:
        name: ``SCENARIO`` label.
        target: ``TARGET`` URL, empty when not declared.
        scope: ``WITH_SCOPE`` identifier, empty when not declared.
        steps: Steps in file order.
    """

    name: str
    target: str = ""
    scope: str = ""
    steps: list[Step] = field(default_factory=list)

    @property
    def action_count(self) -> int:
        return sum(len(step.actions) for step in self.steps)
