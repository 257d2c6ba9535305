"""Line-oriented parser for the ``.ratel`` scenario language.

Grammar::

    SCENARIO "<name>"
    TARGET "<url>"
    WITH_SCOPE <IDENT>
    STEP "<title>"
        ATTACK <ident>
        CHECK <expression>

Header keywords (``SCENARIO``, ``TARGET``, ``WITH_SCOPE``) appear at most
once and before the first ``STEP``. Blank lines and ``#`` comments are
ignored. Indentation is not significant.
"""

from __future__ import annotations

import re
from pathlib import Path

from ratel.exceptions import ReadError, ScenarioSyntaxError
from ratel.scenario.models import Action, ActionKind, Scenario, Step

_QUOTED_RE = re.compile(r'^"([^"]*)"$')
_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_HEADERS = ("SCENARIO", "TARGET", "WITH_SCOPE")


def _quoted(rest: str, keyword: str, lineno: int) -> str:
    match = _QUOTED_RE.match(rest)
    if match is None:
        raise ScenarioSyntaxError(f"{keyword} expects a double-quoted string", lineno)
    return match.group(1)


def _ident(rest: str, keyword: str, lineno: int) -> str:
    if _IDENT_RE.match(rest) is None:
        raise ScenarioSyntaxError(f"{keyword} expects an identifier, got {rest!r}", lineno)
    return rest


def parse_scenario(text: str) -> Scenario:
    """Parse scenario source text.

    Raises:
        ScenarioSyntaxError: On the first malformed line, or if the file
            has no ``SCENARIO`` declaration.
    """
    headers: dict[str, str] = {}
    steps: list[Step] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        keyword, *tail = line.split(None, 1)
        rest = tail[0].strip() if tail else ""

        if keyword in _HEADERS:
            if keyword in headers:
                raise ScenarioSyntaxError(f"Duplicate {keyword}", lineno)
            if steps:
                raise ScenarioSyntaxError(f"{keyword} must precede the first STEP", lineno)
            if keyword == "WITH_SCOPE":
                headers[keyword] = _ident(rest, keyword, lineno)
            else:
                headers[keyword] = _quoted(rest, keyword, lineno)
        elif keyword == "STEP":
            steps.append(Step(title=_quoted(rest, keyword, lineno)))
        elif keyword in ("ATTACK", "CHECK"):
            if not steps:
                raise ScenarioSyntaxError(f"{keyword} outside of a STEP", lineno)
            if keyword == "ATTACK":
                value = _ident(rest, keyword, lineno)
            elif rest:
                value = rest
            else:
                raise ScenarioSyntaxError("CHECK expects an expression", lineno)
            steps[-1].actions.append(Action(ActionKind(keyword), value, lineno))
        else:
            raise ScenarioSyntaxError(f"Unknown keyword {keyword!r}", lineno)

    if "SCENARIO" not in headers:
        raise ScenarioSyntaxError("Missing SCENARIO declaration")

    return Scenario(
        name=headers["SCENARIO"],
        target=headers.get("TARGET", ""),
        scope=headers.get("WITH_SCOPE", ""),
        steps=steps,
    )


def parse_scenario_file(path: Path) -> Scenario:
    """Read and parse a scenario file.

    Raises:
        ReadError: If the file cannot be read as UTF-8 text.
        ScenarioSyntaxError: If the content is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(f"Cannot read scenario {path}: {exc}", path) from exc
    return parse_scenario(text)
