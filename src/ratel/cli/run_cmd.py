"""``ratel run <scenario>`` --- Integrity-gated scenario audit.

Runs ``check`` first; a drifted project never gets audited. The scenario
is then parsed and every action planned through the dry-run executor. The
consolidated report is printed as JSON.

Exit Codes:
    0 --- Report produced, no action failed.
    1 --- Integrity gate refused the run, or an action failed.
    2 --- Not initialized, unreadable file, or scenario syntax error.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from ratel.cli.options import (
    EXIT_DRIFTED,
    EXIT_ERROR,
    EXIT_OK,
    load_profile,
    project_dir_option,
)
from ratel.exceptions import IntegrityGateError, RatelError, ScenarioSyntaxError
from ratel.scenario import AuditRunner


@click.command("run")
@click.argument("scenario_path", type=click.Path(exists=True, dir_okay=False))
@project_dir_option
def run_command(scenario_path: str, project_dir: str) -> None:
    """Audit SCENARIO_PATH once the expert tests pass the integrity check."""
    try:
        profile = load_profile(project_dir)
        report = AuditRunner().run(profile, Path(scenario_path))
    except IntegrityGateError as exc:
        click.echo(json.dumps({
            "status": "error",
            "error_type": "INTEGRITY_ERROR",
            "message": str(exc),
            "check": exc.report.to_dict(),
        }, indent=2))
        sys.exit(EXIT_DRIFTED)
    except ScenarioSyntaxError as exc:
        click.echo(json.dumps({
            "status": "error",
            "error_type": "PARSING_ERROR",
            "message": f"Syntax error in .ratel file: {exc}",
        }, indent=2))
        sys.exit(EXIT_ERROR)
    except RatelError as exc:
        click.echo(json.dumps({
            "status": "error",
            "error_type": type(exc).__name__,
            "message": str(exc),
        }, indent=2))
        sys.exit(EXIT_ERROR)

    click.echo(json.dumps(report.to_dict(), indent=2))
    sys.exit(EXIT_OK if report.succeeded else EXIT_DRIFTED)
