"""``ratel check`` --- Detect drift of the expert tests.

Compares each tracked scenario with its certified digest. Never writes.

Exit Codes:
    0 --- CLEAN: every tracked file is unchanged.
    1 --- DRIFTED: at least one tracked file is modified or missing.
    2 --- Not initialized, unreadable artifact, or malformed manifest.
"""

from __future__ import annotations

import json
import sys

import click

from ratel.cli.options import EXIT_ERROR, load_profile, project_dir_option
from ratel.core.engine import TraceabilityEngine
from ratel.exceptions import RatelError


@click.command("check")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@project_dir_option
def check_command(output_format: str, project_dir: str) -> None:
    """Verify the expert tests against the certified baseline.

    Exit code 0 if clean, 1 if drifted, 2 on failure.
    """
    from ratel.cli.output import print_check_report, print_error

    try:
        profile = load_profile(project_dir)
        report = TraceabilityEngine().check(profile)
    except RatelError as exc:
        if output_format == "json":
            click.echo(json.dumps({"error": str(exc)}))
        else:
            print_error(str(exc))
        sys.exit(EXIT_ERROR)

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        print_check_report(report)
    sys.exit(report.exit_code)
