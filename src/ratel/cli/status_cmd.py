"""``ratel status`` --- Show the computed lifecycle state of the project."""

from __future__ import annotations

import sys

import click

from ratel.cli.options import EXIT_ERROR, EXIT_OK, load_profile, project_dir_option
from ratel.core.engine import TraceabilityEngine
from ratel.exceptions import RatelError


@click.command("status")
@project_dir_option
def status_command(project_dir: str) -> None:
    """Print UNINITIALIZED, CERTIFIED_CLEAN, DRIFTED or RECERTIFIED."""
    from ratel.cli.output import print_error, print_state

    try:
        state = TraceabilityEngine().state(load_profile(project_dir))
    except RatelError as exc:
        print_error(str(exc))
        sys.exit(EXIT_ERROR)

    print_state(state)
    sys.exit(EXIT_OK)
