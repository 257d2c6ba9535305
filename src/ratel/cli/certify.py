"""``ratel certify`` --- Accept the current expert tests as the new baseline.

Exit Codes:
    0 --- Baseline re-certified and manifest written.
    2 --- Not initialized, unreadable artifact, or write failure.
"""

from __future__ import annotations

import sys

import click

from ratel.cli.options import EXIT_ERROR, EXIT_OK, load_profile, project_dir_option
from ratel.core.engine import TraceabilityEngine
from ratel.exceptions import RatelError


@click.command("certify")
@project_dir_option
def certify_command(project_dir: str) -> None:
    """Record the current content of the expert tests as trusted."""
    from ratel.cli.output import print_error, print_manifest

    try:
        profile = load_profile(project_dir)
        manifest = TraceabilityEngine().certify(profile)
    except RatelError as exc:
        print_error(str(exc))
        sys.exit(EXIT_ERROR)

    print_manifest(manifest, title="New Baseline Established")
    sys.exit(EXIT_OK)
