"""``ratel init`` --- Inject the expert baseline and create ratel.yaml.

Exit Codes:
    0 --- Scenarios injected and manifest written.
    2 --- Already initialized (without --force), injection or write failure.
"""

from __future__ import annotations

import sys

import click

from ratel.artifacts import DEFAULT_CONTEXT
from ratel.cli.options import EXIT_ERROR, EXIT_OK, load_profile, project_dir_option
from ratel.core.engine import TraceabilityEngine
from ratel.core.manifest import ManifestStore
from ratel.exceptions import RatelError


@click.command("init")
@click.option(
    "--context", "-c",
    default=DEFAULT_CONTEXT,
    show_default=True,
    help="Context label selecting the expert scenario set (e.g. banking).",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite an existing ratel.yaml and re-inject the scenarios.",
)
@project_dir_option
def init_command(context: str, force: bool, project_dir: str) -> None:
    """Inject expert security scenarios and record their fingerprints."""
    from ratel.cli.output import print_error, print_manifest

    try:
        profile = load_profile(project_dir)
        manifest = TraceabilityEngine().init(profile, context=context, force=force)
    except RatelError as exc:
        print_error(str(exc))
        sys.exit(EXIT_ERROR)

    print_manifest(manifest, title="Project Initialized")
    click.echo(f"\nManifest written to: {ManifestStore(profile.root).path}")
    sys.exit(EXIT_OK)
