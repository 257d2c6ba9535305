"""Ratel CLI --- Cyberattack-Driven Development traceability.

Entry point for the ``ratel`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    init     --- Inject expert scenarios and create ratel.yaml.
    check    --- Detect drift from the certified baseline.
    certify  --- Accept current content as the new baseline.
    status   --- Show the computed lifecycle state.
    run      --- Integrity-gated scenario audit (JSON report).

Usage::

    ratel init --context banking
    ratel check
    ratel check --format json
    ratel certify
    ratel run tests/ratel/security.ratel
"""

from __future__ import annotations

import click

from ratel import __version__
from ratel.cli.certify import certify_command
from ratel.cli.check import check_command
from ratel.cli.init_cmd import init_command
from ratel.cli.options import configure_logging
from ratel.cli.run_cmd import run_command
from ratel.cli.status_cmd import status_command


@click.group()
@click.version_option(version=__version__, prog_name="ratel")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Ratel: tamper-evident security tests for your project.

    Inject an expert baseline of security scenarios, fingerprint it, and
    detect whether it was modified or knowingly re-certified.
    """
    configure_logging(verbose)


cli.add_command(init_command)
cli.add_command(check_command)
cli.add_command(certify_command)
cli.add_command(status_command)
cli.add_command(run_command)
