"""Options and helpers shared by every Ratel subcommand."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from ratel.profile import ProjectProfile, detect_project

EXIT_OK = 0
EXIT_DRIFTED = 1
EXIT_ERROR = 2

project_dir_option = click.option(
    "--project-dir", "-p",
    type=click.Path(file_okay=False),
    default=".",
    envvar="RATEL_PROJECT_DIR",
    show_envvar=True,
    help="Project root holding ratel.yaml (default: current directory).",
)


def load_profile(project_dir: str) -> ProjectProfile:
    """Detect the project profile for ``--project-dir``.

    Raises:
        ProjectNotFoundError: If the directory does not exist.
    """
    return detect_project(Path(project_dir))


def configure_logging(verbose: bool) -> None:
    """Route ``ratel`` log records to stderr through Rich.

    WARNING and above by default, DEBUG with ``--verbose``.
    """
    logger = logging.getLogger("ratel")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
