"""Rich output formatting helpers for the Ratel CLI.

Status color mapping:
    UNCHANGED = green, MODIFIED = bold red, MISSING = yellow
"""

from __future__ import annotations

from typing import Any

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ratel.core.engine import CheckReport, DriftStatus, ProjectState, Verdict
from ratel.core.manifest import Manifest

_STATUS_STYLES: dict[DriftStatus, str] = {
    DriftStatus.UNCHANGED: "green",
    DriftStatus.MODIFIED: "bold red",
    DriftStatus.MISSING: "yellow",
}

_STATE_STYLES: dict[ProjectState, str] = {
    ProjectState.UNINITIALIZED: "dim",
    ProjectState.CERTIFIED_CLEAN: "bold green",
    ProjectState.RECERTIFIED: "bold cyan",
    ProjectState.DRIFTED: "bold red",
}

console = Console()


def status_style(status: DriftStatus) -> str:
    """Return the Rich style string for a drift status."""
    return _STATUS_STYLES.get(status, "white")


def state_style(state: ProjectState) -> str:
    """Return the Rich style string for a project state."""
    return _STATE_STYLES.get(state, "white")


def _short(digest: str | None) -> str:
    return digest[:12] if digest else "-"


def _timestamp(value: Any) -> str:
    return value.isoformat(timespec="seconds") if value is not None else "never"


def print_manifest(manifest: Manifest, title: str) -> None:
    """Print a manifest summary and its tracked artifacts.

    Args:
        manifest: Manifest to show.
        title: Panel title (e.g. "Project Initialized").
    """
    header = Text.assemble(
        ("Project: ", "bold"), (manifest.project_type.value, ""),
        ("  Context: ", "bold"), (manifest.context, ""),
    )
    console.print(Panel(header, title=title))
    console.print(f"  Initialized: {_timestamp(manifest.initialized_at)}")
    console.print(f"  Certified:   {_timestamp(manifest.customized_at)}")

    table = Table(title="Tracked Artifacts", show_header=True, header_style="bold")
    table.add_column("Path", style="bold")
    table.add_column("Digest", style="dim")
    for path, digest in manifest.expert_hashes.items():
        table.add_row(path, _short(digest))
    console.print(table)


def print_check_report(report: CheckReport) -> None:
    """Print per-artifact drift classification and the overall verdict."""
    table = Table(title="Ratel Integrity Check", show_header=True, header_style="bold")
    table.add_column("Path", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Expected", style="dim")
    table.add_column("Actual", style="dim")
    for entry in report.entries:
        table.add_row(
            entry.path,
            Text(entry.status.name, style=status_style(entry.status)),
            _short(entry.expected),
            _short(entry.actual),
        )
    console.print(table)

    parts = [f"[bold]{len(report.entries)}[/bold] tracked"]
    unchanged = len(report.by_status(DriftStatus.UNCHANGED))
    if unchanged:
        parts.append(f"[green]{unchanged} unchanged[/green]")
    if report.modified:
        parts.append(f"[red]{len(report.modified)} modified[/red]")
    if report.missing:
        parts.append(f"[yellow]{len(report.missing)} missing[/yellow]")
    console.print(" | ".join(parts))

    if report.verdict is Verdict.CLEAN:
        console.print(Panel("[bold green]CLEAN[/bold green]", title="Verdict"))
    else:
        console.print(Panel("[bold red]DRIFTED[/bold red]", title="Verdict"))
        console.print("[dim]Run 'ratel certify' to accept the current content as the new baseline.[/dim]")


def print_state(state: ProjectState) -> None:
    """Print the computed lifecycle state."""
    console.print("State: ", Text(state.name, style=state_style(state)))


def print_error(message: str) -> None:
    """Print an operational failure as plain text, without wrapping."""
    click.echo(f"Error: {message}")
