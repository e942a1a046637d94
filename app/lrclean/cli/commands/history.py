"""History command for viewing past cleanups.

This module provides the `lrclean history` command for viewing the
record of deleted backups and old catalog folders.
"""

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.table import Table

from lrclean.core.state import StateManager
from lrclean.models.history import HistoryEntry
from lrclean.utils.formatting import console, format_size, print_info

app = typer.Typer(
    name="history",
    help="View history of cleanups.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            help="Maximum number of entries to show.",
        ),
    ] = 20,
    since: Annotated[
        str | None,
        typer.Option(
            "--since",
            help="Show entries since date (YYYY-MM-DD).",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show history of cleanups.

    Each entry shows when it ran, what kind of cleanup it was, how much
    space it freed and whether every deletion succeeded.

    Examples:
        lrclean history              # Show last 20 entries
        lrclean history -n 50        # Show last 50 entries
        lrclean history --since 2026-01-01
        lrclean history --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    entries = StateManager().get_history(limit=limit)

    if since:
        try:
            since_date = datetime.fromisoformat(since).strftime("%Y-%m-%d")
        except ValueError:
            typer.echo(f"Invalid date format: {since}. Use YYYY-MM-DD.", err=True)
            raise typer.Exit(code=1) from None
        entries = [e for e in entries if e.timestamp[:10] >= since_date]

    if not entries:
        print_info("No history entries found.")
        return

    if json_output:
        _print_json(entries)
    else:
        _print_table(entries)


def _print_table(entries: list[HistoryEntry]) -> None:
    """Print history as Rich table.

    Args:
        entries: List of history entries to display.
    """
    table = Table(
        title="Cleanup History",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("ID", style="dim")
    table.add_column("Timestamp", style="info")
    table.add_column("Action")
    table.add_column("Deleted", justify="right")
    table.add_column("Freed", justify="right")
    table.add_column("OK?")

    for entry in entries:
        status = "[success]Yes[/]" if entry.success else f"[error]{len(entry.errors)} failed[/]"
        table.add_row(
            entry.id[:8],
            _format_timestamp(entry.timestamp),
            entry.action_type.value,
            str(len(entry.items)),
            format_size(entry.freed_bytes),
            status,
        )

    console.print(table)


def _format_timestamp(iso_timestamp: str) -> str:
    """Format ISO timestamp as local YYYY-MM-DD HH:MM."""
    dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.strftime("%Y-%m-%d %H:%M")


def _print_json(entries: list[HistoryEntry]) -> None:
    """Print history as JSON."""
    output = [entry.to_dict() for entry in entries]
    console.print_json(json.dumps(output))
