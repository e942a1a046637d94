"""Old catalogs command.

Shows the "Old Lightroom Catalogs" folder next to the backup folder and
optionally deletes it.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from lrclean.backups.executor import DeletionExecutor
from lrclean.backups.models import StaleCatalogsInfo
from lrclean.backups.stale import STALE_AFTER_DAYS, StaleCatalogFinder
from lrclean.cli.display import print_deletion_summary
from lrclean.cli.types import OutputFormat, require_settings, resolve_container
from lrclean.core.state import record_deletions
from lrclean.models.history import HistoryActionType
from lrclean.utils.formatting import (
    console,
    format_age,
    format_size,
    print_info,
    print_warning,
)

app = typer.Typer(
    help="Find and remove old Lightroom catalogs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def stale(
    ctx: typer.Context,
    folder: Annotated[
        Path | None,
        typer.Option(
            "--folder",
            "-F",
            help="Backup folder to search from instead of the configured one.",
        ),
    ] = None,
    threshold: Annotated[
        int,
        typer.Option(
            "--threshold",
            "-t",
            min=0,
            help="Days after which old catalogs count as stale.",
        ),
    ] = STALE_AFTER_DAYS,
    delete: Annotated[
        bool,
        typer.Option("--delete", help="Delete the folder if it is stale."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the old catalogs folder near the backup folder.

    Examples:
        lrclean stale                # Show size and age
        lrclean stale --delete       # Delete when older than 30 days
        lrclean stale -t 0 --delete  # Delete regardless of age
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings()
    container = resolve_container(folder, settings)
    info = StaleCatalogFinder().find(container)

    if output_format == OutputFormat.JSON:
        _print_json(info, threshold)
        return

    if info is None:
        print_info("No old catalogs folder found.")
        return

    is_stale = info.is_stale(threshold)
    console.print(
        f"[stale]{info.folder_path}[/]\n"
        f"  {info.file_count} file(s), {format_size(info.total_size_bytes)}, "
        f"oldest {format_age(info.age_days())}"
    )

    if not delete:
        if is_stale:
            console.print("[dim]Run with --delete to remove it.[/dim]")
        return

    if not is_stale:
        print_info(f"Old catalogs are newer than {threshold} day(s); nothing deleted.")
        return

    if not yes:
        confirmed = typer.confirm(
            f"\nDelete {info.folder_path} ({format_size(info.total_size_bytes)})?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    summary = DeletionExecutor().delete_folder(Path(info.folder_path), info.total_size_bytes)
    print_deletion_summary(summary)

    try:
        record_deletions(
            summary,
            {info.folder_path: info.total_size_bytes},
            HistoryActionType.STALE_DELETE,
            metadata={"container": str(container), "command": "lrclean stale --delete"},
        )
    except (OSError, RuntimeError) as e:
        print_warning(f"Could not record to history: {e}")

    if summary.has_errors:
        raise typer.Exit(code=1)


def _print_json(info: StaleCatalogsInfo | None, threshold: int) -> None:
    """Display the old catalogs folder as JSON."""
    if info is None:
        console.print_json("null")
        return
    data = {
        "folder_path": info.folder_path,
        "total_size_bytes": info.total_size_bytes,
        "file_count": info.file_count,
        "oldest_file_timestamp": info.oldest_file_timestamp.isoformat(),
        "age_days": info.age_days(),
        "stale": info.is_stale(threshold),
    }
    console.print_json(json.dumps(data))
