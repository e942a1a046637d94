"""Unattended cleanup command.

Meant to be run from cron or a systemd timer. Never prompts, always
prints a single summary line and reports the result as exit code.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer

from lrclean.backups.executor import DeletionExecutor
from lrclean.cli.display import format_cleanup_summary
from lrclean.cli.types import require_settings, store_settings
from lrclean.core.cleanup import CleanupStatus, run_unattended_cleanup
from lrclean.core.state import record_deletions
from lrclean.models.history import HistoryActionType
from lrclean.utils.formatting import console, print_warning

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Run an unattended cleanup.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def auto(
    ctx: typer.Context,
    folder: Annotated[
        Path | None,
        typer.Option(
            "--folder",
            "-F",
            help="Backup folder to use instead of the configured one.",
        ),
    ] = None,
    if_due: Annotated[
        bool,
        typer.Option(
            "--if-due",
            help="Only run when automatic cleanup is enabled and due.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
) -> None:
    """Apply the retention policy without asking.

    Exit codes: 0 when finished or nothing to delete, 1 when some
    backups could not be deleted, 2 when no backup folder is available.

    Examples:
        lrclean auto                 # Clean now
        lrclean auto --if-due        # For hourly timers
        lrclean auto --dry-run       # Report only
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings()

    if if_due and not settings.is_cleanup_due():
        logger.info("Automatic cleanup not due")
        console.print("Automatic cleanup not due", highlight=False)
        return

    container = folder.expanduser() if folder is not None else settings.backup_folder_path
    outcome = run_unattended_cleanup(
        container,
        settings.policy,
        executor=DeletionExecutor(dry_run=dry_run),
    )
    console.print(format_cleanup_summary(outcome), highlight=False, markup=False)

    if outcome.status in (CleanupStatus.COMPLETED, CleanupStatus.COMPLETED_WITH_ERRORS):
        try:
            record_deletions(
                outcome.summary,
                outcome.selected_sizes,
                HistoryActionType.AUTO_CLEANUP,
                metadata={"container": outcome.container, "command": "lrclean auto"},
            )
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not record to history: {e}")

    if not dry_run and outcome.status != CleanupStatus.NO_CONTAINER:
        settings.last_auto_cleanup = datetime.now()
        store_settings(settings)

    raise typer.Exit(code=outcome.status.exit_code)
