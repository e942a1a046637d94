"""Shared Rich display functions for backups and deletion results.

Provides reusable table builders and summary printers used by the
list, clean and auto commands.
"""

from datetime import date

from rich.table import Table

from lrclean.backups.models import BackupRecord, DeletionSummary
from lrclean.core.cleanup import CleanupOutcome, CleanupStatus
from lrclean.utils.formatting import (
    console,
    format_age,
    format_size,
    print_info,
    print_success,
    print_warning,
)

# Number of failure reasons repeated in one-line summaries
MAX_SUMMARY_ERRORS = 3


def create_backups_table(
    records: list[BackupRecord],
    title: str = "Lightroom Backups",
    today: date | None = None,
) -> Table:
    """Create a Rich table listing backups and their retention status.

    Args:
        records: Backups, newest first.
        title: Table title.
        today: Reference date for ages.

    Returns:
        Rich Table configured for backup display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Backup", no_wrap=True)
    table.add_column("Catalog", style="muted")
    table.add_column("Age", justify="right")
    table.add_column("Files", justify="right", style="muted")
    table.add_column("Size", justify="right", style="info")

    for record in records:
        if record.marked_for_deletion:
            status = "[delete]delete[/]"
            name = f"[delete]{record.folder_name}[/]"
        else:
            status = "[keep]keep[/]"
            name = f"[keep]{record.folder_name}[/]"
        table.add_row(
            status,
            name,
            record.catalog_stem,
            format_age(record.age_days(today)),
            str(record.file_count),
            format_size(record.total_size_bytes),
        )

    return table


def print_deletion_summary(summary: DeletionSummary) -> None:
    """Print the outcome of a deletion batch.

    Args:
        summary: Deletion outcome.
    """
    freed = format_size(summary.freed_bytes)
    if summary.dry_run:
        print_info(f"Dry-run: {summary.deleted_count} backup(s) would be deleted ({freed}).")
        return

    for error in summary.errors:
        print_warning(error)

    if summary.has_errors:
        console.print(
            f"\n[success]{summary.deleted_count} deleted[/success], "
            f"[error]{summary.failed_count} failed[/error] ({freed} freed)"
        )
    else:
        print_success(f"Deleted {summary.deleted_count} backup(s), freed {freed}.")


def format_cleanup_summary(outcome: CleanupOutcome) -> str:
    """Build the one-line summary of an unattended cleanup.

    The line is always produced, whatever the status, and lists the
    first few failure reasons when deletions failed.

    Args:
        outcome: Result of the cleanup.

    Returns:
        Plain-text summary line.
    """
    summary = outcome.summary
    if outcome.status == CleanupStatus.NO_CONTAINER:
        if outcome.container:
            return f"No cleanup: backup folder not found: {outcome.container}"
        return "No cleanup: no backup folder configured"

    if outcome.status == CleanupStatus.NOTHING_TO_DELETE:
        return f"Nothing to delete: {outcome.backup_count} backup(s) retained"

    prefix = "Dry-run: would delete" if summary.dry_run else "Deleted"
    line = (
        f"{prefix} {summary.deleted_count} of {len(outcome.selected)} backup(s), "
        f"freed {format_size(summary.freed_bytes)}"
    )
    if outcome.status == CleanupStatus.COMPLETED_WITH_ERRORS:
        reasons = "; ".join(summary.errors[:MAX_SUMMARY_ERRORS])
        more = summary.failed_count - MAX_SUMMARY_ERRORS
        if more > 0:
            reasons += f" (+{more} more)"
        line += f", {summary.failed_count} failed: {reasons}"
    return line
