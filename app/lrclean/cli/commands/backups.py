"""Backup listing and cleanup commands.

Provides commands to list the backups in the configured backup folder
with their retention status, and to delete the backups the retention
policy no longer requires.
"""

import json
from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from lrclean.backups.executor import DeletionExecutor
from lrclean.backups.models import BackupRecord, RetentionPolicy
from lrclean.backups.repository import BackupSetRepository
from lrclean.backups.retention import RetentionPlan, mark_for_deletion, plan_retention
from lrclean.backups.stale import STALE_AFTER_DAYS, StaleCatalogFinder
from lrclean.cli.display import create_backups_table, print_deletion_summary
from lrclean.cli.types import (
    OutputFormat,
    require_settings,
    resolve_container,
    resolve_policy,
    store_settings,
    update_settings,
)
from lrclean.core.errors import ContainerNotFoundError
from lrclean.core.state import record_deletions
from lrclean.models.history import HistoryActionType
from lrclean.utils.formatting import (
    console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="List and clean up Lightroom backups.",
    invoke_without_command=True,
    no_args_is_help=True,
)

FolderOption = Annotated[
    Path | None,
    typer.Option(
        "--folder",
        "-F",
        help="Backup folder to use instead of the configured one.",
    ),
]
KeepOption = Annotated[
    int | None,
    typer.Option(
        "--keep",
        "-k",
        help="Number of newest backups to always keep.",
    ),
]
MinAgeOption = Annotated[
    int | None,
    typer.Option(
        "--min-age",
        "-m",
        help="Minimum age in months before a backup may be deleted.",
    ),
]


@app.command("list")
def list_backups(
    folder: FolderOption = None,
    keep: KeepOption = None,
    min_age: MinAgeOption = None,
    save: Annotated[
        bool,
        typer.Option("--save", help="Store --keep/--min-age in the settings."),
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
    """List backups and show which ones the policy would delete."""
    settings = require_settings()
    container = resolve_container(folder, settings)
    policy = resolve_policy(settings, keep, min_age)

    if save:
        update_settings(
            settings,
            {
                "keep_count": policy.keep_count,
                "minimum_age_months": policy.minimum_age_months,
            },
        )
        store_settings(settings)

    inventory = _load_inventory(container)
    plan = plan_retention(inventory, policy)
    mark_for_deletion(inventory, plan)

    if output_format == OutputFormat.JSON:
        _print_json(inventory)
        return

    if not inventory:
        print_info(f"No backups found in {container}.")
        return

    console.print(create_backups_table(inventory))
    _print_policy_summary(inventory, plan, policy)
    _print_stale_hint(container)


@app.command()
def clean(
    folder: FolderOption = None,
    keep: KeepOption = None,
    min_age: MinAgeOption = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete backups that the retention policy no longer requires."""
    settings = require_settings()
    container = resolve_container(folder, settings)
    policy = resolve_policy(settings, keep, min_age)

    inventory = _load_inventory(container)
    plan = plan_retention(inventory, policy)
    mark_for_deletion(inventory, plan)
    selected = list(plan.to_delete)

    if not selected:
        print_info("No backups to delete.")
        return

    console.print(create_backups_table(selected, title="Planned Deletions"))

    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nDelete {len(selected)} backup(s) and free {format_size(plan.freed_bytes)}?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    summary = DeletionExecutor(dry_run=dry_run).delete(selected)
    print_deletion_summary(summary)

    try:
        entry = record_deletions(
            summary,
            {r.folder_path: r.total_size_bytes for r in selected},
            HistoryActionType.CLEANUP,
            metadata={"container": str(container), "command": "lrclean backups clean"},
        )
        if entry is not None:
            print_info("Cleanup recorded to history.")
    except (OSError, RuntimeError) as e:
        print_warning(f"Could not record to history: {e}")

    if summary.has_errors:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _load_inventory(container: Path) -> list[BackupRecord]:
    """Read the backup inventory or exit if the folder is missing."""
    try:
        return BackupSetRepository().inventory(container)
    except ContainerNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _print_policy_summary(
    inventory: list[BackupRecord],
    plan: RetentionPlan,
    policy: RetentionPolicy,
) -> None:
    """Print totals and what the policy would free."""
    total = sum(r.total_size_bytes for r in inventory)
    console.print(
        f"\n[dim]{len(inventory)} backup(s), {format_size(total)} total. "
        f"Policy: keep {policy.keep_count} newest, delete older than "
        f"{policy.minimum_age_months} month(s) (before {plan.cutoff.isoformat()}).[/dim]"
    )
    if plan.to_delete:
        console.print(
            f"[delete]{len(plan.to_delete)} backup(s) to delete[/] "
            f"([info]{format_size(plan.freed_bytes)}[/] to free)"
        )
    else:
        print_success("Nothing to delete.")


def _print_json(inventory: list[BackupRecord]) -> None:
    """Display the inventory as JSON."""
    today = date.today()
    data = [
        {
            "folder_name": r.folder_name,
            "folder_path": r.folder_path,
            "timestamp": r.timestamp.isoformat(),
            "primary_file": r.primary_file_path,
            "total_size_bytes": r.total_size_bytes,
            "file_count": r.file_count,
            "age_days": r.age_days(today),
            "marked_for_deletion": r.marked_for_deletion,
        }
        for r in inventory
    ]
    console.print_json(json.dumps(data))


def _print_stale_hint(container: Path) -> None:
    """Mention an old catalogs folder worth removing, if there is one."""
    info = StaleCatalogFinder().find(container)
    if info is None or not info.is_stale(STALE_AFTER_DAYS):
        return
    console.print(
        f"\n[stale]Old catalogs folder uses {format_size(info.total_size_bytes)}[/] "
        f"[dim]({info.folder_path}). Run 'lrclean stale --delete' to remove it.[/dim]"
    )
