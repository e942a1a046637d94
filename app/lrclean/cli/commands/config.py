"""Settings commands.

Provides commands to show and change the persisted lrclean settings.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from lrclean.backups.repository import BackupSetRepository
from lrclean.cli.types import (
    OutputFormat,
    require_settings,
    store_settings,
    update_settings,
)
from lrclean.core.paths import get_settings_path
from lrclean.core.settings import Settings
from lrclean.utils.formatting import console, print_info, print_success

app = typer.Typer(
    help="Show and change settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(
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
    """Show the current settings."""
    settings = require_settings()

    if output_format == OutputFormat.JSON:
        console.print_json(settings.model_dump_json())
        return

    _print_table(settings)


@app.command("set")
def set_(
    folder: Annotated[
        Path | None,
        typer.Option("--folder", "-F", help="Lightroom backup folder."),
    ] = None,
    keep: Annotated[
        int | None,
        typer.Option("--keep", "-k", help="Newest backups always kept (1-50)."),
    ] = None,
    min_age: Annotated[
        int | None,
        typer.Option("--min-age", "-m", help="Minimum age in months (0-24)."),
    ] = None,
    auto: Annotated[
        bool | None,
        typer.Option("--auto/--no-auto", help="Enable or disable automatic cleanup."),
    ] = None,
    hour: Annotated[
        int | None,
        typer.Option("--hour", help="Hour of day for automatic cleanup (0-23)."),
    ] = None,
) -> None:
    """Change one or more settings."""
    settings = require_settings()
    changes: dict[str, object] = {}

    if folder is not None:
        folder = folder.expanduser().resolve()
        changes["backup_folder_path"] = str(folder)
        changes["catalog_name"] = BackupSetRepository().catalog_name_for(folder)
    if keep is not None:
        changes["keep_count"] = keep
    if min_age is not None:
        changes["minimum_age_months"] = min_age
    if auto is not None:
        changes["auto_cleanup_enabled"] = auto
    if hour is not None:
        changes["auto_cleanup_hour"] = hour

    if not changes:
        print_info("Nothing to change. See 'lrclean config set --help'.")
        return

    update_settings(settings, changes)
    store_settings(settings)
    print_success(f"Updated {', '.join(sorted(changes))}.")


@app.command()
def path() -> None:
    """Print the settings file location."""
    console.print(str(get_settings_path()), highlight=False)


def _print_table(settings: Settings) -> None:
    """Display settings as a two-column table."""
    table = Table(
        title="lrclean Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    last_run = settings.last_auto_cleanup
    table.add_row("Backup folder", settings.backup_folder_path or "[muted]not set[/]")
    table.add_row("Catalog", settings.catalog_name or "[muted]-[/]")
    table.add_row("Keep newest", str(settings.keep_count))
    table.add_row("Minimum age", f"{settings.minimum_age_months} month(s)")
    table.add_row("Automatic cleanup", "on" if settings.auto_cleanup_enabled else "off")
    table.add_row("Cleanup hour", f"{settings.auto_cleanup_hour:02d}:00")
    table.add_row(
        "Last automatic cleanup",
        last_run.strftime("%Y-%m-%d %H:%M") if last_run else "[muted]never[/]",
    )
    console.print(table)
