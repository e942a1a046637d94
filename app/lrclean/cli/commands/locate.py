"""Locate command implementation.

Searches the usual catalog locations, and if needed every mounted
volume, for Lightroom backup folders.
"""

import json
import signal
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from rich.status import Status
from rich.table import Table

from lrclean.backups.detection import (
    DEEP_SCAN_DEPTH,
    QUICK_SCAN_DEPTH,
    DetectionPhase,
    DetectionResult,
    locate_backup_containers,
)
from lrclean.backups.models import ScanProgress
from lrclean.backups.repository import BackupSetRepository
from lrclean.backups.roots import CandidateRootEnumerator
from lrclean.backups.scanner import BoundedTreeScanner, CancellationToken, ProgressCallback
from lrclean.cli.types import OutputFormat, require_settings, store_settings
from lrclean.core.errors import ContainerNotFoundError
from lrclean.utils.formatting import console, print_info, print_success, print_warning

app = typer.Typer(
    help="Find Lightroom backup folders.",
    invoke_without_command=True,
)

# Minimum seconds between two spinner updates
_PROGRESS_INTERVAL = 0.1


@app.callback(invoke_without_command=True)
def locate(
    ctx: typer.Context,
    paths: Annotated[
        list[Path] | None,
        typer.Option(
            "--path",
            "-p",
            help="Search only these directories (repeatable).",
        ),
    ] = None,
    depth: Annotated[
        int | None,
        typer.Option(
            "--depth",
            "-d",
            min=0,
            help="Maximum search depth below each root.",
        ),
    ] = None,
    deep: Annotated[
        bool,
        typer.Option(
            "--deep/--no-deep",
            help="Fall back to scanning all volumes when nothing is found.",
        ),
    ] = True,
    save: Annotated[
        bool,
        typer.Option(
            "--save",
            help="Store the found backup folder in the settings.",
        ),
    ] = False,
    select: Annotated[
        int | None,
        typer.Option(
            "--select",
            min=1,
            help="Which result to store when several are found (1-based).",
        ),
    ] = None,
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
    """Search for Lightroom backup folders.

    Examples:
        lrclean locate                     # Usual locations, then all volumes
        lrclean locate --no-deep           # Usual locations only
        lrclean locate -p /mnt/photos -d 4 # Search a specific tree
        lrclean locate --save --select 2   # Remember the second result
    """
    if ctx.invoked_subcommand is not None:
        return

    scanner = BoundedTreeScanner()
    cancel = CancellationToken()

    with _cancel_on_interrupt(cancel), console.status("Searching...") as status:
        on_progress = _spinner_progress(status)
        if paths:
            scan = scanner.scan(
                [p.expanduser() for p in paths],
                depth if depth is not None else DEEP_SCAN_DEPTH,
                on_progress=on_progress,
                cancel=cancel,
            )
            result = DetectionResult(
                containers=tuple(sorted(scan.containers)),
                catalogs=tuple(sorted(scan.catalogs)),
                phase=DetectionPhase.DEEP,
                cancelled=scan.cancelled,
            )
        else:
            result = locate_backup_containers(
                CandidateRootEnumerator(),
                scanner,
                quick_depth=depth if depth is not None else QUICK_SCAN_DEPTH,
                deep=deep,
                on_progress=on_progress,
                cancel=cancel,
            )

    if result.cancelled:
        print_warning("Search interrupted; showing partial results.")

    if output_format == OutputFormat.JSON:
        _print_json(result)
    elif not result.containers:
        print_info("No Lightroom backup folders found.")
        if result.catalogs:
            console.print(
                f"[dim]{len(result.catalogs)} catalog(s) found without a Backups folder.[/dim]"
            )
    else:
        _print_table(result)

    if save and result.containers:
        _save_selection(result, select)


def _spinner_progress(status: Status) -> ProgressCallback:
    """Build a progress callback that updates a spinner at most every 100 ms."""
    last_update = 0.0

    def on_progress(event: ScanProgress) -> None:
        nonlocal last_update
        now = time.monotonic()
        if event.found_container is None and now - last_update < _PROGRESS_INTERVAL:
            return
        last_update = now
        status.update(f"Searching [muted]{event.current_path}[/muted]")

    return on_progress


@contextmanager
def _cancel_on_interrupt(cancel: CancellationToken) -> Iterator[None]:
    """Turn Ctrl+C into a scan cancellation while the block runs."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handler(signum: int, frame: object) -> None:
        cancel.cancel()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _print_table(result: DetectionResult) -> None:
    """Display found backup folders with their catalog and backup count."""
    repository = BackupSetRepository()
    table = Table(
        title="Lightroom Backup Folders",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", width=3, justify="right")
    table.add_column("Catalog", style="bold")
    table.add_column("Backups", justify="right")
    table.add_column("Folder", style="muted")

    for index, container in enumerate(result.containers, start=1):
        try:
            count = str(len(repository.inventory(Path(container))))
        except ContainerNotFoundError:
            count = "-"
        table.add_row(
            str(index),
            repository.catalog_name_for(Path(container)),
            count,
            container,
        )

    console.print(table)
    console.print(
        f"\n[dim]Found {len(result.containers)} backup folder(s) "
        f"({result.phase.value} scan)[/dim]"
    )


def _print_json(result: DetectionResult) -> None:
    """Display detection results as JSON."""
    data = {
        "containers": list(result.containers),
        "catalogs": list(result.catalogs),
        "phase": result.phase.value,
        "cancelled": result.cancelled,
    }
    console.print_json(json.dumps(data))


def _save_selection(result: DetectionResult, select: int | None) -> None:
    """Store the chosen backup folder in the settings."""
    if select is None and len(result.containers) > 1:
        print_warning("Several backup folders found; use --select N to choose one.")
        return

    index = (select or 1) - 1
    if index >= len(result.containers):
        print_warning(f"--select {select} is out of range (found {len(result.containers)}).")
        raise typer.Exit(code=1)

    container = result.containers[index]
    settings = require_settings()
    settings.backup_folder_path = container
    settings.catalog_name = BackupSetRepository().catalog_name_for(Path(container))
    store_settings(settings)
    print_success(f"Backup folder set to {container}")
