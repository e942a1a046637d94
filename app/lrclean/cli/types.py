"""Shared types and helpers for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer
from pydantic import ValidationError

from lrclean.backups.models import RetentionPolicy
from lrclean.core.errors import SettingsError
from lrclean.core.settings import Settings, load_settings, save_settings
from lrclean.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def require_settings() -> Settings:
    """Load settings or exit with an error message.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    try:
        return load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def store_settings(settings: Settings) -> None:
    """Save settings or exit with an error message.

    Raises:
        typer.Exit: If the settings file cannot be written.
    """
    try:
        save_settings(settings)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def resolve_container(folder: Path | None, settings: Settings) -> Path:
    """Pick the backup folder from the command line or the settings.

    Args:
        folder: Folder given on the command line, if any.
        settings: Loaded settings.

    Returns:
        Backup folder path.

    Raises:
        typer.Exit: If no folder is given or configured.
    """
    if folder is not None:
        return folder.expanduser().absolute()
    if settings.backup_folder_path:
        return Path(settings.backup_folder_path)
    print_error("No backup folder configured. Run 'lrclean locate --save' or pass --folder.")
    raise typer.Exit(code=2)


def resolve_policy(
    settings: Settings,
    keep: int | None = None,
    min_age: int | None = None,
) -> RetentionPolicy:
    """Build a retention policy from settings with optional overrides.

    Raises:
        typer.Exit: If an override is out of range.
    """
    try:
        return RetentionPolicy(
            keep_count=keep if keep is not None else settings.keep_count,
            minimum_age_months=min_age if min_age is not None else settings.minimum_age_months,
        )
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def update_settings(settings: Settings, changes: dict[str, object]) -> None:
    """Apply field changes to settings or exit with an error message.

    Each assignment is validated by the settings model. Nothing is saved.

    Raises:
        typer.Exit: If a value is out of range for the settings.
    """
    try:
        for name, value in changes.items():
            setattr(settings, name, value)
    except ValidationError as e:
        print_error(_first_error(e))
        raise typer.Exit(code=1) from e


def _first_error(error: ValidationError) -> str:
    """Turn a pydantic validation error into a short message."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"Invalid value for {field}: {first['msg']}"
