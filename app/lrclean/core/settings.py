"""User settings and their persistence.

Settings hold the chosen backup folder, the retention policy and the
automatic cleanup schedule. They are stored in
~/.config/lrclean/settings.toml.
"""

import logging
import os
import tomllib
from datetime import datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lrclean.backups.models import RetentionPolicy
from lrclean.core.errors import SettingsError, SettingsParseError
from lrclean.core.paths import ensure_config_dir, get_settings_path

logger = logging.getLogger(__name__)

MAX_KEEP_COUNT = 50
MAX_MINIMUM_AGE_MONTHS = 24


class Settings(BaseModel):
    """Persisted lrclean settings.

    Attributes:
        backup_folder_path: Lightroom ``Backups`` folder to clean.
        catalog_name: Display name of the catalog owning the folder.
        keep_count: Newest backups that are always kept (1-50).
        minimum_age_months: Age before older backups may be deleted (0-24).
        auto_cleanup_enabled: Whether ``lrclean auto --if-due`` runs.
        auto_cleanup_hour: Hour of the day (0-23) automatic cleanup is due.
        last_auto_cleanup: When the last unattended cleanup ran.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    backup_folder_path: Annotated[
        str | None,
        Field(description="Lightroom backup folder"),
    ] = None
    catalog_name: Annotated[
        str | None,
        Field(description="Catalog display name"),
    ] = None
    keep_count: Annotated[
        int,
        Field(ge=1, le=MAX_KEEP_COUNT, description="Backups always kept (1-50)"),
    ] = 5
    minimum_age_months: Annotated[
        int,
        Field(ge=0, le=MAX_MINIMUM_AGE_MONTHS, description="Minimum age in months (0-24)"),
    ] = 1
    auto_cleanup_enabled: Annotated[
        bool,
        Field(description="Run unattended cleanup when due"),
    ] = False
    auto_cleanup_hour: Annotated[
        int,
        Field(ge=0, le=23, description="Hour of day for automatic cleanup (0-23)"),
    ] = 2
    last_auto_cleanup: Annotated[
        datetime | None,
        Field(description="Last unattended cleanup"),
    ] = None

    @property
    def policy(self) -> RetentionPolicy:
        """Retention policy described by these settings."""
        return RetentionPolicy(
            keep_count=self.keep_count,
            minimum_age_months=self.minimum_age_months,
        )

    def is_cleanup_due(self, now: datetime | None = None) -> bool:
        """Check whether an automatic cleanup should run now.

        Due when automatic cleanup is enabled, the configured hour has
        been reached and no unattended cleanup ran today yet.

        Args:
            now: Reference time. Defaults to the current local time.

        Returns:
            True if a cleanup is due.
        """
        now = now or datetime.now()
        if not self.auto_cleanup_enabled:
            return False
        if self.last_auto_cleanup is not None and self.last_auto_cleanup.date() == now.date():
            return False
        return now.hour >= self.auto_cleanup_hour


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    A missing file yields the default settings.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or the content is invalid.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    data = _settings_to_dict(settings)

    if path is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            raise SettingsError(f"Failed to write settings: {e}") from e

    tmp_path: Path | None = None
    try:
        if path is not None:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def _settings_to_dict(settings: Settings) -> dict[str, object]:
    """Convert Settings to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.

    Args:
        settings: The Settings to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    data = settings.model_dump(exclude_none=True)
    if settings.last_auto_cleanup is not None:
        # Local datetime at second precision keeps the file readable
        data["last_auto_cleanup"] = settings.last_auto_cleanup.replace(microsecond=0)
    return data
