"""Backup inventory for a single container folder.

Turns the dated subfolders of a Lightroom ``Backups`` folder into
BackupRecord entries, newest first.
"""

import logging
from pathlib import Path

from lrclean.backups.fs import FileSystem, LocalFileSystem
from lrclean.backups.matcher import match_backup_folder
from lrclean.backups.models import BackupRecord
from lrclean.backups.scanner import BACKUP_EXTENSIONS, CATALOG_EXTENSIONS
from lrclean.backups.sizer import DirectorySizer
from lrclean.core.errors import ContainerNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_NAME = "Lightroom Catalog"


class BackupSetRepository:
    """Builds the backup inventory of a container folder.

    Args:
        fs: Filesystem to read from. Defaults to the local filesystem.
        sizer: Directory sizer. Defaults to one on the same filesystem.
        backup_extensions: Extensions that identify a backup payload.
    """

    def __init__(
        self,
        *,
        fs: FileSystem | None = None,
        sizer: DirectorySizer | None = None,
        backup_extensions: tuple[str, ...] = BACKUP_EXTENSIONS,
    ) -> None:
        self._fs = fs or LocalFileSystem()
        self._sizer = sizer or DirectorySizer(self._fs)
        self._backup_extensions = backup_extensions

    def inventory(self, container: Path) -> list[BackupRecord]:
        """List the backups in a container, newest first.

        Subfolders whose names are not valid backup timestamps, or that
        hold no backup payload, are left out. Ties in timestamp are
        ordered by folder name.

        Args:
            container: Path of the backup container folder.

        Returns:
            BackupRecord list sorted newest first (possibly empty).

        Raises:
            ContainerNotFoundError: If the container does not exist.
        """
        container = Path(container)
        if not self._fs.is_dir(container):
            msg = f"Backup folder does not exist: {container}"
            raise ContainerNotFoundError(msg)

        listing = self._fs.list_dirs(container)
        if not listing.success or listing.value is None:
            logger.warning("Cannot read backup folder %s: %s", container, listing.error)
            return []

        records: list[BackupRecord] = []
        for folder in listing.value:
            timestamp = match_backup_folder(folder.name)
            if timestamp is None:
                continue

            payload = self._fs.list_files(folder, self._backup_extensions)
            if not payload.success or not payload.value:
                logger.debug("No backup payload in %s", folder)
                continue

            primary = payload.value[0]
            size = self._sizer.measure(folder)
            records.append(
                BackupRecord(
                    folder_name=folder.name,
                    folder_path=str(folder),
                    timestamp=timestamp,
                    primary_file_name=primary.name,
                    primary_file_path=str(primary),
                    total_size_bytes=size.total_bytes,
                    file_count=size.file_count,
                )
            )

        # Newest first; equal timestamps fall back to ascending folder name
        records.sort(key=lambda r: r.folder_name)
        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records

    def catalog_name_for(self, container: Path) -> str:
        """Derive a display name for the catalog owning a container.

        Uses the first ``.lrcat`` file next to the container, falling back
        to the parent folder's name.

        Args:
            container: Path of the backup container folder.

        Returns:
            Catalog name suitable for display.
        """
        parent = Path(container).parent
        if parent == Path(container):
            return DEFAULT_CATALOG_NAME

        catalogs = self._fs.list_files(parent, CATALOG_EXTENSIONS)
        if catalogs.success and catalogs.value:
            return catalogs.value[0].stem
        return parent.name or DEFAULT_CATALOG_NAME
