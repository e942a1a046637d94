"""Backup deletion executor.

Removes backup folders with dry-run support. Failures are isolated per
folder: one folder that cannot be removed never stops the batch.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from lrclean.backups.fs import FileSystem, LocalFileSystem
from lrclean.backups.models import BackupRecord, DeletionSummary

logger = logging.getLogger(__name__)


class DeletionExecutor:
    """Deletes backup folders and aggregates the outcome.

    Attributes:
        _dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(self, *, fs: FileSystem | None = None, dry_run: bool = False) -> None:
        """Initialize the DeletionExecutor.

        Args:
            fs: Filesystem to delete from. Defaults to the local filesystem.
            dry_run: If True, simulate deletions.
        """
        self._fs = fs or LocalFileSystem()
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Whether deletions are simulated."""
        return self._dry_run

    def delete(self, records: Iterable[BackupRecord]) -> DeletionSummary:
        """Delete the folders of the given backup records.

        A folder that no longer exists counts as deleted. Freed space is
        the size recorded at inventory time.

        Args:
            records: Backups to delete.

        Returns:
            DeletionSummary with counts, freed bytes and error messages.
        """
        deleted = 0
        freed = 0
        errors: list[str] = []
        deleted_paths: list[str] = []

        for record in records:
            error = self._delete_single(Path(record.folder_path))
            if error is not None:
                errors.append(f"Could not delete backup '{record.folder_name}': {error}")
                continue
            deleted += 1
            freed += record.total_size_bytes
            deleted_paths.append(record.folder_path)

        return DeletionSummary(
            deleted_count=deleted,
            freed_bytes=freed,
            errors=tuple(errors),
            deleted_paths=tuple(deleted_paths),
            dry_run=self._dry_run,
        )

    def delete_folder(self, path: Path, size_bytes: int = 0) -> DeletionSummary:
        """Delete a single folder outside of a backup inventory.

        Args:
            path: Folder to delete.
            size_bytes: Size to report as freed on success.

        Returns:
            DeletionSummary for the single folder.
        """
        error = self._delete_single(Path(path))
        if error is not None:
            return DeletionSummary(
                errors=(f"Could not delete '{Path(path).name}': {error}",),
                dry_run=self._dry_run,
            )
        return DeletionSummary(
            deleted_count=1,
            freed_bytes=size_bytes,
            deleted_paths=(str(path),),
            dry_run=self._dry_run,
        )

    def _delete_single(self, path: Path) -> str | None:
        """Delete one folder.

        Args:
            path: Folder to delete.

        Returns:
            None on success (including an already missing folder),
            otherwise the failure cause.
        """
        if not self._fs.exists(path):
            logger.info("Already removed: %s", path)
            return None

        if self._dry_run:
            logger.info("Dry-run: would delete %s", path)
            return None

        result = self._fs.delete_tree(path)
        if not result.success:
            logger.warning("Failed to delete %s: %s", path, result.error)
            return result.error or "unknown error"

        logger.info("Deleted %s", path)
        return None
