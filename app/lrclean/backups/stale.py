"""Detection of an "Old Lightroom Catalogs" folder.

When Lightroom upgrades a catalog it moves the previous version into a
folder called ``Old Lightroom Catalogs`` next to the catalog. Those
copies are rarely needed once the upgrade has settled, so this module
finds the folder near a backup container and summarizes it.
"""

import logging
from datetime import datetime
from pathlib import Path

from lrclean.backups.fs import FileSystem, LocalFileSystem
from lrclean.backups.models import StaleCatalogsInfo
from lrclean.backups.sizer import DirectorySizer

logger = logging.getLogger(__name__)

OLD_CATALOGS_FOLDER = "Old Lightroom Catalogs"
STALE_AFTER_DAYS = 30


class StaleCatalogFinder:
    """Finds and measures the old catalogs folder near a path.

    Args:
        fs: Filesystem to read from. Defaults to the local filesystem.
        folder_name: Name of the folder to look for.
        max_levels: Number of parent directories searched upwards.
    """

    def __init__(
        self,
        *,
        fs: FileSystem | None = None,
        folder_name: str = OLD_CATALOGS_FOLDER,
        max_levels: int = 3,
    ) -> None:
        self._fs = fs or LocalFileSystem()
        self._sizer = DirectorySizer(self._fs)
        self._folder_name = folder_name
        self._max_levels = max_levels

    def candidate_dirs(self, near_path: Path) -> list[Path]:
        """Return the parent directories searched, nearest first."""
        return list(Path(near_path).absolute().parents)[: self._max_levels]

    def find(self, near_path: Path) -> StaleCatalogsInfo | None:
        """Look for the old catalogs folder above ``near_path``.

        Args:
            near_path: Starting point, usually the backup container.

        Returns:
            StaleCatalogsInfo for the first non-empty match, or None.
        """
        near_path = Path(near_path).absolute()
        if not self._fs.exists(near_path):
            return None

        for parent in self.candidate_dirs(near_path):
            candidate = parent / self._folder_name
            if not self._fs.is_dir(candidate):
                continue
            info = self._analyze(candidate)
            if info is not None:
                return info
        return None

    def _analyze(self, folder: Path) -> StaleCatalogsInfo | None:
        size = self._sizer.measure(folder)
        if size.file_count == 0 or size.oldest_mtime is None:
            logger.debug("Old catalogs folder %s is empty", folder)
            return None
        return StaleCatalogsInfo(
            folder_path=str(folder),
            total_size_bytes=size.total_bytes,
            file_count=size.file_count,
            oldest_file_timestamp=datetime.fromtimestamp(size.oldest_mtime),
        )
