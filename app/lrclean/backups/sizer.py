"""Directory size accounting.

Aggregates file size, file count and the oldest modification time of a
directory tree. Files that cannot be stat'ed are skipped.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from lrclean.backups.fs import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DirectorySize:
    """Aggregate figures for one directory tree.

    Attributes:
        total_bytes: Sum of all readable file sizes.
        file_count: Number of readable files.
        oldest_mtime: Oldest file modification time (POSIX), None if empty.
    """

    total_bytes: int = 0
    file_count: int = 0
    oldest_mtime: float | None = None


class DirectorySizer:
    """Computes aggregate size and file count of a folder tree.

    Args:
        fs: Filesystem to read from. Defaults to the local filesystem.
    """

    def __init__(self, fs: FileSystem | None = None) -> None:
        self._fs = fs or LocalFileSystem()

    def measure(self, path: Path) -> DirectorySize:
        """Measure a directory tree.

        A directory that cannot be listed measures as empty.

        Args:
            path: Root of the tree to measure.

        Returns:
            DirectorySize for the readable part of the tree.
        """
        listing = self._fs.walk_files(path)
        if not listing.success or listing.value is None:
            logger.debug("Cannot list %s: %s", path, listing.error)
            return DirectorySize()

        total = 0
        count = 0
        oldest: float | None = None
        for file_path in listing.value:
            result = self._fs.stat(file_path)
            if not result.success or result.value is None:
                logger.debug("Skipping unreadable file %s: %s", file_path, result.error)
                continue
            total += result.value.size_bytes
            count += 1
            if oldest is None or result.value.mtime < oldest:
                oldest = result.value.mtime

        return DirectorySize(total_bytes=total, file_count=count, oldest_mtime=oldest)
