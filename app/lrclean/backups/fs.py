"""Filesystem access with per-call error results.

Every operation the backup components perform against the disk goes
through a FileSystem. Calls never raise for OS errors; they return an
FsResult whose ``error`` describes what went wrong, so callers can treat
"this node failed, continue" as an explicit branch.
"""

import logging
import os
import shutil
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class FsResult(Generic[T]):
    """Outcome of a single filesystem call.

    Attributes:
        value: Returned value when the call succeeded.
        error: Error description when the call failed, None otherwise.
    """

    value: T | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if the call completed without an error."""
        return self.error is None

    @classmethod
    def ok(cls, value: T | None = None) -> "FsResult[T]":
        """Build a successful result."""
        return cls(value=value)

    @classmethod
    def fail(cls, error: str) -> "FsResult[T]":
        """Build a failed result."""
        return cls(error=error)


@dataclass(frozen=True, slots=True)
class FileStat:
    """Size and modification time of a single file.

    Attributes:
        size_bytes: File size in bytes.
        mtime: Modification time as a POSIX timestamp.
    """

    size_bytes: int
    mtime: float


def _describe(exc: OSError) -> str:
    """Render an OSError without the traceback noise."""
    if exc.strerror:
        return exc.strerror
    return str(exc) or exc.__class__.__name__


def _has_extension(name: str, extensions: Iterable[str] | None) -> bool:
    if extensions is None:
        return True
    lowered = name.lower()
    return any(lowered.endswith(ext.lower()) for ext in extensions)


class FileSystem(ABC):
    """Abstract filesystem used by scanners, sizers and deleters.

    Implementations must not raise for per-path failures such as
    permission errors or paths that vanished mid-scan.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Return True if the path exists (False on any error)."""

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Return True if the path is a directory (False on any error)."""

    @abstractmethod
    def list_dirs(self, path: Path) -> FsResult[list[Path]]:
        """List immediate subdirectories, sorted by name, symlinks excluded."""

    @abstractmethod
    def list_files(
        self, path: Path, extensions: Iterable[str] | None = None
    ) -> FsResult[list[Path]]:
        """List files directly inside a directory, sorted by name.

        Args:
            path: Directory to list.
            extensions: Optional case-insensitive suffix filter (e.g. ".lrcat").
        """

    @abstractmethod
    def walk_files(self, path: Path) -> FsResult[list[Path]]:
        """List every file in a directory tree without following symlinks."""

    @abstractmethod
    def stat(self, path: Path) -> FsResult[FileStat]:
        """Return size and modification time of a file."""

    @abstractmethod
    def delete_tree(self, path: Path) -> FsResult[None]:
        """Recursively delete a directory (or unlink a single file)."""

    def file_size(self, path: Path) -> FsResult[int]:
        """Return the size of a file in bytes."""
        result = self.stat(path)
        if not result.success or result.value is None:
            return FsResult.fail(result.error or "stat failed")
        return FsResult.ok(result.value.size_bytes)


class LocalFileSystem(FileSystem):
    """FileSystem backed by the local operating system."""

    def exists(self, path: Path) -> bool:
        try:
            return path.exists()
        except OSError:
            return False

    def is_dir(self, path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError:
            return False

    def list_dirs(self, path: Path) -> FsResult[list[Path]]:
        try:
            with os.scandir(path) as entries:
                dirs = [Path(e.path) for e in entries if e.is_dir(follow_symlinks=False)]
        except OSError as e:
            return FsResult.fail(_describe(e))
        return FsResult.ok(sorted(dirs, key=lambda p: p.name))

    def list_files(
        self, path: Path, extensions: Iterable[str] | None = None
    ) -> FsResult[list[Path]]:
        wanted = tuple(extensions) if extensions is not None else None
        try:
            with os.scandir(path) as entries:
                files = [
                    Path(e.path)
                    for e in entries
                    if e.is_file() and _has_extension(e.name, wanted)
                ]
        except OSError as e:
            return FsResult.fail(_describe(e))
        return FsResult.ok(sorted(files, key=lambda p: p.name))

    def walk_files(self, path: Path) -> FsResult[list[Path]]:
        if not self.is_dir(path):
            return FsResult.fail(f"Not a directory: {path}")

        def _on_error(exc: OSError) -> None:
            logger.debug("Skipping unreadable directory %s: %s", exc.filename, exc)

        files: list[Path] = []
        for dirpath, _dirnames, filenames in os.walk(path, onerror=_on_error):
            files.extend(Path(dirpath) / name for name in filenames)
        return FsResult.ok(sorted(files))

    def stat(self, path: Path) -> FsResult[FileStat]:
        try:
            st = path.lstat()
        except OSError as e:
            return FsResult.fail(_describe(e))
        return FsResult.ok(FileStat(size_bytes=st.st_size, mtime=st.st_mtime))

    def delete_tree(self, path: Path) -> FsResult[None]:
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            return FsResult.fail(_describe(e))
        return FsResult.ok()
