"""Bounded, cancellable search for Lightroom backup containers.

Walks one or more root directories depth-first looking for folders named
``Backups`` that hold dated Lightroom backup folders, and for catalog
files (``*.lrcat``) along the way. The walk is limited in depth, skips
well-known noisy subtrees without listing them, never follows directory
symlinks, and stops promptly when cancelled, keeping what it has found.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from lrclean.backups.fs import FileSystem, LocalFileSystem
from lrclean.backups.matcher import is_backup_folder_name
from lrclean.backups.models import ScanProgress, ScanResult

logger = logging.getLogger(__name__)

BACKUP_CONTAINER_NAME = "Backups"
CATALOG_EXTENSIONS: tuple[str, ...] = (".lrcat",)
BACKUP_EXTENSIONS: tuple[str, ...] = (".lrcat", ".zip")

# Directory names whose subtrees are never searched (compared lowercased).
DEFAULT_SKIP_NAMES: frozenset[str] = frozenset(
    name.lower()
    for name in (
        # Operating system
        "Windows",
        "Program Files",
        "Program Files (x86)",
        "ProgramData",
        "$Recycle.Bin",
        "System Volume Information",
        "AppData",
        "Library",
        "System",
        "proc",
        "sys",
        "dev",
        "usr",
        "bin",
        "sbin",
        "etc",
        "var",
        "boot",
        "snap",
        "lost+found",
        ".Trash",
        ".Trashes",
        ".Spotlight-V100",
        ".fseventsd",
        # Version control
        ".git",
        ".hg",
        ".svn",
        # Dependency and build caches
        "node_modules",
        "__pycache__",
        ".venv",
        "venv",
        ".tox",
        ".cache",
        ".npm",
        ".gradle",
        ".m2",
        ".cargo",
        ".rustup",
        # Cloud sync caches
        ".dropbox.cache",
        ".tmp.drivedownload",
        ".tmp.driveupload",
    )
)

ProgressCallback = Callable[[ScanProgress], None]


class CancellationToken:
    """Cooperative cancellation signal shared between a caller and a scan.

    Thread-safe: ``cancel()`` may be called from any thread (e.g. a
    signal handler) while the scan polls ``cancelled``.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Check if cancellation was requested."""
        return self._event.is_set()


@dataclass(slots=True)
class _ScanState:
    """Accumulator owned by a single root walk."""

    max_depth: int
    on_progress: ProgressCallback | None
    cancel: CancellationToken
    containers: set[str] = field(default_factory=set)
    catalogs: set[str] = field(default_factory=set)

    def to_result(self) -> ScanResult:
        return ScanResult(
            containers=frozenset(self.containers),
            catalogs=frozenset(self.catalogs),
            cancelled=self.cancel.cancelled,
        )


class BoundedTreeScanner:
    """Depth-limited recursive search for backup containers and catalogs.

    Args:
        fs: Filesystem to search. Defaults to the local filesystem.
        skip_names: Directory names (case-insensitive) never descended into.
        container_name: Name of a backup container folder.
        catalog_extensions: Extensions reported as catalog hits.
        backup_extensions: Extensions that make a dated folder a real backup.
    """

    def __init__(
        self,
        *,
        fs: FileSystem | None = None,
        skip_names: Iterable[str] = DEFAULT_SKIP_NAMES,
        container_name: str = BACKUP_CONTAINER_NAME,
        catalog_extensions: tuple[str, ...] = CATALOG_EXTENSIONS,
        backup_extensions: tuple[str, ...] = BACKUP_EXTENSIONS,
    ) -> None:
        self._fs = fs or LocalFileSystem()
        self._skip_names = frozenset(name.lower() for name in skip_names)
        self._container_name = container_name.lower()
        self._catalog_extensions = catalog_extensions
        self._backup_extensions = backup_extensions

    def is_skipped(self, path: Path) -> bool:
        """Check if a directory's name is in the skip set."""
        return path.name.lower() in self._skip_names

    def is_valid_container(self, path: Path) -> bool:
        """Check if a directory is a usable backup container.

        A container is valid when at least one immediate subdirectory is
        named like a backup timestamp and directly holds a backup file.

        Args:
            path: Directory to validate.

        Returns:
            True if the directory holds at least one real backup.
        """
        listing = self._fs.list_dirs(path)
        if not listing.success or listing.value is None:
            logger.debug("Cannot list container candidate %s: %s", path, listing.error)
            return False

        for subdir in listing.value:
            if not is_backup_folder_name(subdir.name):
                continue
            files = self._fs.list_files(subdir, self._backup_extensions)
            if files.success and files.value:
                return True
        return False

    def scan(
        self,
        roots: Iterable[Path],
        max_depth: int,
        on_progress: ProgressCallback | None = None,
        cancel: CancellationToken | None = None,
    ) -> ScanResult:
        """Scan roots one after another.

        Args:
            roots: Directories to search, each at depth 0.
            max_depth: Deepest level visited below a root.
            on_progress: Optional callback invoked for every visited directory.
            cancel: Optional cancellation token.

        Returns:
            ScanResult with everything found before completion or cancellation.
        """
        cancel = cancel or CancellationToken()
        result = ScanResult()
        for root in roots:
            if cancel.cancelled:
                break
            result = result.merge(self._scan_root(Path(root), max_depth, on_progress, cancel))
        return ScanResult(
            containers=result.containers,
            catalogs=result.catalogs,
            cancelled=cancel.cancelled,
        )

    def scan_in_parallel(
        self,
        roots: Iterable[Path],
        max_depth: int,
        on_progress: ProgressCallback | None = None,
        cancel: CancellationToken | None = None,
        max_workers: int = 4,
    ) -> ScanResult:
        """Scan roots concurrently, one worker per root.

        Each root accumulates into its own state; results are merged on
        the calling thread. ``on_progress`` may be called from several
        worker threads.

        Args:
            roots: Directories to search, each at depth 0.
            max_depth: Deepest level visited below a root.
            on_progress: Optional thread-safe progress callback.
            cancel: Optional cancellation token shared by all workers.
            max_workers: Maximum number of concurrent root walks.

        Returns:
            Merged ScanResult of all roots.
        """
        cancel = cancel or CancellationToken()
        root_list = [Path(r) for r in roots]
        result = ScanResult()
        if not root_list:
            return result

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lrclean-scan") as pool:
            futures = [
                pool.submit(self._scan_root, root, max_depth, on_progress, cancel)
                for root in root_list
            ]
            for future in futures:
                result = result.merge(future.result())

        return ScanResult(
            containers=result.containers,
            catalogs=result.catalogs,
            cancelled=cancel.cancelled,
        )

    def _scan_root(
        self,
        root: Path,
        max_depth: int,
        on_progress: ProgressCallback | None,
        cancel: CancellationToken,
    ) -> ScanResult:
        state = _ScanState(max_depth=max_depth, on_progress=on_progress, cancel=cancel)
        if not self._fs.is_dir(root):
            logger.debug("Skipping missing root %s", root)
            return state.to_result()
        self._visit(root, 0, state)
        return state.to_result()

    def _visit(self, path: Path, depth: int, state: _ScanState) -> None:
        if state.cancel.cancelled or depth > state.max_depth:
            return

        if self.is_skipped(path):
            return

        if state.on_progress is not None:
            state.on_progress(ScanProgress(current_path=str(path)))

        if path.name.lower() == self._container_name and self.is_valid_container(path):
            state.containers.add(str(path))
            logger.debug("Found backup container %s", path)
            if state.on_progress is not None:
                state.on_progress(ScanProgress(current_path=str(path), found_container=str(path)))
            return

        files = self._fs.list_files(path, self._catalog_extensions)
        if not files.success or files.value is None:
            logger.debug("Cannot list files in %s: %s", path, files.error)
            return

        if not is_backup_folder_name(path.name):
            for catalog in files.value:
                state.catalogs.add(str(catalog))
                if state.on_progress is not None:
                    state.on_progress(
                        ScanProgress(current_path=str(path), found_catalog=str(catalog))
                    )

        if depth >= state.max_depth:
            return

        subdirs = self._fs.list_dirs(path)
        if not subdirs.success or subdirs.value is None:
            logger.debug("Cannot list directories in %s: %s", path, subdirs.error)
            return

        for subdir in subdirs.value:
            if state.cancel.cancelled:
                return
            self._visit(subdir, depth + 1, state)
