"""Backup domain models.

This module defines the data structures passed between the scanner,
the inventory repository, the retention engine and the deletion
executor. None of them format user-facing text.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path


@dataclass(slots=True)
class BackupRecord:
    """One dated Lightroom backup folder inside a backup container.

    Records are created fresh on every inventory scan. Identity is the
    folder path; ``marked_for_deletion`` is owned by the retention
    engine and is recomputed whenever the policy changes.

    Attributes:
        folder_name: Raw directory name (``YYYY-MM-DD HHMM``).
        folder_path: Absolute path of the backup folder.
        timestamp: Backup time parsed from the folder name (local, naive).
        primary_file_name: Name of the backup payload (catalog or zip).
        primary_file_path: Absolute path of the backup payload.
        total_size_bytes: Sum of all file sizes in the folder tree.
        file_count: Number of files in the folder tree.
        marked_for_deletion: Whether the current policy selects this record.
    """

    folder_name: str
    folder_path: str
    timestamp: datetime
    primary_file_name: str
    primary_file_path: str
    total_size_bytes: int
    file_count: int
    marked_for_deletion: bool = False

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.folder_path:
            msg = "Folder path cannot be empty"
            raise ValueError(msg)
        if self.total_size_bytes < 0:
            msg = f"Size cannot be negative, got {self.total_size_bytes}"
            raise ValueError(msg)

    @property
    def catalog_stem(self) -> str:
        """Backup payload name without its extension."""
        return Path(self.primary_file_name).stem

    def age_days(self, today: date | None = None) -> int:
        """Number of whole days between the backup date and today."""
        today = today or date.today()
        return (today - self.timestamp.date()).days


@dataclass(frozen=True, slots=True)
class RetentionPolicy:
    """Retention parameters for backup cleanup.

    Attributes:
        keep_count: Number of newest backups that are always retained.
        minimum_age_months: Minimum age before an older backup may be deleted.
    """

    keep_count: int = 5
    minimum_age_months: int = 1

    def __post_init__(self) -> None:
        """Validate policy values after initialization."""
        if self.keep_count < 1:
            msg = f"keep_count must be at least 1, got {self.keep_count}"
            raise ValueError(msg)
        if self.minimum_age_months < 0:
            msg = f"minimum_age_months cannot be negative, got {self.minimum_age_months}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ScanProgress:
    """Transient progress event emitted by the tree scanner.

    Attributes:
        current_path: Directory being visited.
        found_container: Backup container discovered at this node, if any.
        found_catalog: Catalog file discovered at this node, if any.
    """

    current_path: str
    found_container: str | None = None
    found_catalog: str | None = None


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Accumulated discoveries of one scan invocation.

    Attributes:
        containers: Paths of valid backup containers.
        catalogs: Paths of catalog files found outside backup folders.
        cancelled: True if the scan stopped early on cancellation.
    """

    containers: frozenset[str] = field(default_factory=frozenset)
    catalogs: frozenset[str] = field(default_factory=frozenset)
    cancelled: bool = False

    def merge(self, other: "ScanResult") -> "ScanResult":
        """Combine two results; cancelled if either was cancelled."""
        return ScanResult(
            containers=self.containers | other.containers,
            catalogs=self.catalogs | other.catalogs,
            cancelled=self.cancelled or other.cancelled,
        )


@dataclass(frozen=True, slots=True)
class StaleCatalogsInfo:
    """Summary of an "Old Lightroom Catalogs" folder.

    Attributes:
        folder_path: Absolute path of the folder.
        total_size_bytes: Sum of all file sizes in the folder tree.
        file_count: Number of files in the folder tree.
        oldest_file_timestamp: Oldest file modification time (local, naive).
    """

    folder_path: str
    total_size_bytes: int
    file_count: int
    oldest_file_timestamp: datetime

    def age_days(self, now: datetime | None = None) -> int:
        """Whole days since the oldest file was last modified."""
        now = now or datetime.now()
        return max(0, (now - self.oldest_file_timestamp).days)

    def is_stale(self, threshold_days: int = 30, now: datetime | None = None) -> bool:
        """Check whether the folder is at least ``threshold_days`` old."""
        return self.age_days(now) >= threshold_days


@dataclass(frozen=True, slots=True)
class DeletionSummary:
    """Aggregated outcome of a deletion batch.

    Attributes:
        deleted_count: Records removed (or already gone).
        freed_bytes: Sum of the recorded sizes of those records.
        errors: One message per record that could not be deleted.
        deleted_paths: Folder paths counted as deleted.
        dry_run: Whether the batch was simulated.
    """

    deleted_count: int = 0
    freed_bytes: int = 0
    errors: tuple[str, ...] = ()
    deleted_paths: tuple[str, ...] = ()
    dry_run: bool = False

    @property
    def failed_count(self) -> int:
        """Number of records that could not be deleted."""
        return len(self.errors)

    @property
    def has_errors(self) -> bool:
        """Check if any deletion in the batch failed."""
        return bool(self.errors)
