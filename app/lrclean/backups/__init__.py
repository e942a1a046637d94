"""Lightroom backup detection, inventory, retention and deletion.

This package provides backup folder matching, bounded filesystem
search, backup inventories, the retention policy engine, and deletion
of backup and old catalog folders.
"""

from lrclean.backups.detection import DetectionPhase, DetectionResult, locate_backup_containers
from lrclean.backups.executor import DeletionExecutor
from lrclean.backups.fs import FileStat, FileSystem, FsResult, LocalFileSystem
from lrclean.backups.matcher import is_backup_folder_name, match_backup_folder
from lrclean.backups.models import (
    BackupRecord,
    DeletionSummary,
    RetentionPolicy,
    ScanProgress,
    ScanResult,
    StaleCatalogsInfo,
)
from lrclean.backups.repository import BackupSetRepository
from lrclean.backups.retention import (
    RetentionPlan,
    apply_policy,
    mark_for_deletion,
    plan_retention,
    select_for_deletion,
    subtract_months,
)
from lrclean.backups.roots import CandidateRootEnumerator, PsutilVolumeProvider, Volume, VolumeKind
from lrclean.backups.scanner import DEFAULT_SKIP_NAMES, BoundedTreeScanner, CancellationToken
from lrclean.backups.sizer import DirectorySize, DirectorySizer
from lrclean.backups.stale import StaleCatalogFinder

__all__ = [
    "DEFAULT_SKIP_NAMES",
    "BackupRecord",
    "BackupSetRepository",
    "BoundedTreeScanner",
    "CancellationToken",
    "CandidateRootEnumerator",
    "DeletionExecutor",
    "DeletionSummary",
    "DetectionPhase",
    "DetectionResult",
    "DirectorySize",
    "DirectorySizer",
    "FileStat",
    "FileSystem",
    "FsResult",
    "LocalFileSystem",
    "PsutilVolumeProvider",
    "RetentionPlan",
    "RetentionPolicy",
    "ScanProgress",
    "ScanResult",
    "StaleCatalogFinder",
    "StaleCatalogsInfo",
    "Volume",
    "VolumeKind",
    "apply_policy",
    "is_backup_folder_name",
    "locate_backup_containers",
    "mark_for_deletion",
    "match_backup_folder",
    "plan_retention",
    "select_for_deletion",
    "subtract_months",
]
