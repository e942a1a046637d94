"""Unattended cleanup orchestration.

Runs inventory, retention selection and deletion for one backup
container in a single call and reports a structured outcome. Used by
``lrclean auto`` and by schedulers that call it.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path

from lrclean.backups.executor import DeletionExecutor
from lrclean.backups.models import BackupRecord, DeletionSummary, RetentionPolicy
from lrclean.backups.repository import BackupSetRepository
from lrclean.backups.retention import select_for_deletion
from lrclean.core.errors import ContainerNotFoundError

logger = logging.getLogger(__name__)


class CleanupStatus(str, Enum):
    """Overall result of an unattended cleanup.

    Attributes:
        NO_CONTAINER: No backup folder configured, or it does not exist.
        NOTHING_TO_DELETE: The policy selected no backups.
        COMPLETED_WITH_ERRORS: Some selected backups could not be deleted.
        COMPLETED: Every selected backup was deleted.
    """

    NO_CONTAINER = "no_container"
    NOTHING_TO_DELETE = "nothing_to_delete"
    COMPLETED_WITH_ERRORS = "completed_with_errors"
    COMPLETED = "completed"

    @property
    def exit_code(self) -> int:
        """Process exit code for this status."""
        return _EXIT_CODES[self]


_EXIT_CODES: dict[CleanupStatus, int] = {
    CleanupStatus.NO_CONTAINER: 2,
    CleanupStatus.NOTHING_TO_DELETE: 0,
    CleanupStatus.COMPLETED_WITH_ERRORS: 1,
    CleanupStatus.COMPLETED: 0,
}


@dataclass(frozen=True, slots=True)
class CleanupOutcome:
    """Structured result of an unattended cleanup.

    Attributes:
        status: Overall result.
        container: Backup folder that was cleaned, if any.
        backup_count: Number of backups found in the folder.
        selected: Backups selected for deletion.
        summary: Deletion outcome (empty when nothing was deleted).
    """

    status: CleanupStatus
    container: str | None = None
    backup_count: int = 0
    selected: tuple[BackupRecord, ...] = ()
    summary: DeletionSummary = field(default_factory=DeletionSummary)

    @property
    def selected_sizes(self) -> dict[str, int]:
        """Recorded size per selected folder path."""
        return {r.folder_path: r.total_size_bytes for r in self.selected}


def run_unattended_cleanup(
    container: Path | str | None,
    policy: RetentionPolicy,
    *,
    repository: BackupSetRepository | None = None,
    executor: DeletionExecutor | None = None,
    today: date | None = None,
) -> CleanupOutcome:
    """Clean one backup container without user interaction.

    Args:
        container: Configured backup folder (None or empty if unset).
        policy: Retention parameters.
        repository: Inventory source. Defaults to the local filesystem.
        executor: Deletion executor. Defaults to a real (non dry-run) one.
        today: Reference date for the retention cutoff.

    Returns:
        CleanupOutcome describing what happened.
    """
    if not container:
        logger.info("No backup folder configured")
        return CleanupOutcome(status=CleanupStatus.NO_CONTAINER)

    repository = repository or BackupSetRepository()
    executor = executor or DeletionExecutor()
    container_path = Path(container)

    try:
        inventory = repository.inventory(container_path)
    except ContainerNotFoundError as e:
        logger.warning("%s", e)
        return CleanupOutcome(status=CleanupStatus.NO_CONTAINER, container=str(container_path))

    selected = select_for_deletion(inventory, policy, today)
    logger.info("Found %d backup(s), %d selected for deletion", len(inventory), len(selected))

    if not selected:
        return CleanupOutcome(
            status=CleanupStatus.NOTHING_TO_DELETE,
            container=str(container_path),
            backup_count=len(inventory),
        )

    summary = executor.delete(selected)
    status = CleanupStatus.COMPLETED_WITH_ERRORS if summary.has_errors else CleanupStatus.COMPLETED

    return CleanupOutcome(
        status=status,
        container=str(container_path),
        backup_count=len(inventory),
        selected=tuple(selected),
        summary=summary,
    )
