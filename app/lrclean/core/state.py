"""State management for cleanup history.

This module provides the StateManager class for persisting and querying
history entries in a JSONL file format.
"""

import json
import logging
from pathlib import Path

from lrclean.backups.models import DeletionSummary
from lrclean.core.paths import ensure_state_dir, get_history_path, get_state_dir
from lrclean.models.history import (
    HistoryActionType,
    HistoryEntry,
    HistoryItem,
    create_history_entry,
)

logger = logging.getLogger(__name__)


class StateManager:
    """Manages cleanup history in a JSONL file.

    Storage location: ~/.local/state/lrclean/history.jsonl

    Each line is a complete JSON object representing a HistoryEntry,
    which keeps writes append-only and parsing trivial.
    """

    def __init__(self, state_dir: Path | None = None) -> None:
        """Initialize StateManager.

        Args:
            state_dir: Optional override for state directory.
                      Default: ~/.local/state/lrclean
        """
        self._state_dir = state_dir if state_dir is not None else get_state_dir()
        self._history_path = (
            get_history_path() if state_dir is None else state_dir / get_history_path().name
        )

    @property
    def history_path(self) -> Path:
        """Path to history.jsonl file."""
        return self._history_path

    def record_action(self, entry: HistoryEntry) -> None:
        """Append an entry to the history file.

        Creates the file and parent directories if they don't exist.

        Args:
            entry: The history entry to record.

        Raises:
            RuntimeError: If the state directory cannot be created.
            OSError: If the file cannot be written.
        """
        if self._state_dir == get_state_dir():
            ensure_state_dir()
        else:
            self._state_dir.mkdir(parents=True, exist_ok=True)

        line = entry.to_json_line()

        with self.history_path.open(mode="a", encoding="utf-8") as f:
            f.write(line + "\n")
            f.flush()

    def get_history(self, limit: int | None = None) -> list[HistoryEntry]:
        """Read history entries, newest first.

        Corrupt lines are logged and skipped.

        Args:
            limit: Maximum number of entries to return.
                  If None, returns all entries.

        Returns:
            List of HistoryEntry, newest first.
            Returns empty list if file doesn't exist.
        """
        if not self.history_path.exists():
            return []

        entries: list[HistoryEntry] = []

        with self.history_path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                try:
                    entries.append(HistoryEntry.from_json_line(line))
                except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
                    logger.warning(
                        "Skipping corrupt history line %d: %s",
                        line_num,
                        str(e),
                    )
                    continue

        entries.reverse()

        if limit is not None:
            return entries[:limit]

        return entries


def record_deletions(
    summary: DeletionSummary,
    sizes: dict[str, int],
    action_type: HistoryActionType,
    metadata: dict[str, object] | None = None,
    state: StateManager | None = None,
) -> HistoryEntry | None:
    """Record a deletion batch to history.

    Dry runs and batches that neither deleted nor failed anything are
    not recorded.

    Args:
        summary: Outcome of the deletion batch.
        sizes: Recorded size per deleted folder path.
        action_type: Type of run being recorded.
        metadata: Additional context stored with the entry.
        state: StateManager to write to. Defaults to the standard location.

    Returns:
        The recorded entry, or None if nothing was recorded.
    """
    if summary.dry_run or (not summary.deleted_paths and not summary.errors):
        return None

    items = [HistoryItem(path=p, size_bytes=sizes.get(p, 0)) for p in summary.deleted_paths]
    entry = create_history_entry(
        action_type=action_type,
        items=items,
        errors=summary.errors,
        metadata=dict(metadata or {}),
    )
    (state or StateManager()).record_action(entry)
    return entry
