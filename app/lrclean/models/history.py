"""History entry model for tracking cleanup runs.

This module defines data structures for recording backup and old
catalog deletions in a history file, giving an audit trail of what
was removed and what failed.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class HistoryActionType(str, Enum):
    """Type of action recorded in history.

    Attributes:
        CLEANUP: Interactive backup cleanup (``lrclean backups clean``).
        AUTO_CLEANUP: Unattended backup cleanup (``lrclean auto``).
        STALE_DELETE: Deletion of an old catalogs folder.
    """

    CLEANUP = "cleanup"
    AUTO_CLEANUP = "auto_cleanup"
    STALE_DELETE = "stale_delete"


@dataclass(frozen=True, slots=True)
class HistoryItem:
    """Single folder removed by an action.

    Attributes:
        path: Absolute path of the removed folder.
        size_bytes: Size recorded for the folder before removal.
    """

    path: str
    size_bytes: int = 0

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.path:
            msg = "History item path cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the history item.
        """
        return {"path": self.path, "size_bytes": self.size_bytes}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryItem":
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing item data.

        Returns:
            HistoryItem instance.

        Raises:
            KeyError: If required fields are missing.
        """
        return cls(path=data["path"], size_bytes=int(data.get("size_bytes", 0)))


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Record of a single cleanup run.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the run finished (ISO 8601 format with timezone).
        action_type: Type of run.
        items: Folders removed by the run (may be empty if all failed).
        success: Whether every deletion succeeded.
        errors: Failure messages, one per folder that could not be removed.
        metadata: Additional context (container, freed bytes, command).
    """

    id: str
    timestamp: str
    action_type: HistoryActionType
    items: tuple[HistoryItem, ...]
    success: bool = True
    errors: tuple[str, ...] = ()
    metadata: dict[str, Any] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.id:
            msg = "History entry ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)

    @property
    def freed_bytes(self) -> int:
        """Total recorded size of the removed folders."""
        return sum(item.size_bytes for item in self.items)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the history entry.
        """
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "action_type": self.action_type.value,
            "items": [item.to_dict() for item in self.items],
            "success": self.success,
            "errors": list(self.errors),
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing entry data.

        Returns:
            HistoryEntry instance.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If action_type or item data is invalid.
        """
        items = tuple(HistoryItem.from_dict(item) for item in data["items"])
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            action_type=HistoryActionType(data["action_type"]),
            items=items,
            success=data.get("success", True),
            errors=tuple(data.get("errors", ())),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Serialize to JSON line for JSONL storage.

        Returns:
            Single JSON line (no trailing newline).
        """
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> "HistoryEntry":
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        data = json.loads(line.strip())
        return cls.from_dict(data)


def create_history_entry(
    action_type: HistoryActionType,
    items: list[HistoryItem],
    errors: list[str] | tuple[str, ...] = (),
    metadata: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Factory function to create a new HistoryEntry.

    Automatically generates a unique ID and current timestamp. The entry
    is successful when no errors are given.

    Args:
        action_type: Type of run being recorded.
        items: Folders removed by the run.
        errors: Failure messages of the run.
        metadata: Optional additional context.

    Returns:
        New HistoryEntry with auto-generated ID and timestamp.
    """
    return HistoryEntry(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        action_type=action_type,
        items=tuple(items),
        success=not errors,
        errors=tuple(errors),
        metadata=metadata or {},
    )
