"""Data models for lrclean.

This module exports the history models shared by the CLI and the
state manager.
"""

from lrclean.models.history import (
    HistoryActionType,
    HistoryEntry,
    HistoryItem,
    create_history_entry,
)

__all__ = [
    "HistoryActionType",
    "HistoryEntry",
    "HistoryItem",
    "create_history_entry",
]
