"""Backup folder name matching.

Lightroom Classic names each backup folder after the moment the backup
was taken, e.g. ``2024-03-17 0930``. This module recognizes those names
and parses them into timestamps.
"""

import re
from datetime import datetime

# Exactly "YYYY-MM-DD HHMM": ASCII digits, one space, no colon in the time.
BACKUP_FOLDER_PATTERN = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2}) "
    r"(?P<hour>[0-9]{2})(?P<minute>[0-9]{2})"
)


def match_backup_folder(name: object) -> datetime | None:
    """Parse a backup folder name into its timestamp.

    The whole name must match the pattern, and every component must form
    a valid calendar date and 24-hour time. Anything else, including
    non-string input, yields None rather than an error.

    Args:
        name: Directory name to check.

    Returns:
        The backup timestamp (naive, minute precision), or None.
    """
    if not isinstance(name, str):
        return None

    match = BACKUP_FOLDER_PATTERN.fullmatch(name)
    if match is None:
        return None

    try:
        return datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
        )
    except ValueError:
        return None


def is_backup_folder_name(name: object) -> bool:
    """Check if a directory name is a valid backup timestamp folder."""
    return match_backup_folder(name) is not None
