"""Exception hierarchy for lrclean.

Only conditions that make a whole operation impossible are raised;
per-folder problems are reported as data instead.
"""


class LrcleanError(Exception):
    """Base exception for lrclean errors."""


class ContainerNotFoundError(LrcleanError):
    """Raised when a backup container folder does not exist."""


class SettingsError(LrcleanError):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""
