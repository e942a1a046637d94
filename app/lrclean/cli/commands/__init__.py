"""CLI commands for lrclean.

This package contains all subcommand implementations.
"""

from lrclean.cli.commands import auto, backups, config, history, locate, stale

__all__ = ["auto", "backups", "config", "history", "locate", "stale"]
