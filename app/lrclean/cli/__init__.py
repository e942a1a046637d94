"""CLI package for lrclean.

This package contains the Typer application and all subcommands.
"""

from lrclean.cli.main import app

__all__ = ["app"]
