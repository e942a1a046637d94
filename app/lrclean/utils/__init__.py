"""Utility modules for lrclean.

This module exports commonly used utility functions.
"""

from lrclean.utils.formatting import (
    console,
    err_console,
    format_age,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "format_age",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
