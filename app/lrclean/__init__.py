"""lrclean - Lightroom Classic catalog backup cleanup.

Finds the dated backup folders Lightroom writes next to a catalog,
applies a retention policy, and deletes what is no longer needed.
"""

__version__ = "0.3.0"
