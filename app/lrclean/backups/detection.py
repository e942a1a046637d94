"""Two-phase backup location detection.

First searches the short list of conventional catalog locations with a
shallow depth. Only when that finds nothing does it fall back to a
deeper, still bounded, scan of every searchable volume.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from lrclean.backups.roots import CandidateRootEnumerator
from lrclean.backups.scanner import BoundedTreeScanner, CancellationToken, ProgressCallback

logger = logging.getLogger(__name__)

QUICK_SCAN_DEPTH = 2
DEEP_SCAN_DEPTH = 6


class DetectionPhase(str, Enum):
    """Which phase produced the detection result.

    Attributes:
        QUICK: Conventional catalog locations.
        DEEP: Full scan of every searchable volume.
    """

    QUICK = "quick"
    DEEP = "deep"


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """Backup containers found by detection.

    Attributes:
        containers: Container paths, sorted.
        catalogs: Catalog file paths seen along the way, sorted.
        phase: Last phase that ran.
        cancelled: True if the search was cancelled.
    """

    containers: tuple[str, ...]
    catalogs: tuple[str, ...]
    phase: DetectionPhase
    cancelled: bool = False


def locate_backup_containers(
    enumerator: CandidateRootEnumerator,
    scanner: BoundedTreeScanner,
    *,
    quick_depth: int = QUICK_SCAN_DEPTH,
    deep_depth: int = DEEP_SCAN_DEPTH,
    deep: bool = True,
    on_progress: ProgressCallback | None = None,
    cancel: CancellationToken | None = None,
) -> DetectionResult:
    """Search for Lightroom backup containers.

    Args:
        enumerator: Source of heuristic roots and volumes.
        scanner: Tree scanner used for both phases.
        quick_depth: Depth limit for conventional locations.
        deep_depth: Depth limit for the volume fallback.
        deep: If False, never fall back to the volume scan.
        on_progress: Optional progress callback.
        cancel: Optional cancellation token.

    Returns:
        DetectionResult with everything found.
    """
    cancel = cancel or CancellationToken()

    roots = enumerator.enumerate()
    logger.info("Quick scan of %d candidate location(s)", len(roots))
    quick = scanner.scan(roots, quick_depth, on_progress=on_progress, cancel=cancel)

    if quick.containers or quick.cancelled or not deep:
        return DetectionResult(
            containers=tuple(sorted(quick.containers)),
            catalogs=tuple(sorted(quick.catalogs)),
            phase=DetectionPhase.QUICK,
            cancelled=quick.cancelled,
        )

    volume_roots = [v.root for v in enumerator.searchable_volumes()]
    logger.info("Nothing found; deep scan of %d volume(s)", len(volume_roots))
    full = scanner.scan(volume_roots, deep_depth, on_progress=on_progress, cancel=cancel)
    merged = quick.merge(full)

    return DetectionResult(
        containers=tuple(sorted(merged.containers)),
        catalogs=tuple(sorted(merged.catalogs)),
        phase=DetectionPhase.DEEP,
        cancelled=merged.cancelled,
    )
