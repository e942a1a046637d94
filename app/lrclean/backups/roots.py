"""Candidate search roots for backup detection.

Builds a short, ordered list of places where Lightroom catalogs are
commonly kept: the user's picture and document folders, the home
directory, and a few conventional folder names at the root of every
mounted volume. Only existence checks touch the disk.
"""

import logging
import os
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import psutil

logger = logging.getLogger(__name__)

# Folder names probed at the root of each volume.
VOLUME_CATALOG_DIRS: tuple[tuple[str, ...], ...] = (
    ("Lightroom",),
    ("Lightroom Catalog",),
    ("Lightroom Catalogs",),
    ("Adobe", "Lightroom"),
)

_NETWORK_FSTYPES: frozenset[str] = frozenset(
    {
        "nfs",
        "nfs4",
        "cifs",
        "smbfs",
        "smb3",
        "afpfs",
        "webdav",
        "davfs",
        "fuse.sshfs",
        "9p",
    }
)

# Kernel and virtual filesystems that never hold user data.
_PSEUDO_FSTYPES: frozenset[str] = frozenset(
    {
        "proc",
        "sysfs",
        "devtmpfs",
        "devpts",
        "tmpfs",
        "squashfs",
        "overlay",
        "autofs",
        "cgroup",
        "cgroup2",
        "debugfs",
        "tracefs",
        "securityfs",
        "pstore",
        "efivarfs",
        "bpf",
        "configfs",
        "fusectl",
        "mqueue",
        "hugetlbfs",
        "devfs",
    }
)

_REMOVABLE_MOUNT_PREFIXES: tuple[str, ...] = ("/media/", "/run/media/", "/Volumes/")

_XDG_LINE = re.compile(r'^(XDG_[A-Z]+_DIR)="?(.*?)"?$')


class VolumeKind(str, Enum):
    """Type of a mounted volume.

    Attributes:
        FIXED: Internal disk.
        REMOVABLE: USB stick, external drive or card.
        NETWORK: Network share (NFS, SMB, AFP, ...).
        OTHER: Anything not worth searching.
    """

    FIXED = "fixed"
    REMOVABLE = "removable"
    NETWORK = "network"
    OTHER = "other"


SEARCHABLE_KINDS: frozenset[VolumeKind] = frozenset(
    {VolumeKind.FIXED, VolumeKind.REMOVABLE, VolumeKind.NETWORK}
)


@dataclass(frozen=True, slots=True)
class Volume:
    """A mounted volume.

    Attributes:
        root: Mount point or drive root.
        kind: Volume type.
        ready: False when the volume has no medium or is not mounted.
    """

    root: Path
    kind: VolumeKind
    ready: bool = True


class VolumeProvider(ABC):
    """Supplies the list of mounted volumes."""

    @abstractmethod
    def volumes(self) -> list[Volume]:
        """Return all mounted volumes."""


def classify_partition(mountpoint: str, fstype: str, opts: str) -> VolumeKind:
    """Classify a partition by its filesystem type, options and mount point.

    Args:
        mountpoint: Where the partition is mounted.
        fstype: Filesystem type reported by the OS.
        opts: Comma-separated mount options.

    Returns:
        VolumeKind for the partition.
    """
    fstype = fstype.lower()
    if fstype in _PSEUDO_FSTYPES:
        return VolumeKind.OTHER
    if fstype in _NETWORK_FSTYPES or fstype.startswith("nfs"):
        return VolumeKind.NETWORK
    options = {o.strip().lower() for o in opts.split(",")}
    if "removable" in options or "cdrom" in options:
        return VolumeKind.REMOVABLE
    if mountpoint.startswith(_REMOVABLE_MOUNT_PREFIXES):
        return VolumeKind.REMOVABLE
    return VolumeKind.FIXED


class PsutilVolumeProvider(VolumeProvider):
    """Volume enumeration via ``psutil.disk_partitions``."""

    def volumes(self) -> list[Volume]:
        try:
            partitions = psutil.disk_partitions(all=False)
        except (OSError, RuntimeError) as e:
            logger.warning("Cannot enumerate volumes: %s", e)
            return []

        result: list[Volume] = []
        for part in partitions:
            kind = classify_partition(part.mountpoint, part.fstype, part.opts)
            # Empty drives (e.g. a card reader without a card) report no fstype
            ready = bool(part.fstype)
            result.append(Volume(root=Path(part.mountpoint), kind=kind, ready=ready))
        return result


def _read_xdg_user_dirs(home: Path) -> dict[str, Path]:
    """Parse ``~/.config/user-dirs.dirs`` into a key -> path mapping."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(home / ".config")
    user_dirs = Path(config_home) / "user-dirs.dirs"
    try:
        text = user_dirs.read_text(encoding="utf-8")
    except OSError:
        return {}

    result: dict[str, Path] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        match = _XDG_LINE.match(line)
        if match is None:
            continue
        value = match.group(2).replace("$HOME", str(home))
        if value:
            result[match.group(1)] = Path(value)
    return result


def default_special_dirs(home: Path) -> list[Path]:
    """Return the user's pictures and documents directories, in that order."""
    xdg = _read_xdg_user_dirs(home)
    return [
        xdg.get("XDG_PICTURES_DIR", home / "Pictures"),
        xdg.get("XDG_DOCUMENTS_DIR", home / "Documents"),
    ]


def _default_exists(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


class CandidateRootEnumerator:
    """Produces a bounded list of plausible Lightroom search roots.

    Args:
        volumes: Volume collaborator. Defaults to psutil.
        home: User home directory. Defaults to ``Path.home()``.
        special_dirs: Pictures/documents directories. Defaults to XDG lookup.
        path_exists: Existence check used to drop missing entries.
        include_volumes: If False, volume roots are not probed.
    """

    def __init__(
        self,
        *,
        volumes: VolumeProvider | None = None,
        home: Path | None = None,
        special_dirs: Iterable[Path] | None = None,
        path_exists: Callable[[Path], bool] | None = None,
        include_volumes: bool = True,
    ) -> None:
        self._volumes = volumes or PsutilVolumeProvider()
        self._home = home if home is not None else Path.home()
        self._special_dirs = (
            list(special_dirs) if special_dirs is not None else default_special_dirs(self._home)
        )
        self._exists = path_exists or _default_exists
        self._include_volumes = include_volumes

    def searchable_volumes(self) -> list[Volume]:
        """Return ready fixed, removable and network volumes."""
        return [v for v in self._volumes.volumes() if v.ready and v.kind in SEARCHABLE_KINDS]

    def enumerate(self) -> list[Path]:
        """Build the ordered, de-duplicated list of existing search roots.

        Returns:
            Existing directories to search, most specific first.
        """
        candidates: list[Path] = []

        for special in self._special_dirs:
            if str(special):
                candidates.append(special / "Lightroom")
                candidates.append(special)

        candidates.append(self._home / "Lightroom")
        candidates.append(self._home)

        if self._include_volumes:
            for volume in self.searchable_volumes():
                for parts in VOLUME_CATALOG_DIRS:
                    candidates.append(volume.root.joinpath(*parts))

        seen: set[str] = set()
        roots: list[Path] = []
        for candidate in candidates:
            key = str(candidate)
            if not key or key in seen:
                continue
            seen.add(key)
            if self._exists(candidate):
                roots.append(candidate)

        logger.debug("Candidate roots: %s", roots)
        return roots
