"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path

import pytest
from lrclean.backups.models import BackupRecord


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point XDG config and state directories into the test's tmp_path."""
    xdg_root = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_root / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(xdg_root / "state"))
    yield xdg_root


def make_backup(
    timestamp: datetime,
    parent: str = "/photos/Backups",
    size: int = 1024,
    file_count: int = 1,
) -> BackupRecord:
    """Create a BackupRecord for a folder named after ``timestamp``."""
    name = timestamp.strftime("%Y-%m-%d %H%M")
    return BackupRecord(
        folder_name=name,
        folder_path=f"{parent}/{name}",
        timestamp=timestamp,
        primary_file_name="Catalog.lrcat",
        primary_file_path=f"{parent}/{name}/Catalog.lrcat",
        total_size_bytes=size,
        file_count=file_count,
    )


@pytest.fixture
def backup_factory() -> Callable[..., BackupRecord]:
    """Factory for in-memory BackupRecord instances."""
    return make_backup


@pytest.fixture
def monthly_inventory() -> list[BackupRecord]:
    """Seven backups dated monthly from 2024-07 back to 2024-01, newest first."""
    return [make_backup(datetime(2024, month, 1, 9, 30)) for month in range(7, 0, -1)]


@pytest.fixture
def backup_container(tmp_path: Path) -> Path:
    """Create a real ``Backups`` folder with three dated backups on disk.

    Layout::

        Photos/
            Family.lrcat
            Backups/
                2024-01-01 0130/Family.lrcat   (10 bytes)
                2024-02-01 0130/Family.zip     (20 bytes)
                2024-03-01 0130/Family.lrcat   (30 bytes) + Family.lrcat-wal (5 bytes)
    """
    catalog_dir = tmp_path / "Photos"
    container = catalog_dir / "Backups"
    container.mkdir(parents=True)
    (catalog_dir / "Family.lrcat").write_bytes(b"x" * 100)

    for name, payload, size in (
        ("2024-01-01 0130", "Family.lrcat", 10),
        ("2024-02-01 0130", "Family.zip", 20),
        ("2024-03-01 0130", "Family.lrcat", 30),
    ):
        folder = container / name
        folder.mkdir()
        (folder / payload).write_bytes(b"x" * size)
    (container / "2024-03-01 0130" / "Family.lrcat-wal").write_bytes(b"x" * 5)
    return container
