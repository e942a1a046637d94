"""Unit tests for DeletionExecutor.

Tests real deletion, dry-run mode, already-removed folders and
per-folder failure isolation.
"""

import shutil
from pathlib import Path

from lrclean.backups.executor import DeletionExecutor
from lrclean.backups.fs import FsResult, LocalFileSystem
from lrclean.backups.models import BackupRecord
from lrclean.backups.repository import BackupSetRepository


class _StubbornFileSystem(LocalFileSystem):
    """LocalFileSystem that refuses to delete folders with given names."""

    def __init__(self, stubborn: set[str]) -> None:
        self.stubborn = stubborn

    def delete_tree(self, path: Path) -> FsResult[None]:
        if path.name in self.stubborn:
            return FsResult.fail("Device or resource busy")
        return super().delete_tree(path)


def _inventory(container: Path) -> list[BackupRecord]:
    return BackupSetRepository().inventory(container)


class TestDeletionExecutor:
    """Tests for DeletionExecutor.delete."""

    def test_deletes_folders(self, backup_container: Path) -> None:
        records = _inventory(backup_container)

        summary = DeletionExecutor().delete(records[1:])

        assert summary.deleted_count == 2
        assert summary.freed_bytes == 30
        assert summary.errors == ()
        assert summary.dry_run is False
        assert summary.deleted_paths == (records[1].folder_path, records[2].folder_path)
        assert [p.name for p in backup_container.iterdir()] == ["2024-03-01 0130"]

    def test_removed_out_of_band_counts_as_deleted(self, backup_container: Path) -> None:
        """A folder that vanished before deletion is a successful no-op."""
        records = _inventory(backup_container)
        shutil.rmtree(records[1].folder_path)

        summary = DeletionExecutor().delete(records)

        assert summary.deleted_count == 3
        assert summary.freed_bytes == sum(r.total_size_bytes for r in records)
        assert summary.errors == ()
        assert list(backup_container.iterdir()) == []

    def test_failure_is_isolated(self, backup_container: Path) -> None:
        """One failing folder does not stop the others."""
        records = _inventory(backup_container)
        executor = DeletionExecutor(fs=_StubbornFileSystem({"2024-02-01 0130"}))

        summary = executor.delete(records)

        assert summary.deleted_count == 2
        assert summary.failed_count == 1
        assert summary.has_errors is True
        assert summary.freed_bytes == records[0].total_size_bytes + records[2].total_size_bytes
        assert summary.errors == (
            "Could not delete backup '2024-02-01 0130': Device or resource busy",
        )
        assert [p.name for p in backup_container.iterdir()] == ["2024-02-01 0130"]

    def test_dry_run_deletes_nothing(self, backup_container: Path) -> None:
        records = _inventory(backup_container)

        executor = DeletionExecutor(dry_run=True)
        summary = executor.delete(records)

        assert executor.dry_run is True
        assert summary.dry_run is True
        assert summary.deleted_count == 3
        assert summary.freed_bytes == 65
        assert len(list(backup_container.iterdir())) == 3

    def test_empty_batch(self) -> None:
        summary = DeletionExecutor().delete([])

        assert summary.deleted_count == 0
        assert summary.freed_bytes == 0
        assert summary.has_errors is False


class TestDeleteFolder:
    """Tests for DeletionExecutor.delete_folder."""

    def test_delete_folder(self, tmp_path: Path) -> None:
        target = tmp_path / "Old Lightroom Catalogs"
        target.mkdir()
        (target / "Old.lrcat").write_text("x")

        summary = DeletionExecutor().delete_folder(target, size_bytes=500)

        assert summary.deleted_count == 1
        assert summary.freed_bytes == 500
        assert summary.deleted_paths == (str(target),)
        assert not target.exists()

    def test_delete_folder_failure(self, tmp_path: Path) -> None:
        target = tmp_path / "Old Lightroom Catalogs"
        target.mkdir()
        executor = DeletionExecutor(fs=_StubbornFileSystem({target.name}))

        summary = executor.delete_folder(target, size_bytes=500)

        assert summary.deleted_count == 0
        assert summary.freed_bytes == 0
        assert summary.errors == (
            "Could not delete 'Old Lightroom Catalogs': Device or resource busy",
        )
        assert target.exists()
