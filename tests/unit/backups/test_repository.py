"""Unit tests for BackupSetRepository."""

import logging
from datetime import datetime
from pathlib import Path

import pytest
from lrclean.backups.fs import FsResult, LocalFileSystem
from lrclean.backups.repository import DEFAULT_CATALOG_NAME, BackupSetRepository
from lrclean.core.errors import ContainerNotFoundError, LrcleanError


class _UnlistableFileSystem(LocalFileSystem):
    def list_dirs(self, path: Path) -> FsResult[list[Path]]:
        return FsResult.fail("Permission denied")


class TestInventory:
    """Tests for BackupSetRepository.inventory."""

    def test_mixed_container(self, tmp_path: Path) -> None:
        """Only dated folders with a payload become records."""
        container = tmp_path / "Backups"
        first = container / "2024-01-01 0130"
        first.mkdir(parents=True)
        (first / "catalog.lrcat").write_bytes(b"x" * 40)
        (first / "catalog.lrcat-shm").write_bytes(b"x" * 2)
        (container / "not-a-date").mkdir()
        (container / "not-a-date" / "catalog.lrcat").write_bytes(b"x")
        (container / "2024-01-02 0200").mkdir()

        records = BackupSetRepository().inventory(container)

        assert len(records) == 1
        record = records[0]
        assert record.folder_name == "2024-01-01 0130"
        assert record.folder_path == str(first)
        assert record.timestamp == datetime(2024, 1, 1, 1, 30)
        assert record.primary_file_name == "catalog.lrcat"
        assert record.primary_file_path == str(first / "catalog.lrcat")
        assert record.file_count == 2
        assert record.total_size_bytes == 42
        assert record.marked_for_deletion is False

    def test_sorted_newest_first(self, backup_container: Path) -> None:
        records = BackupSetRepository().inventory(backup_container)

        assert [r.folder_name for r in records] == [
            "2024-03-01 0130",
            "2024-02-01 0130",
            "2024-01-01 0130",
        ]

    def test_sizes_include_all_files(self, backup_container: Path) -> None:
        records = BackupSetRepository().inventory(backup_container)

        assert [r.total_size_bytes for r in records] == [35, 20, 10]
        assert [r.file_count for r in records] == [2, 1, 1]

    def test_zip_payload(self, backup_container: Path) -> None:
        records = BackupSetRepository().inventory(backup_container)

        assert records[1].primary_file_name == "Family.zip"
        assert records[1].catalog_stem == "Family"

    def test_loose_files_in_container_ignored(self, backup_container: Path) -> None:
        (backup_container / "2024-04-01 0130.lrcat").write_text("x")

        records = BackupSetRepository().inventory(backup_container)

        assert len(records) == 3

    def test_empty_container(self, tmp_path: Path) -> None:
        assert BackupSetRepository().inventory(tmp_path) == []

    def test_missing_container_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ContainerNotFoundError, match="does not exist"):
            BackupSetRepository().inventory(tmp_path / "missing")

    def test_missing_container_error_is_lrclean_error(self, tmp_path: Path) -> None:
        with pytest.raises(LrcleanError):
            BackupSetRepository().inventory(tmp_path / "missing")

    def test_unlistable_container_yields_empty(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="lrclean.backups.repository")
        records = BackupSetRepository(fs=_UnlistableFileSystem()).inventory(tmp_path)

        assert records == []
        assert "Cannot read backup folder" in caplog.text

    def test_fresh_records_every_call(self, backup_container: Path) -> None:
        """Each inventory returns new record objects."""
        repository = BackupSetRepository()
        first = repository.inventory(backup_container)
        first[0].marked_for_deletion = True

        second = repository.inventory(backup_container)

        assert second[0].marked_for_deletion is False
        assert second[0] is not first[0]


class TestCatalogNameFor:
    """Tests for BackupSetRepository.catalog_name_for."""

    def test_uses_catalog_next_to_container(self, backup_container: Path) -> None:
        assert BackupSetRepository().catalog_name_for(backup_container) == "Family"

    def test_falls_back_to_parent_name(self, tmp_path: Path) -> None:
        container = tmp_path / "Wedding" / "Backups"
        container.mkdir(parents=True)

        assert BackupSetRepository().catalog_name_for(container) == "Wedding"

    def test_filesystem_root(self) -> None:
        assert BackupSetRepository().catalog_name_for(Path("/")) == DEFAULT_CATALOG_NAME
