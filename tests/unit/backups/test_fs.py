"""Unit tests for the filesystem abstraction.

Tests the error-as-value contract of LocalFileSystem: calls return
FsResult failures instead of raising.
"""

import os
from pathlib import Path

from lrclean.backups.fs import FileStat, FsResult, LocalFileSystem


class TestFsResult:
    """Tests for FsResult."""

    def test_ok(self) -> None:
        result = FsResult.ok(42)
        assert result.success is True
        assert result.value == 42
        assert result.error is None

    def test_fail(self) -> None:
        result: FsResult[int] = FsResult.fail("Permission denied")
        assert result.success is False
        assert result.value is None
        assert result.error == "Permission denied"


class TestLocalFileSystemListing:
    """Tests for list_dirs and list_files."""

    def test_list_dirs_sorted(self, tmp_path: Path) -> None:
        """Subdirectories are returned sorted by name, files are left out."""
        for name in ("b", "a", "c"):
            (tmp_path / name).mkdir()
        (tmp_path / "file.txt").write_text("x")

        result = LocalFileSystem().list_dirs(tmp_path)

        assert result.success
        assert [p.name for p in result.value or []] == ["a", "b", "c"]

    def test_list_dirs_excludes_symlinks(self, tmp_path: Path) -> None:
        """Directory symlinks are not reported."""
        real = tmp_path / "real"
        real.mkdir()
        (tmp_path / "link").symlink_to(real, target_is_directory=True)

        result = LocalFileSystem().list_dirs(tmp_path)

        assert [p.name for p in result.value or []] == ["real"]

    def test_list_dirs_missing_directory(self, tmp_path: Path) -> None:
        """Listing a missing directory fails without raising."""
        result = LocalFileSystem().list_dirs(tmp_path / "missing")

        assert result.success is False
        assert result.error

    def test_list_files_extension_filter_is_case_insensitive(self, tmp_path: Path) -> None:
        """Extension filtering ignores case."""
        (tmp_path / "One.lrcat").write_text("x")
        (tmp_path / "Two.LRCAT").write_text("x")
        (tmp_path / "three.zip").write_text("x")
        (tmp_path / "notes.txt").write_text("x")
        (tmp_path / "dir.lrcat").mkdir()

        result = LocalFileSystem().list_files(tmp_path, (".lrcat",))

        assert [p.name for p in result.value or []] == ["One.lrcat", "Two.LRCAT"]

    def test_list_files_without_filter(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("x")
        (tmp_path / "b.zip").write_text("x")

        result = LocalFileSystem().list_files(tmp_path)

        assert [p.name for p in result.value or []] == ["a.txt", "b.zip"]


class TestLocalFileSystemWalkAndStat:
    """Tests for walk_files, stat and file_size."""

    def test_walk_files_recurses(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("x")
        (tmp_path / "sub" / "deep").mkdir(parents=True)
        (tmp_path / "sub" / "deep" / "b.txt").write_text("x")

        result = LocalFileSystem().walk_files(tmp_path)

        assert result.success
        assert {p.name for p in result.value or []} == {"a.txt", "b.txt"}

    def test_walk_files_not_a_directory(self, tmp_path: Path) -> None:
        result = LocalFileSystem().walk_files(tmp_path / "missing")
        assert result.success is False

    def test_stat_and_file_size(self, tmp_path: Path) -> None:
        target = tmp_path / "file.bin"
        target.write_bytes(b"x" * 123)
        os.utime(target, (1_700_000_000, 1_700_000_000))

        fs = LocalFileSystem()
        stat = fs.stat(target)
        size = fs.file_size(target)

        assert stat.value == FileStat(size_bytes=123, mtime=1_700_000_000)
        assert size.value == 123

    def test_file_size_missing(self, tmp_path: Path) -> None:
        result = LocalFileSystem().file_size(tmp_path / "missing")
        assert result.success is False


class TestLocalFileSystemDelete:
    """Tests for delete_tree, exists and is_dir."""

    def test_delete_tree_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "backup"
        (target / "nested").mkdir(parents=True)
        (target / "nested" / "file").write_text("x")

        fs = LocalFileSystem()
        result = fs.delete_tree(target)

        assert result.success
        assert fs.exists(target) is False

    def test_delete_tree_symlink_keeps_target(self, tmp_path: Path) -> None:
        """Deleting a symlink removes only the link."""
        real = tmp_path / "real"
        real.mkdir()
        (real / "keep.txt").write_text("x")
        link = tmp_path / "link"
        link.symlink_to(real, target_is_directory=True)

        result = LocalFileSystem().delete_tree(link)

        assert result.success
        assert not link.is_symlink()
        assert (real / "keep.txt").exists()

    def test_delete_tree_missing(self, tmp_path: Path) -> None:
        result = LocalFileSystem().delete_tree(tmp_path / "missing")
        assert result.success is False

    def test_is_dir(self, tmp_path: Path) -> None:
        (tmp_path / "file").write_text("x")
        fs = LocalFileSystem()
        assert fs.is_dir(tmp_path) is True
        assert fs.is_dir(tmp_path / "file") is False
        assert fs.is_dir(tmp_path / "missing") is False
