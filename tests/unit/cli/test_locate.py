"""Unit tests for locate command."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from lrclean.backups.detection import DetectionPhase, DetectionResult
from lrclean.cli.main import app
from lrclean.core.settings import load_settings
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def two_results() -> DetectionResult:
    return DetectionResult(
        containers=("/a/Backups", "/b/Backups"),
        catalogs=("/a/Cat.lrcat", "/b/Cat.lrcat"),
        phase=DetectionPhase.QUICK,
    )


class TestLocateCommand:
    """Tests for lrclean locate command."""

    def test_locate_in_path(self, tmp_path: Path, backup_container: Path) -> None:
        result = runner.invoke(app, ["locate", "--path", str(tmp_path)])

        assert result.exit_code == 0
        assert "Lightroom Backup Folders" in result.stdout
        assert "Family" in result.stdout
        assert "Found 1 backup folder(s)" in result.stdout

    def test_locate_json(self, tmp_path: Path, backup_container: Path) -> None:
        result = runner.invoke(app, ["locate", "-p", str(tmp_path), "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["containers"] == [str(backup_container)]
        assert data["catalogs"] == [str(backup_container.parent / "Family.lrcat")]
        assert data["cancelled"] is False

    def test_locate_depth_limits_search(self, tmp_path: Path, backup_container: Path) -> None:
        result = runner.invoke(app, ["locate", "-p", str(tmp_path), "-d", "0", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["containers"] == []

    def test_locate_save(self, tmp_path: Path, backup_container: Path) -> None:
        result = runner.invoke(app, ["locate", "-p", str(tmp_path), "--save"])

        assert result.exit_code == 0
        settings = load_settings()
        assert settings.backup_folder_path == str(backup_container)
        assert settings.catalog_name == "Family"

    def test_locate_nothing_found(self) -> None:
        found = DetectionResult(
            containers=(), catalogs=("/x/Orphan.lrcat",), phase=DetectionPhase.DEEP
        )
        with (
            patch("lrclean.cli.commands.locate.CandidateRootEnumerator"),
            patch("lrclean.cli.commands.locate.locate_backup_containers", return_value=found),
        ):
            result = runner.invoke(app, ["locate"])

        assert result.exit_code == 0
        assert "No Lightroom backup folders found" in result.stdout
        assert "1 catalog(s) found" in result.stdout

    def test_locate_no_deep_passed(self) -> None:
        found = DetectionResult(containers=(), catalogs=(), phase=DetectionPhase.QUICK)
        with (
            patch("lrclean.cli.commands.locate.CandidateRootEnumerator"),
            patch(
                "lrclean.cli.commands.locate.locate_backup_containers", return_value=found
            ) as mock_locate,
        ):
            runner.invoke(app, ["locate", "--no-deep"])

        assert mock_locate.call_args.kwargs["deep"] is False

    def test_save_requires_select_for_several(self, two_results: DetectionResult) -> None:
        with (
            patch("lrclean.cli.commands.locate.CandidateRootEnumerator"),
            patch("lrclean.cli.commands.locate.locate_backup_containers", return_value=two_results),
            patch("lrclean.cli.commands.locate._print_table"),
        ):
            result = runner.invoke(app, ["locate", "--save"])

        assert result.exit_code == 0
        assert "--select" in result.output
        assert load_settings().backup_folder_path is None

    def test_save_with_select(self, two_results: DetectionResult) -> None:
        with (
            patch("lrclean.cli.commands.locate.CandidateRootEnumerator"),
            patch("lrclean.cli.commands.locate.locate_backup_containers", return_value=two_results),
            patch("lrclean.cli.commands.locate._print_table"),
        ):
            result = runner.invoke(app, ["locate", "--save", "--select", "2"])

        assert result.exit_code == 0
        assert load_settings().backup_folder_path == "/b/Backups"

    def test_select_out_of_range(self, two_results: DetectionResult) -> None:
        with (
            patch("lrclean.cli.commands.locate.CandidateRootEnumerator"),
            patch("lrclean.cli.commands.locate.locate_backup_containers", return_value=two_results),
            patch("lrclean.cli.commands.locate._print_table"),
        ):
            result = runner.invoke(app, ["locate", "--save", "--select", "3"])

        assert result.exit_code == 1
        assert load_settings().backup_folder_path is None
