"""Unit tests for XDG path management."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from lrclean.core.paths import (
    APP_NAME,
    ensure_config_dir,
    ensure_state_dir,
    get_config_dir,
    get_history_path,
    get_settings_path,
    get_state_dir,
    get_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_empty_variable_uses_default(self) -> None:
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}):
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME


class TestGetStateDir:
    """Tests for get_state_dir function."""

    def test_default_state_dir(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_STATE_HOME", None)

            result = get_state_dir()

        assert result == Path.home() / ".local" / "state" / APP_NAME

    def test_respects_xdg_state_home(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}):
            result = get_state_dir()

        assert result == tmp_path / APP_NAME


class TestFilePaths:
    """Tests for file path helpers."""

    def test_file_names(self, isolated_xdg: Path) -> None:
        assert get_settings_path() == isolated_xdg / "config" / APP_NAME / "settings.toml"
        assert get_theme_path() == isolated_xdg / "config" / APP_NAME / "theme.toml"
        assert get_history_path() == isolated_xdg / "state" / APP_NAME / "history.jsonl"


class TestEnsureDirs:
    """Tests for directory creation."""

    def test_ensure_creates_directories(self, isolated_xdg: Path) -> None:
        config_dir = ensure_config_dir()
        state_dir = ensure_state_dir()

        assert config_dir.is_dir()
        assert state_dir.is_dir()
        assert state_dir == isolated_xdg / "state" / APP_NAME

    def test_ensure_is_idempotent(self) -> None:
        assert ensure_config_dir() == ensure_config_dir()

    def test_permission_error_becomes_runtime_error(self) -> None:
        with (
            patch.object(Path, "mkdir", side_effect=PermissionError("denied")),
            pytest.raises(RuntimeError, match="Permission denied"),
        ):
            ensure_state_dir()
