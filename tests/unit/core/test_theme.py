"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path

import pytest
from lrclean.core.theme import ThemeColors, _load_toml_colors, get_rich_theme, load_theme
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        colors = ThemeColors()
        assert colors.header == "#69B9A1"
        assert colors.delete == "#f53263"
        assert colors.keep == "#69B9A1"

    def test_short_hex_accepted(self) -> None:
        assert ThemeColors(stale="#abc").stale == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(text="#ff")

    def test_invalid_hex_chars(self) -> None:
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")


class TestLoadTheme:
    """Tests for theme file loading."""

    def test_missing_file(self, tmp_path: Path) -> None:
        assert _load_toml_colors(tmp_path / "theme.toml") is None
        assert load_theme(tmp_path / "theme.toml") == ThemeColors()

    def test_user_override(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\ndelete = "#ff0000"\n')

        colors = load_theme(path)

        assert colors.delete == "#ff0000"
        assert colors.keep == ThemeColors().keep

    def test_invalid_color_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\ndelete = "red"\n')

        assert load_theme(path) == ThemeColors()

    def test_invalid_toml_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")

        assert load_theme(path) == ThemeColors()


class TestGetRichTheme:
    """Tests for Rich theme generation."""

    def test_styles_present(self) -> None:
        theme = get_rich_theme(ThemeColors())

        assert isinstance(theme, Theme)
        for name in ("keep", "delete", "stale", "bold_header", "border", "muted"):
            assert name in theme.styles
