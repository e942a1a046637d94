"""Unit tests for formatting helpers."""

import pytest
from lrclean.utils.formatting import format_age, format_size


class TestFormatSize:
    """Tests for format_size."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (None, "0 B"),
            (0, "0 B"),
            (512, "512 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (5 * 1024**2, "5.0 MB"),
            (3 * 1024**3, "3.0 GB"),
            (2 * 1024**4, "2.0 TB"),
        ],
    )
    def test_format_size(self, size: int | None, expected: str) -> None:
        assert format_size(size) == expected


class TestFormatAge:
    """Tests for format_age."""

    @pytest.mark.parametrize(
        ("days", "expected"),
        [
            (-1, "today"),
            (0, "today"),
            (1, "yesterday"),
            (6, "6 days"),
            (7, "1 week"),
            (20, "2 weeks"),
            (30, "1 month"),
            (200, "6 months"),
            (365, "1 year"),
            (800, "2 years"),
        ],
    )
    def test_format_age(self, days: int, expected: str) -> None:
        assert format_age(days) == expected
