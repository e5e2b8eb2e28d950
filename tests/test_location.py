"""Tests for SourceLocation."""

from __future__ import annotations

import pytest

from statelex.location import SourceLocation


class TestFromOffset:
    @pytest.mark.parametrize(
        ("data", "offset", "expected"),
        [
            (b"abc", 0, (1, 1)),
            (b"abc", 2, (1, 3)),
            (b"ab\ncd", 3, (2, 1)),
            (b"ab\ncd", 4, (2, 2)),
            (b"a\n\n\nb", 4, (4, 1)),
        ],
    )
    def test_line_and_column(self, data: bytes, offset: int, expected: tuple[int, int]) -> None:
        loc = SourceLocation.from_offset(data, offset)
        assert (loc.lineno, loc.col_offset) == expected
        assert loc.offset == offset

    def test_columns_count_characters(self) -> None:
        data = "héllo".encode()
        # "l" after the two-byte "é" sits at byte 3, character column 3
        assert SourceLocation.from_offset(data, 3).col_offset == 3

    def test_clamps_past_end(self) -> None:
        loc = SourceLocation.from_offset(b"ab", 99)
        assert loc.offset == 2
        assert str(loc) == "1:3"

    def test_clamps_negative(self) -> None:
        assert SourceLocation.from_offset(b"ab", -1).offset == 0


def test_unknown() -> None:
    loc = SourceLocation.unknown()
    assert str(loc) == "0:0"
