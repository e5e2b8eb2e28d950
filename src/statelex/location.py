"""Source location tracking for error messages and debugging.

The cursor works in UTF-8 byte offsets. SourceLocation translates an
offset into the 1-indexed line and column a human expects, counting
columns in characters rather than bytes.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location of a byte offset.

    All positions are 1-indexed (lineno and col_offset start at 1).

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column in characters (1-indexed)
        offset: Absolute byte offset in the input

    Examples:
        >>> SourceLocation.from_offset(b"ab\\ncd", 4)
        SourceLocation(lineno=2, col_offset=2, offset=4)

    """

    lineno: int
    col_offset: int
    offset: int = 0

    def __str__(self) -> str:
        """Format location for error messages, like "10:5"."""
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(cls, data: bytes, offset: int) -> SourceLocation:
        """Resolve a byte offset in UTF-8 data to line and column.

        Offsets past the end are clamped to the end of the data.

        Args:
            data: UTF-8 encoded input
            offset: Byte offset to resolve

        Returns:
            SourceLocation for the offset
        """
        offset = max(0, min(offset, len(data)))
        line_start = data.rfind(b"\n", 0, offset) + 1
        lineno = data.count(b"\n", 0, offset) + 1
        # Count characters, not bytes: continuation bytes are 0b10xxxxxx
        segment = data[line_start:offset]
        chars = sum(1 for b in segment if b & 0xC0 != 0x80)
        return cls(lineno=lineno, col_offset=chars + 1, offset=offset)

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location."""
        return cls(lineno=0, col_offset=0)
