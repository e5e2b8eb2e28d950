"""UTF-8 decoding helpers for the character cursor.

The cursor measures positions in UTF-8 bytes. These helpers decode one
character at a byte offset and report its width, so the cursor can step
forward and back by exactly one character.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Final

# End-of-input sentinel. Unequal to every decoded character, and falsy.
EOF: Final[str] = ""

# Returned for bytes that do not start a valid UTF-8 sequence.
RUNE_ERROR: Final[str] = "\ufffd"


def _sequence_length(lead: int) -> int:
    """Expected sequence length for a lead byte (0 if it cannot lead)."""
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def decode_rune(data: bytes, pos: int) -> tuple[str, int]:
    """Decode the character starting at ``pos``.

    Invalid or truncated sequences decode to ``RUNE_ERROR`` with width 1,
    so scanning resynchronises on the next byte. Surrogate code points
    (as produced by encoding a ``str`` with ``surrogatepass``) decode back
    to themselves.

    Args:
        data: UTF-8 encoded input
        pos: Byte offset, which must be within ``data``

    Returns:
        (character, width in bytes)
    """
    lead = data[pos]
    length = _sequence_length(lead)
    if length == 1:
        return chr(lead), 1
    if length == 0:
        return RUNE_ERROR, 1
    try:
        char = data[pos : pos + length].decode("utf-8", "surrogatepass")
    except UnicodeDecodeError:
        return RUNE_ERROR, 1
    return char, length


def decode_span(data: bytes, start: int, end: int) -> str:
    """Decode the text between two byte offsets.

    Spans holding invalid UTF-8 are decoded one character at a time with
    ``decode_rune``, so every invalid byte becomes its own ``RUNE_ERROR``
    and surrogates still decode to themselves, exactly as the cursor saw
    them.
    """
    try:
        return data[start:end].decode("utf-8", "surrogatepass")
    except UnicodeDecodeError:
        return "".join(_iter_runes(data, start, end))


def _iter_runes(data: bytes, start: int, end: int) -> Iterator[str]:
    pos = start
    while pos < end:
        char, width = decode_rune(data, pos)
        yield char
        pos += width
