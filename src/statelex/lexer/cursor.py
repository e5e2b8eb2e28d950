"""Character cursor mixin.

Owns stepping over the input one character at a time. Positions are UTF-8
byte offsets; ``_width`` remembers the byte width of the last decoded
character so ``previous()`` can undo exactly one forward step.

Contract:
    Only one width is remembered. ``previous()`` is valid immediately after
    a forward step (``next()`` or ``ignore()``). Two consecutive
    ``previous()`` calls leave the position undefined. With
    ``ScanConfig.strict_cursor`` the second call raises
    ``CursorContractError`` instead.

"""

from __future__ import annotations

from statelex.config import ScanConfig
from statelex.errors import CursorContractError
from statelex.lexer.runes import EOF, decode_rune


class CursorMixin:
    """Mixin providing forward/backward stepping and lookahead.

    All methods run on the driver thread.

    """

    # These will be set by the Lexer class
    _data: bytes
    _data_len: int
    _pos: int
    _width: int
    _start: int
    _can_step_back: bool
    _config: ScanConfig

    def next(self) -> str:
        """Consume and return the next character, advancing the position.

        Returns:
            The decoded character, or EOF at end of input (remembered
            width becomes 0).
        """
        self._can_step_back = True
        if self._pos >= self._data_len:
            self._width = 0
            return EOF
        char, width = decode_rune(self._data, self._pos)
        self._width = width
        self._pos += width
        return char

    def peek(self) -> str:
        """Return the next character without moving the position.

        Steps forward then back; the remembered width is restored afterwards,
        so a ``previous()`` after ``peek()`` still undoes the last ``next()``.
        """
        width = self._width
        can_step_back = self._can_step_back
        char = self.next()
        self.previous()
        self._width = width
        self._can_step_back = can_step_back
        return char

    def previous(self) -> str:
        """Step back by the last remembered width.

        Returns:
            The character now at the current position, or EOF when the
            position is at the end of input.

        Raises:
            CursorContractError: In strict mode, when there was no forward
                step since the last ``previous()``.
        """
        if not self._can_step_back and self._config.strict_cursor:
            raise CursorContractError(
                "previous() requires a preceding forward step", self._pos
            )
        self._can_step_back = False
        self._pos -= self._width
        if self._start > self._pos:
            self._start = self._pos
        if self._pos >= self._data_len:
            return EOF
        char, _ = decode_rune(self._data, self._pos)
        return char

    def ignore(self) -> str:
        """Consume the next character and drop it from the pending token."""
        char = self.next()
        self._start = self._pos
        return char
