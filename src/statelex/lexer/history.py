"""Lock-guarded record of the two most recently emitted tokens."""

from __future__ import annotations

import threading

from statelex.tokens import NO_TOKEN, Token


class TokenHistory:
    """The current and previous emitted tokens.

    Written by the driver on every emit and read by the consumer, so both
    slots are swapped under a lock. Both read as NO_TOKEN until enough
    tokens have been emitted.

    """

    __slots__ = ("_lock", "_current", "_previous")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = NO_TOKEN
        self._previous = NO_TOKEN

    def rotate(self, token: Token) -> None:
        """Record a newly emitted token: previous <- current <- token."""
        with self._lock:
            self._previous = self._current
            self._current = token

    @property
    def previous(self) -> Token:
        with self._lock:
            return self._previous

    @property
    def current(self) -> Token:
        with self._lock:
            return self._current

    def snapshot(self) -> tuple[Token, Token]:
        """Read (previous, current) atomically."""
        with self._lock:
            return self._previous, self._current
