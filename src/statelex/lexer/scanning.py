"""Predicate-bounded scanning mixin."""

from __future__ import annotations

from collections.abc import Callable

from statelex.lexer.runes import EOF
from statelex.protocols import RunePredicate


class ScanningMixin:
    """Mixin providing scans that run until a predicate matches.

    Both scans peek before every step, so the character that stopped the
    scan is left unconsumed.

    """

    def peek(self) -> str:
        """Implemented by CursorMixin."""
        raise NotImplementedError

    def next(self) -> str:
        """Implemented by CursorMixin."""
        raise NotImplementedError

    def ignore(self) -> str:
        """Implemented by CursorMixin."""
        raise NotImplementedError

    def next_up_to(self, predicate: RunePredicate) -> str:
        """Consume characters into the pending token until ``predicate`` holds.

        Returns:
            The character that stopped the scan, or EOF if the input ran
            out first.
        """
        return self._consume_up_to(predicate, self.next)

    def ignore_up_to(self, predicate: RunePredicate) -> str:
        """Skip characters until ``predicate`` holds, dropping them from the
        pending token.

        Returns:
            The character that stopped the scan, or EOF if the input ran
            out first.
        """
        return self._consume_up_to(predicate, self.ignore)

    def _consume_up_to(self, predicate: RunePredicate, step: Callable[[], str]) -> str:
        while True:
            char = self.peek()
            if char == EOF or predicate(char):
                return char
            step()
