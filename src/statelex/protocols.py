"""Protocols for statelex.

Defines the extension points a grammar author implements: state functions
and character predicates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from statelex.lexer.core import Lexer


class StateFn(Protocol):
    """A state of the scanning state machine.

    Called by the driver with the running lexer. The function inspects and
    advances the cursor, emits tokens, and returns the next state. Returning
    ``None`` stops the driver.

    Thread Safety:
        State functions run on the driver thread only. They may touch the
        cursor freely; the consumer never does.

    """

    def __call__(self, lexer: Lexer, /) -> StateFn | None: ...


class RunePredicate(Protocol):
    """A test over a single character, used to bound scans.

    The engine never passes ``EOF`` to a predicate from its scan helpers,
    but predicates used elsewhere should tolerate the empty string.
    """

    def __call__(self, char: str, /) -> bool: ...
