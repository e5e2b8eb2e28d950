"""Shared fixtures for statelex tests.

State functions run on the driver thread, so tests record what they see
into plain lists and read them after the driver has stopped.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from statelex import Lexer, Token

DRIVER_TIMEOUT = 5.0


def _drain(lexer: Lexer) -> list[Token]:
    tokens = list(lexer)
    assert lexer.join(timeout=DRIVER_TIMEOUT), "driver did not stop"
    return tokens


@pytest.fixture
def drain() -> Callable[[Lexer], list[Token]]:
    """Read every token from a lexer, then wait for its driver to stop."""
    return _drain


@pytest.fixture
def scan() -> Callable[..., tuple[list[Token], Lexer]]:
    """Run a one-shot state body over a source and collect its tokens.

    The body is wrapped in a state function that returns None after it.
    """

    def run(source: str | bytes, body: Callable[[Lexer], object], **kwargs):
        def state(lexer: Lexer):
            body(lexer)
            return None

        lexer = Lexer(source, state, **kwargs)
        return _drain(lexer), lexer

    return run
