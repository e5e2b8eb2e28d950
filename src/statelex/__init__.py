"""
statelex — State-function lexical scanning for Python

Build lexical analyzers from plain functions. Each state function moves a
cursor over the input, emits tokens, and returns the next state. The
engine runs the states on a driver thread and hands tokens to the
consumer through a one-slot channel.

Quick Start:
    >>> from enum import IntEnum
    >>> from statelex import EOF, Lexer
    >>> from statelex.predicates import is_space, negate
    >>>
    >>> class T(IntEnum):
    ...     WORD = 1
    >>>
    >>> def lex_words(lexer):
    ...     if lexer.ignore_up_to(negate(is_space)) == EOF:
    ...         return None
    ...     lexer.next_up_to(is_space)
    ...     lexer.emit(T.WORD)
    ...     return lex_words
    >>>
    >>> [token.value for token in Lexer("hello  world", lex_words)]
    ['hello', 'world']

Errors are tokens: ``return lexer.errorf("unexpected %r", char)`` sends a
token of type ``TOKEN_ERROR`` and ends the scan.
"""

from collections.abc import Iterator

from statelex.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from statelex.errors import (
    CursorContractError,
    ScanCancelled,
    ScanExhausted,
    ScanTimeout,
    StateContractError,
    StatelexError,
)
from statelex.lexer import EOF, Lexer
from statelex.location import SourceLocation
from statelex.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from statelex.protocols import RunePredicate, StateFn
from statelex.tokens import NO_TOKEN, TOKEN_ERROR, Token, TokenType

__version__ = "0.1.0"


def tokenize(
    source: str | bytes,
    initial_state: StateFn,
    *,
    stop_on_error: bool = True,
    config: ScanConfig | None = None,
) -> Iterator[Token]:
    """Scan source and yield its tokens.

    Args:
        source: Input text
        initial_state: First state function
        stop_on_error: Stop after yielding the first error token. The scan
            ends at an error anyway; this only matters for grammars that
            report errors through their own token types.
        config: Scan configuration (defaults to the context's config)

    Yields:
        Tokens in emission order

    Example:
        >>> for token in tokenize("3.14", lex_number):
        ...     print(token)
        Token(NUMBER, '3.14')

    """
    with Lexer(source, initial_state, config=config) as lexer:
        for token in lexer:
            yield token
            if stop_on_error and token.is_error:
                return


__all__ = [
    # Engine
    "EOF",
    "Lexer",
    "tokenize",
    # Tokens
    "NO_TOKEN",
    "TOKEN_ERROR",
    "Token",
    "TokenType",
    # Extension points
    "RunePredicate",
    "StateFn",
    # Configuration
    "ScanConfig",
    "get_scan_config",
    "reset_scan_config",
    "scan_config_context",
    "set_scan_config",
    # Errors
    "CursorContractError",
    "ScanCancelled",
    "ScanExhausted",
    "ScanTimeout",
    "StateContractError",
    "StatelexError",
    # Location
    "SourceLocation",
    # Profiling
    "ScanAccumulator",
    "get_scan_accumulator",
    "profiled_scan",
    # Version
    "__version__",
]
