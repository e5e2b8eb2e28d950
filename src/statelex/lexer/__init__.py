"""State-function lexer engine for statelex.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, EOF
├── core.py              # Lexer class (mixin composition + driver + emit)
├── cursor.py            # Character cursor (next/peek/previous/ignore)
├── scanning.py          # Predicate-bounded scans (next_up_to/ignore_up_to)
├── channel.py           # Single-slot token channel
├── history.py           # Previous/current token record
└── runes.py             # UTF-8 decoding, EOF sentinel

Usage:
    >>> from statelex.lexer import Lexer
    >>> lexer = Lexer("E = m * c^2", lex_expression)
    >>> lexer.next_token()
    Token(IDENT, 'E')

"""

from statelex.lexer.core import Lexer
from statelex.lexer.runes import EOF

__all__ = ["EOF", "Lexer"]
