"""Token and TokenType definitions for the statelex engine.

The engine produces a stream of Token objects for a consumer to read.
Each Token has a type and a value: the text matched by a state function,
or a message when the token reports a lexical error.

TokenType is a plain integer. Grammars define their own token types,
usually as an ``IntEnum``; the engine only reserves ``TOKEN_ERROR``.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final, TypeAlias

TokenType: TypeAlias = int

# Out-of-band type for error tokens; grammar token types must not use it.
TOKEN_ERROR: Final[TokenType] = -1


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the engine.

    Attributes:
        type: The token type (an int, or a member of a grammar's IntEnum)
        value: The matched text, or the message of an error token.
            ``None`` only for the absent token ``NO_TOKEN``.
        start: Byte offset where the token's span starts (-1 if unknown)
        end: Byte offset where the token's span ends (-1 if unknown)

    Offsets are excluded from comparison, so ``Token(T, "E")`` equals any
    emitted token of type ``T`` with value ``"E"``.

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    type: TokenType
    value: Any
    start: int = field(default=-1, compare=False)
    end: int = field(default=-1, compare=False)

    @property
    def is_error(self) -> bool:
        """True if this token carries a lexical error message."""
        return self.type == TOKEN_ERROR

    def __bool__(self) -> bool:
        return self != NO_TOKEN

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        if self.type == TOKEN_ERROR:
            name = "ERROR"
        else:
            name = getattr(self.type, "name", str(self.type))
        val = self.value
        if isinstance(val, str) and len(val) > 20:
            val = val[:17] + "..."
        return f"Token({name}, {val!r})"


# Zero value: what previous_token() reports before enough tokens were emitted.
NO_TOKEN: Final[Token] = Token(0, None)
