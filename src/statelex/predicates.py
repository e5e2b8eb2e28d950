"""Reusable character predicates for bounded scans.

Every predicate built here returns False for ``EOF`` (the empty string),
so they compose safely with ``next_up_to`` / ``ignore_up_to`` and with
hand-written state functions.

Example:
    >>> from statelex.predicates import negate, is_numeric
    >>> lexer.next_up_to(negate(is_numeric))  # consume "3.14"

"""

from __future__ import annotations

from statelex.protocols import RunePredicate


def is_digit(char: str) -> bool:
    """Decimal digit, including non-ASCII decimal digits."""
    return char.isdecimal()


def is_numeric(char: str) -> bool:
    """Decimal digit or ``.``: the characters of a simple decimal literal."""
    return char == "." or char.isdecimal()


def is_space(char: str) -> bool:
    return char.isspace()


def is_alpha(char: str) -> bool:
    return char.isalpha()


def is_alnum(char: str) -> bool:
    return char.isalnum()


def one_of(chars: str) -> RunePredicate:
    """Match any single character in ``chars``."""
    members = frozenset(chars)

    def predicate(char: str) -> bool:
        return char in members

    return predicate


def none_of(chars: str) -> RunePredicate:
    """Match any character not in ``chars`` (never EOF)."""
    members = frozenset(chars)

    def predicate(char: str) -> bool:
        return bool(char) and char not in members

    return predicate


def negate(predicate: RunePredicate) -> RunePredicate:
    """Invert a predicate. EOF still does not match."""

    def negated(char: str) -> bool:
        return bool(char) and not predicate(char)

    return negated


def any_of(*predicates: RunePredicate) -> RunePredicate:
    """Match when at least one predicate matches."""

    def combined(char: str) -> bool:
        return any(p(char) for p in predicates)

    return combined


def all_of(*predicates: RunePredicate) -> RunePredicate:
    """Match when every predicate matches (never EOF)."""

    def combined(char: str) -> bool:
        return bool(char) and all(p(char) for p in predicates)

    return combined


__all__ = [
    "all_of",
    "any_of",
    "is_alnum",
    "is_alpha",
    "is_digit",
    "is_numeric",
    "is_space",
    "negate",
    "none_of",
    "one_of",
]
