"""A small arithmetic expression grammar with mutually recursive states.

Recognizes identifiers, decimal numbers, operators and parentheses, and
uses current_token() to tell a unary minus from a binary one.
"""

import sys
from enum import IntEnum

from statelex import EOF, Lexer, tokenize
from statelex.predicates import is_alnum, is_numeric, is_space, negate, one_of


class T(IntEnum):
    IDENT = 1
    NUMBER = 2
    OPERATOR = 3
    NEGATE = 4
    LPAREN = 5
    RPAREN = 6


OPERATORS = one_of("+-*/^=")


def lex_expression(lexer: Lexer):
    char = lexer.ignore_up_to(negate(is_space))
    if char == EOF:
        return None
    if char.isdecimal() or char == ".":
        return lex_number
    if char.isalpha() or char == "_":
        return lex_ident
    if char == "(":
        lexer.next()
        lexer.emit(T.LPAREN)
        return lex_expression
    if char == ")":
        lexer.next()
        lexer.emit(T.RPAREN)
        return lex_expression
    if OPERATORS(char):
        return lex_operator
    return lexer.errorf("unexpected %r at %s", char, lexer.location())


def lex_number(lexer: Lexer):
    lexer.next_up_to(negate(is_numeric))
    if lexer.pending.count(".") > 1:
        return lexer.errorf("malformed number %r", lexer.pending)
    lexer.emit(T.NUMBER)
    return lex_expression


def lex_ident(lexer: Lexer):
    lexer.next_up_to(negate(lambda c: is_alnum(c) or c == "_"))
    lexer.emit(T.IDENT)
    return lex_expression


def lex_operator(lexer: Lexer):
    char = lexer.next()
    if char == "-":
        last = lexer.current_token()
        if not last or last.type in (T.OPERATOR, T.NEGATE, T.LPAREN):
            lexer.emit(T.NEGATE)
            return lex_expression
    lexer.emit(T.OPERATOR)
    return lex_expression


if __name__ == "__main__":
    source = " ".join(sys.argv[1:]) or "E = m * c^2 - (-1.5)"
    for token in tokenize(source, lex_expression):
        name = "ERROR" if token.is_error else T(token.type).name
        print(f"{name:<9} {token.value!r}")
