"""Split words with a single state function and one token type."""

from enum import IntEnum

from statelex import EOF, Lexer
from statelex.predicates import is_space, negate


class T(IntEnum):
    WORD = 1


def lex_words(lexer):
    if lexer.ignore_up_to(negate(is_space)) == EOF:
        return None
    lexer.next_up_to(is_space)
    lexer.emit(T.WORD)
    return lex_words


for token in Lexer("the quick  brown\tfox", lex_words):
    print(token)
