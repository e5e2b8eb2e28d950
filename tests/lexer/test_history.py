"""Tests for previous/current token history."""

from __future__ import annotations

import threading
from enum import IntEnum

from statelex import NO_TOKEN, Lexer, Token
from statelex.lexer.history import TokenHistory
from statelex.predicates import one_of


class T(IntEnum):
    ITEM = 1


TERMS = one_of("abc^2")


def lex_equation_terms(lexer: Lexer, record: list[Token]) -> None:
    """Emit the five terms of a^2 + b^2 = c^2, recording previous_token()."""
    stop = lambda c: not TERMS(c)  # noqa: E731
    for step in ("term", "op", "term", "op", "term"):
        if step == "term":
            lexer.next_up_to(stop)
        else:
            lexer.next()
        lexer.emit(T.ITEM)
        record.append(lexer.previous_token())
        lexer.ignore()


class TestTokenHistory:
    def test_starts_absent(self) -> None:
        history = TokenHistory()
        assert history.previous == NO_TOKEN
        assert history.current == NO_TOKEN

    def test_rotate(self) -> None:
        history = TokenHistory()
        history.rotate(Token(T.ITEM, "a"))
        assert history.snapshot() == (NO_TOKEN, Token(T.ITEM, "a"))
        history.rotate(Token(T.ITEM, "b"))
        assert history.snapshot() == (Token(T.ITEM, "a"), Token(T.ITEM, "b"))

    def test_snapshot_is_never_torn(self) -> None:
        """Readers always see two consecutive tokens."""
        history = TokenHistory()
        stop = threading.Event()
        torn: list[tuple[Token, Token]] = []

        def reader() -> None:
            while not stop.is_set():
                previous, current = history.snapshot()
                if current and previous and current.value != previous.value + 1:
                    torn.append((previous, current))

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for thread in readers:
            thread.start()
        for i in range(5000):
            history.rotate(Token(T.ITEM, i))
        stop.set()
        for thread in readers:
            thread.join(timeout=5)

        assert torn == []


class TestPreviousToken:
    """previous_token() lags the latest emit by one."""

    def test_absent_before_any_emit(self, drain) -> None:
        gate = threading.Event()

        def lex(lexer: Lexer):
            gate.wait(timeout=5)
            lexer.next()
            lexer.emit(T.ITEM)
            return None

        lexer = Lexer("x", lex)
        assert lexer.previous_token() == NO_TOKEN
        assert lexer.current_token() == NO_TOKEN
        gate.set()
        drain(lexer)

    def test_lags_by_one_inside_states(self, scan) -> None:
        record: list[Token] = []
        tokens, _ = scan("a^2 + b^2 = c^2", lambda lexer: lex_equation_terms(lexer, record))

        assert [t.value for t in tokens] == ["a^2", "+", "b^2", "=", "c^2"]
        assert record == [NO_TOKEN] + tokens[:-1]

    def test_after_third_emit_is_second_token(self, scan) -> None:
        record: list[Token] = []
        tokens, _ = scan("a^2 + b^2 = c^2", lambda lexer: lex_equation_terms(lexer, record))

        assert record[2] == tokens[1] == Token(T.ITEM, "+")
        assert record[2] != tokens[0]

    def test_after_scan_finished(self, scan) -> None:
        tokens, lexer = scan("a^2 + b^2 = c^2", lambda lexer: lex_equation_terms(lexer, []))

        assert lexer.previous_token() == Token(T.ITEM, "=")
        assert lexer.current_token() == Token(T.ITEM, "c^2")

    def test_consumer_view_in_lockstep(self) -> None:
        """With the driver paused after each emit, the consumer sees the
        previous token of the one it just received."""
        values = ["a^2", "+", "b^2", "=", "c^2"]
        emitted = [threading.Event() for _ in values]
        resume = [threading.Event() for _ in values]

        def lex(lexer: Lexer):
            for i, value in enumerate(values):
                lexer.ignore_up_to(lambda c: not c.isspace())
                lexer.next_up_to(str.isspace)
                lexer.emit(T.ITEM)
                emitted[i].set()
                resume[i].wait(timeout=5)
            return None

        lexer = Lexer("a^2 + b^2 = c^2", lex)
        assert lexer.previous_token() == NO_TOKEN
        for i, value in enumerate(values):
            assert lexer.next_token(timeout=5) == Token(T.ITEM, value)
            assert emitted[i].wait(timeout=5)
            expected = Token(T.ITEM, values[i - 1]) if i else NO_TOKEN
            assert lexer.previous_token() == expected
            resume[i].set()
        assert lexer.join(timeout=5)

    def test_errorf_does_not_rotate_history(self, scan) -> None:
        def body(lexer) -> None:
            lexer.next()
            lexer.emit(T.ITEM)
            lexer.errorf("bad")

        tokens, lexer = scan("ab", body)

        assert tokens[-1].is_error
        assert lexer.current_token() == Token(T.ITEM, "a")
        assert lexer.previous_token() == NO_TOKEN
