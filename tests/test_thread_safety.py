"""Thread safety tests for concurrent lexers.

Every Lexer owns its cursor, channel and history, so many lexers scanning
at once, each read by its own consumer thread, must not interfere.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from enum import IntEnum

from statelex import EOF, Lexer, ScanConfig, scan_config_context, tokenize
from statelex.predicates import is_space, negate
from statelex.profiling import profiled_scan


class T(IntEnum):
    WORD = 1


def lex_words(lexer: Lexer):
    if lexer.ignore_up_to(negate(is_space)) == EOF:
        return None
    lexer.next_up_to(is_space)
    lexer.emit(T.WORD)
    return lex_words


def words(n: int) -> str:
    return " ".join(f"w{n}_{i}" for i in range(50))


class TestConcurrentLexers:
    def test_many_lexers_in_parallel(self) -> None:
        def scan(n: int) -> list[str]:
            return [token.value for token in tokenize(words(n), lex_words)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(scan, range(32)))

        for n, values in enumerate(results):
            assert values == words(n).split()

    def test_interleaved_consumers_on_one_thread(self) -> None:
        lexers = [Lexer(words(n), lex_words) for n in range(4)]
        seen: list[list[str]] = [[] for _ in lexers]
        for _ in range(50):
            for n, lexer in enumerate(lexers):
                seen[n].append(lexer.next_token(timeout=5).value)
        for n, lexer in enumerate(lexers):
            assert seen[n] == words(n).split()
            assert list(lexer) == []
            assert lexer.join(timeout=5)

    def test_config_isolated_per_thread(self) -> None:
        def scan(n: int) -> tuple[int, bool]:
            config = ScanConfig(strict_cursor=n % 2 == 0)
            with scan_config_context(config):
                lexer = Lexer(words(n), lex_words)
            list(lexer)
            return n, lexer.config.strict_cursor

        with ThreadPoolExecutor(max_workers=4) as pool:
            for n, strict in pool.map(scan, range(16)):
                assert strict == (n % 2 == 0)

    def test_profiling_accumulates_from_many_drivers(self) -> None:
        with profiled_scan() as acc:
            lexers = [Lexer(words(n), lex_words) for n in range(10)]
            with ThreadPoolExecutor(max_workers=5) as pool:
                counts = list(pool.map(lambda lexer: len(list(lexer)), lexers))
        assert counts == [50] * 10
        assert acc.scans == 10
        assert acc.tokens == 500
