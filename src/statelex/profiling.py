"""Opt-in profiling for statelex scans.

Accumulates metrics across every Lexer created inside a profiled context:
- Number of scans started
- State transitions executed by drivers
- Tokens and error tokens emitted
- Bytes of input scanned

Zero overhead when disabled (get_scan_accumulator() returns None).

Example:
    from statelex import Lexer
    from statelex.profiling import profiled_scan

    with profiled_scan() as metrics:
        lexer = Lexer("E = m * c^2", lex_expression)
        tokens = list(lexer)

    print(metrics.summary())
    # {"total_ms": 0.4, "scans": 1, "transitions": 12, "tokens": 5, ...}

Thread Safety:
Drivers run on their own threads, so a Lexer captures the accumulator when
it is constructed and records into it from the driver thread. Recording is
guarded by a lock.

"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ScanAccumulator:
    """Accumulated metrics across profiled scans.

    Attributes:
        start_time: Profiling start timestamp.
        scans: Number of scans (Lexer instances) recorded.
        transitions: State transitions executed.
        tokens: Tokens emitted, including error tokens.
        errors: Error tokens emitted.
        bytes_scanned: Total input length of recorded scans.

    """

    start_time: float = field(default_factory=perf_counter)
    scans: int = 0
    transitions: int = 0
    tokens: int = 0
    errors: int = 0
    bytes_scanned: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def record_scan(self, transitions: int, tokens: int, errors: int, length: int) -> None:
        """Record a finished scan.

        Args:
            transitions: State transitions the driver executed.
            tokens: Tokens emitted, including error tokens.
            errors: Error tokens emitted.
            length: Input length in bytes.

        """
        with self._lock:
            self.scans += 1
            self.transitions += transitions
            self.tokens += tokens
            self.errors += errors
            self.bytes_scanned += length

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics."""
        with self._lock:
            return {
                "total_ms": round(self.total_duration_ms, 2),
                "scans": self.scans,
                "transitions": self.transitions,
                "tokens": self.tokens,
                "errors": self.errors,
                "bytes_scanned": self.bytes_scanned,
            }


_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Lexers constructed inside the block record into the yielded accumulator
    when their driver stops. Join or drain them before reading the summary.

    Yields:
        ScanAccumulator populated by scans started in the block.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
