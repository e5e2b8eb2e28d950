"""State-function lexer driven on its own thread.

A grammar is a set of state functions. Each one receives the lexer, moves
the cursor, emits tokens, and returns the next state (or None to stop).
Construction starts a driver thread that runs the states; the consumer
reads tokens with ``next_token()`` from a one-slot channel.

Thread Safety:
Lexer instances are single-use. Create one per input.
Cursor state (position, width, start) belongs to the driver thread; the
consumer only uses ``next_token()``, ``previous_token()``, ``close()`` and
``join()``. The token history is the only state both threads touch and
is guarded by a lock.

"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterator
from types import TracebackType

from statelex.config import ScanConfig, get_scan_config
from statelex.errors import ScanCancelled, ScanExhausted, StateContractError
from statelex.lexer.channel import TokenChannel
from statelex.lexer.cursor import CursorMixin
from statelex.lexer.history import TokenHistory
from statelex.lexer.runes import decode_span
from statelex.lexer.scanning import ScanningMixin
from statelex.location import SourceLocation
from statelex.profiling import ScanAccumulator, get_scan_accumulator
from statelex.protocols import StateFn
from statelex.tokens import TOKEN_ERROR, Token, TokenType
from statelex.utils.logger import get_logger

logger = get_logger(__name__)

_driver_ids = itertools.count(1)


def _state_name(state: object) -> str:
    return getattr(state, "__qualname__", None) or repr(state)


class Lexer(
    # Cursor first: ScanningMixin only declares the stepping methods
    CursorMixin,
    ScanningMixin,
):
    """Lexical scanner running a chain of state functions.

    Usage:
        >>> def lex_word(lexer):
        ...     if lexer.ignore_up_to(str.isalpha) == EOF:
        ...         return None
        ...     lexer.next_up_to(lambda c: not c.isalpha())
        ...     lexer.emit(WORD)
        ...     return lex_word
        >>> lexer = Lexer("hello, world", lex_word)
        >>> [token.value for token in lexer]
        ['hello', 'world']

    Backpressure:
        ``emit`` blocks while the previous token has not been received, so
        the driver runs at most one token ahead of the consumer.

    """

    __slots__ = (
        "_source",
        "_data",
        "_data_len",  # Cached len(data)
        "_pos",
        "_width",
        "_start",
        "_can_step_back",
        "_config",
        "_accumulator",
        "_initial_state",
        "_channel",
        "_history",
        "_errored",
        "_failure",
        "_transitions",
        "_emitted",
        "_errors",
        "_thread",
    )

    def __init__(
        self,
        source: str | bytes,
        initial_state: StateFn,
        *,
        config: ScanConfig | None = None,
    ) -> None:
        """Create the lexer and start its driver thread.

        Args:
            source: Input text. ``str`` is encoded to UTF-8; ``bytes`` are
                scanned as-is.
            initial_state: First state function to run
            config: Scan configuration (defaults to the context's config)
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
        else:
            data = source.encode("utf-8", "surrogatepass")
        self._source = source
        self._data = data
        self._data_len = len(data)
        self._pos = 0
        self._width = 0
        self._start = 0
        self._can_step_back = False

        # The driver thread does not inherit context variables
        self._config = config if config is not None else get_scan_config()
        self._accumulator: ScanAccumulator | None = get_scan_accumulator()

        self._initial_state = initial_state
        self._channel = TokenChannel()
        self._history = TokenHistory()
        self._errored = False
        self._failure: BaseException | None = None

        # Driver statistics
        self._transitions = 0
        self._emitted = 0
        self._errors = 0

        self._thread = threading.Thread(
            target=self._run,
            name=f"{self._config.thread_name}-{next(_driver_ids)}",
            daemon=self._config.daemon,
        )
        self._thread.start()

    # =========================================================================
    # Driver
    # =========================================================================

    def _run(self) -> None:
        """Run state functions until one returns None."""
        config = self._config
        name = self._thread.name
        logger.debug("%s started (%d bytes)", name, self._data_len)

        state: StateFn | None = self._initial_state
        reason = "terminal state"
        try:
            while state is not None:
                limit = config.max_transitions
                if limit is not None and self._transitions >= limit:
                    logger.warning(
                        "%s exceeded %d transitions in %s",
                        name,
                        limit,
                        _state_name(state),
                    )
                    self._send_error(f"state machine exceeded {limit} transitions")
                    reason = "transition limit"
                    break

                if config.trace:
                    logger.debug(
                        "%s transition %d: %s at byte %d",
                        name,
                        self._transitions,
                        _state_name(state),
                        self._pos,
                    )
                self._transitions += 1
                current = state
                state = current(self)

                if self._errored:
                    if state is not None:
                        logger.warning(
                            "%s: %s returned %s after reporting an error; stopping",
                            name,
                            _state_name(current),
                            _state_name(state),
                        )
                    reason = "error"
                    break
        except ScanCancelled:
            reason = "cancelled"
        except Exception as exc:
            self._failure = exc
            reason = "state function raised"
            logger.exception("%s: state function raised at byte %d", name, self._pos)
            if not self._errored:
                try:
                    self._send_error(f"{type(exc).__name__}: {exc}")
                except ScanCancelled:
                    reason = "cancelled"
        finally:
            # Record before closing so a drained consumer sees complete metrics
            if self._accumulator is not None:
                self._accumulator.record_scan(
                    self._transitions, self._emitted, self._errors, self._data_len
                )
            self._channel.close()
            logger.debug(
                "%s stopped after %d transitions, %d tokens (%s)",
                name,
                self._transitions,
                self._emitted,
                reason,
            )

    def _send(self, token: Token) -> None:
        if self._errored:
            raise StateContractError(
                "cannot send a token after an error was reported", self._pos
            )
        self._channel.send(token)
        self._emitted += 1

    def _send_error(self, message: str) -> None:
        self._send(Token(TOKEN_ERROR, message, self._start, self._pos))
        self._errors += 1
        self._errored = True
        self._channel.close()

    # =========================================================================
    # Emitting (driver side)
    # =========================================================================

    def emit(self, token_type: TokenType) -> None:
        """Emit the pending span as a token of ``token_type``.

        Blocks while the consumer has not received the previous token.
        Starts a new pending span at the current position.

        Raises:
            StateContractError: An error was already reported by this scan.
        """
        token = Token(
            token_type,
            decode_span(self._data, self._start, self._pos),
            self._start,
            self._pos,
        )
        self._send(token)
        self._history.rotate(token)
        self._start = self._pos

    def errorf(self, format: str, *args: object) -> None:
        """Emit an error token and end the scan.

        The message is ``format % args`` (printf-style), or ``format`` as-is
        when no arguments are given. Always returns None so a state function
        can ``return lexer.errorf(...)``. The driver stops after the current
        state function returns, whatever it returns.
        """
        message = format % args if args else format
        self._send_error(message)
        return None

    # =========================================================================
    # Consuming
    # =========================================================================

    def next_token(self, timeout: float | None = None) -> Token:
        """Receive the next token in emission order.

        Args:
            timeout: Seconds to wait (None blocks until a token arrives)

        Raises:
            ScanTimeout: No token arrived within ``timeout``.
            ScanExhausted: The driver stopped and every token was received.
        """
        return self._channel.receive(timeout)

    def previous_token(self) -> Token:
        """The token emitted before the most recent one.

        Tracks the driver: it lags the latest *emitted* token by one, which
        can be one token ahead of what the consumer has received. Returns
        NO_TOKEN until at least two tokens were emitted.
        """
        return self._history.previous

    def current_token(self) -> Token:
        """The most recently emitted token (NO_TOKEN before the first emit).

        Mostly useful inside state functions, where it is the token just
        before the one being scanned.
        """
        return self._history.current

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens until the scan is exhausted."""
        while True:
            try:
                yield self._channel.receive()
            except ScanExhausted:
                return

    def close(self) -> None:
        """Cancel the scan from the consumer side.

        Discards an unread token and makes a blocked ``emit`` stop the
        driver. Safe to call more than once, and after the scan finished.
        """
        self._channel.cancel()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the driver thread. Returns True if it has stopped."""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def __enter__(self) -> Lexer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def input(self) -> str | bytes:
        """The input as given to the constructor."""
        return self._source

    @property
    def position(self) -> int:
        """Current byte offset. Driver-thread state."""
        return self._pos

    @property
    def width(self) -> int:
        """Byte width of the last decoded character. Driver-thread state."""
        return self._width

    @property
    def start(self) -> int:
        """Byte offset where the pending token starts. Driver-thread state."""
        return self._start

    @property
    def pending(self) -> str:
        """Text scanned since the last emit or ignore."""
        return decode_span(self._data, self._start, self._pos)

    @property
    def config(self) -> ScanConfig:
        return self._config

    @property
    def running(self) -> bool:
        """True while the driver thread is alive."""
        return self._thread.is_alive()

    @property
    def done(self) -> bool:
        return not self._thread.is_alive()

    @property
    def failure(self) -> BaseException | None:
        """Exception raised by a state function, if the scan died of one."""
        return self._failure

    def location(self, offset: int | None = None) -> SourceLocation:
        """Line and column of a byte offset (default: pending token start)."""
        return SourceLocation.from_offset(
            self._data, self._start if offset is None else offset
        )

    def __repr__(self) -> str:
        state = "running" if self.running else "done"
        return f"<Lexer {self._thread.name} {state} at byte {self._pos}/{self._data_len}>"
