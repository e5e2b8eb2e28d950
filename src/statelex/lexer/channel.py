"""Single-slot token hand-off between the driver and the consumer.

The channel holds at most one token. ``send`` blocks while the slot is
occupied and ``receive`` blocks while it is empty, so the driver can run
at most one token ahead of the consumer.

Closing:
    ``close()`` (driver side) marks the end of the scan. A token already in
    the slot stays readable; after it is drained ``receive`` raises
    ScanExhausted. ``cancel()`` (consumer side) also discards the slot and
    makes a blocked ``send`` raise ScanCancelled.

"""

from __future__ import annotations

import threading

from statelex.errors import ScanCancelled, ScanExhausted, ScanTimeout, StateContractError
from statelex.tokens import Token


class TokenChannel:
    """Capacity-one, closable, FIFO token channel.

    Thread Safety:
        All state is guarded by one condition variable. One driver sends;
        any number of consumer threads may receive.

    """

    __slots__ = ("_cond", "_slot", "_closed", "_cancelled")

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._slot: Token | None = None
        self._closed = False
        self._cancelled = False

    def send(self, token: Token) -> None:
        """Put a token in the slot, waiting while it is occupied.

        Raises:
            ScanCancelled: The consumer cancelled the channel.
            StateContractError: The channel was already closed by the driver.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._slot is None or self._closed)
            if self._cancelled:
                raise ScanCancelled("lexer closed by consumer")
            if self._closed:
                raise StateContractError("token sent after the scan ended")
            self._slot = token
            self._cond.notify_all()

    def receive(self, timeout: float | None = None) -> Token:
        """Take the token from the slot, waiting while it is empty.

        Args:
            timeout: Seconds to wait; None waits until a token arrives or
                the channel closes.

        Raises:
            ScanTimeout: The timeout elapsed with the slot still empty.
            ScanExhausted: The channel is closed and drained.
        """
        with self._cond:
            ready = self._cond.wait_for(
                lambda: self._slot is not None or self._closed, timeout
            )
            if not ready:
                raise ScanTimeout(timeout if timeout is not None else 0.0)
            token = self._slot
            if token is None:
                raise ScanExhausted()
            self._slot = None
            self._cond.notify_all()
            return token

    def close(self) -> None:
        """Mark the end of the scan. Idempotent."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def cancel(self) -> None:
        """Close the channel and discard any token in the slot. Idempotent."""
        with self._cond:
            self._closed = True
            self._cancelled = True
            self._slot = None
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    @property
    def cancelled(self) -> bool:
        with self._cond:
            return self._cancelled

    @property
    def pending(self) -> bool:
        """True if a token is waiting in the slot."""
        with self._cond:
            return self._slot is not None
