"""Exception classes for statelex.

Lexical errors are not exceptions: they travel to the consumer as tokens
of type ``TOKEN_ERROR``. The exceptions here cover consumer-side failures
(timeouts, exhausted scans) and broken engine contracts.
"""

from __future__ import annotations


class StatelexError(Exception):
    """Base exception for all statelex errors.

    Subclass this for specific error categories.
    """

    pass


class ScanExhausted(StatelexError):
    """The driver has stopped and every emitted token was consumed.

    Raised by ``Lexer.next_token()`` instead of blocking forever.
    """

    def __init__(self, message: str = "scan finished; no more tokens") -> None:
        super().__init__(message)


class ScanTimeout(StatelexError, TimeoutError):
    """No token arrived within the requested timeout."""

    def __init__(self, timeout: float) -> None:
        """Initialize timeout error.

        Args:
            timeout: The timeout that elapsed, in seconds
        """
        self.timeout = timeout
        super().__init__(f"no token received within {timeout:g}s")


class ScanCancelled(StatelexError):
    """The consumer closed the lexer while the driver was still running.

    Raised on the driver thread from a blocked ``emit``. The driver treats
    it as a stop signal; grammar code does not need to catch it.
    """

    pass


class StateContractError(StatelexError):
    """A state function broke one of the engine's contracts.

    Raised on the driver thread, for example when a state function emits
    after reporting an error.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        """Initialize contract error.

        Args:
            message: Description of the violation
            position: Cursor byte offset when it happened (optional)
        """
        self.message = message
        self.position = position
        location = f" (at byte {position})" if position is not None else ""
        super().__init__(f"{message}{location}")


class CursorContractError(StateContractError):
    """The cursor was stepped back without a preceding forward step.

    Only raised when ``ScanConfig.strict_cursor`` is set. Otherwise a
    second consecutive ``previous()`` is undefined behaviour.
    """

    pass
