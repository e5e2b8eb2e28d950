"""ContextVar-based scan configuration for statelex.

Provides context-local configuration using Python's ContextVars (PEP 567).
A Lexer snapshots the active config when it is constructed; the driver
thread it starts does not inherit context variables, so the snapshot is
what the driver sees.

Usage:
    # Configure every lexer created in this context
    from statelex.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(trace=True)):
        lexer = Lexer(source, lex_text)

    # Or pass a config explicitly
    lexer = Lexer(source, lex_text, config=ScanConfig(max_transitions=10_000))

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        trace: Log every state transition at DEBUG level
        strict_cursor: Raise CursorContractError when previous() is called
            twice without a forward step in between
        max_transitions: Stop with an error token after this many state
            transitions (None disables the guard)
        daemon: Run the driver as a daemon thread
        thread_name: Prefix for driver thread names

    """

    trace: bool = False
    strict_cursor: bool = False
    max_transitions: int | None = None
    daemon: bool = True
    thread_name: str = "statelex-driver"

    def __post_init__(self) -> None:
        if self.max_transitions is not None and self.max_transitions < 1:
            raise ValueError(
                f"max_transitions must be positive, got {self.max_transitions}"
            )

    @classmethod
    def from_dict(cls, config_dict: dict) -> ScanConfig:
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ScanConfig.from_dict({"trace": True, "unknown_key": 1})
            >>> config.trace
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (context-local)."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to the default configuration."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with scan_config_context(ScanConfig(strict_cursor=True)):
        ...     lexer = Lexer("abc", lex_text)
        >>> # Automatically reset to previous config

    """
    token = _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.reset(token)


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "reset_scan_config",
    "scan_config_context",
    "set_scan_config",
]
