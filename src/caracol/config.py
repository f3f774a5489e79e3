"""ContextVar-based rewrite configuration for Caracol.

Provides thread-local configuration using Python's ContextVars (PEP 567).
An Automaton captures the active config when it is created and keeps
using it for the whole run, even when iteration continues outside the
context; the case Arm state reads the terminator it inserts in front of
a premature esac.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from caracol import rewrite
    from caracol.config import RewriteConfig, rewrite_config_context

    with rewrite_config_context(RewriteConfig(arm_terminator=b";;\\n")):
        fixed = rewrite(script)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RewriteConfig:
    """Immutable rewrite configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        arm_terminator: Literal inserted before an esac that closes an arm
            lacking its ;; terminator
        strict_eof: Raise UnterminatedConstructError when input ends inside
            an open construct instead of logging a warning
        max_depth: Maximum number of states on the automaton stack
        chunk_size: Default read size used by scan() and rewrite() when the
            caller does not pass one

    """

    arm_terminator: bytes = b";; "
    strict_eof: bool = False
    max_depth: int = 1024
    chunk_size: int = 4096

    def __post_init__(self) -> None:
        """Encode a str arm_terminator and reject other non-bytes values."""
        terminator = self.arm_terminator
        if isinstance(terminator, str):
            object.__setattr__(self, "arm_terminator", terminator.encode("utf-8"))
        elif isinstance(terminator, (bytearray, memoryview)):
            object.__setattr__(self, "arm_terminator", bytes(terminator))
        elif not isinstance(terminator, bytes):
            raise TypeError(
                f"arm_terminator must be bytes or str, got {type(terminator).__name__}"
            )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "RewriteConfig":
        """Create RewriteConfig from dictionary.

        Only includes keys that are valid RewriteConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                RewriteConfig attribute names.

        Returns:
            New RewriteConfig instance with values from dict.

        Example:
            >>> config = RewriteConfig.from_dict({
            ...     "strict_eof": True,
            ...     "arm_terminator": ";;\\n",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.arm_terminator
            b';;\\n'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RewriteConfig = RewriteConfig()

_rewrite_config: ContextVar[RewriteConfig] = ContextVar(
    "rewrite_config",
    default=_DEFAULT_CONFIG,
)


def get_rewrite_config() -> RewriteConfig:
    """Get current rewrite configuration (thread-local).

    Returns:
        The active RewriteConfig for this thread/context.

    """
    return _rewrite_config.get()


def set_rewrite_config(config: RewriteConfig) -> None:
    """Set rewrite configuration for current context.

    Args:
        config: RewriteConfig instance to use for this context.

    """
    _rewrite_config.set(config)


def reset_rewrite_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _rewrite_config.set(_DEFAULT_CONFIG)


@contextmanager
def rewrite_config_context(config: RewriteConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Useful for tests and isolated rewrite operations.

    Args:
        config: RewriteConfig to use within the context.

    Yields:
        None

    Example:
        >>> with rewrite_config_context(RewriteConfig(strict_eof=True)):
        ...     rewrite(b"case x in")
        Traceback (most recent call last):
        ...
        caracol.errors.UnterminatedConstructError: 1:1 unexpected end of input ...

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _rewrite_config.get()
    _rewrite_config.set(config)
    try:
        yield
    finally:
        _rewrite_config.set(previous)


__all__ = [
    "RewriteConfig",
    "get_rewrite_config",
    "set_rewrite_config",
    "reset_rewrite_config",
    "rewrite_config_context",
]
