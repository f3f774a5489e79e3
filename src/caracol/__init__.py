"""
Caracol — Streaming shell-script lexer and rewriter

Classifies shell-script bytes into colored regions with a pushdown
automaton that only ever sees a growable look-ahead window, and repairs
case arms that are missing their ;; terminator. Everything else passes
through byte for byte.

Quick Start:
    >>> from caracol import rewrite
    >>> rewrite(b"case $1 in\\n  start) run\\nesac\\n")
    b'case $1 in\\n  start) run\\n;; esac\\n'

    >>> # Colored segments for a highlighter
    >>> from caracol import scan
    >>> [seg.color.name for seg in scan(b"if true")]
    ['KEYWORD', 'NORMAL', 'NORMAL']

Streaming:
    >>> from functools import partial
    >>> from caracol import Automaton
    >>> with open("deploy.sh", "rb") as f:
    ...     out = b"".join(s.value for s in Automaton().run(iter(partial(f.read, 4096), b"")))
"""

from collections.abc import Iterator

from caracol.automaton import (
    POP,
    STAY,
    Automaton,
    ColorClass,
    Decision,
    StackAction,
    StackOp,
    State,
    Window,
    flush,
)
from caracol.automaton.states import (
    NO_TRIGGER,
    Arm,
    Body,
    CaseClause,
    Command,
    Comment,
    DoubleQuoted,
    Keyword,
    Root,
    Selector,
    SingleQuoted,
    common_quoting,
    keyword_or_command,
)
from caracol.config import (
    RewriteConfig,
    get_rewrite_config,
    reset_rewrite_config,
    rewrite_config_context,
    set_rewrite_config,
)
from caracol.errors import (
    AutomatonError,
    CaracolError,
    NestingDepthError,
    StalledAutomatonError,
    UnterminatedConstructError,
)
from caracol.location import SourceLocation
from caracol.microparsers import is_whitespace, is_word, predlen
from caracol.segments import Segment, merge_segments

__version__ = "0.1.0"


def iter_chunks(source: bytes, size: int) -> Iterator[bytes]:
    """Split source into consecutive chunks of at most size bytes.

    Args:
        source: Input bytes
        size: Chunk size (must be positive)

    Yields:
        Chunks in order. Nothing is yielded for empty input.

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    for start in range(0, len(source), size):
        yield source[start : start + size]


def _as_bytes(source: bytes | str) -> bytes:
    if isinstance(source, str):
        return source.encode("utf-8")
    return bytes(source)


def scan(
    source: bytes | str,
    *,
    chunk_size: int | None = None,
    source_file: str | None = None,
) -> Iterator[Segment]:
    """Run a script through the automaton.

    Args:
        source: Script bytes (str is UTF-8 encoded)
        chunk_size: Window growth step; defaults to RewriteConfig.chunk_size
        source_file: Optional source file path for error messages

    Returns:
        Iterator over Segment objects in output order. The active
        RewriteConfig is captured here, when scan() is called, not when
        iteration starts.
    """
    data = _as_bytes(source)
    size = chunk_size if chunk_size is not None else get_rewrite_config().chunk_size
    automaton = Automaton(source_file=source_file)
    return automaton.run(iter_chunks(data, size))


def rewrite(
    source: bytes | str,
    *,
    chunk_size: int | None = None,
    source_file: str | None = None,
) -> bytes:
    """Rewrite a script, inserting missing case arm terminators.

    Args:
        source: Script bytes (str is UTF-8 encoded)
        chunk_size: Window growth step; defaults to RewriteConfig.chunk_size
        source_file: Optional source file path for error messages

    Returns:
        The rewritten script. Identical to the input unless a correction
        was made.
    """
    return b"".join(
        seg.value for seg in scan(source, chunk_size=chunk_size, source_file=source_file)
    )


__all__ = [
    # Main API
    "rewrite",
    "scan",
    "iter_chunks",
    "__version__",
    # Engine and protocol
    "Automaton",
    "ColorClass",
    "Decision",
    "POP",
    "STAY",
    "StackAction",
    "StackOp",
    "State",
    "Window",
    "flush",
    # States
    "NO_TRIGGER",
    "Arm",
    "Body",
    "CaseClause",
    "Command",
    "Comment",
    "DoubleQuoted",
    "Keyword",
    "Root",
    "Selector",
    "SingleQuoted",
    "common_quoting",
    "keyword_or_command",
    # Output
    "Segment",
    "merge_segments",
    "SourceLocation",
    # Byte predicates
    "is_whitespace",
    "is_word",
    "predlen",
    # Configuration
    "RewriteConfig",
    "get_rewrite_config",
    "set_rewrite_config",
    "reset_rewrite_config",
    "rewrite_config_context",
    # Errors
    "CaracolError",
    "AutomatonError",
    "NestingDepthError",
    "StalledAutomatonError",
    "UnterminatedConstructError",
]
