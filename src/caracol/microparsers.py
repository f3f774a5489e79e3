"""Byte predicates for O(1) classification.

All sets are frozensets of byte values for:
- O(1) membership testing
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Iterating a bytes object yields ints, so every predicate takes an int.

Usage:
    from caracol.microparsers import is_word, predlen

    n = predlen(is_word, window.data, i)  # length of the word at i
"""

from __future__ import annotations

from collections.abc import Callable

WHITESPACE: frozenset[int] = frozenset(b" \t\n\r\v\f")

WORD_CHARS: frozenset[int] = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)

# Bytes the arm and top-level scanners step over between commands
SEPARATORS: frozenset[int] = frozenset(b";|&<>")

# Bytes that end a simple command (left for the enclosing state)
COMMAND_TERMINATORS: frozenset[int] = frozenset(b"\n;&|")

# Characters that form a two-byte special parameter after $ ($#, $?, ...)
SPECIAL_PARAMETERS: frozenset[int] = frozenset(b"#?$!@*-0123456789")


def is_whitespace(c: int) -> bool:
    """Check if byte is ASCII whitespace."""
    return c in WHITESPACE


def is_word(c: int) -> bool:
    """Check if byte can be part of a shell word (letters, digits, underscore)."""
    return c in WORD_CHARS


def predlen(pred: Callable[[int], bool], data: bytes, start: int = 0) -> int:
    """Length of the longest run of bytes satisfying pred.

    Args:
        pred: Byte predicate
        data: Bytes to scan
        start: Offset where the run begins

    Returns:
        Number of consecutive bytes from start for which pred holds.
    """
    end = len(data)
    pos = start
    while pos < end and pred(data[pos]):
        pos += 1
    return pos - start
