"""Quoted regions, comments and the shared quoting helper.

Any state that scans for syntax (a keyword, a `)`, a `;;`) must not look
inside quotes or comments. common_quoting() recognizes the bytes that open
such regions and returns the Decision that steps over them.
"""

from __future__ import annotations

from dataclasses import dataclass

from caracol.automaton.protocol import (
    POP,
    Decision,
    State,
    StackAction,
    Window,
    flush,
)
from caracol.microparsers import SPECIAL_PARAMETERS

SINGLE_QUOTE = ord("'")
DOUBLE_QUOTE = ord('"')
BACKSLASH = ord("\\")
HASH = ord("#")
DOLLAR = ord("$")
NEWLINE = ord("\n")


def _pair_or_defer(window: Window, i: int) -> Decision:
    """Retire a two-byte sequence starting at i, if its second byte is visible."""
    if i + 1 < len(window.data):
        return flush(i + 2)
    if i > 0 or window.extendable:
        return flush(i)
    return flush(i + 1)


def common_quoting(end_trigger: int, window: Window, i: int) -> Decision | None:
    """Step over a quoting construct that starts at offset i.

    Handles single and double quotes, comments, backslash escapes and
    two-byte special parameters ($#, $?, ...).

    Args:
        end_trigger: Byte value that ends the enclosing command, or
            NO_TRIGGER; quoted regions do not react to it
        window: Current window
        i: Offset of the byte to inspect

    Returns:
        Decision if the byte opens a quoting construct, None otherwise.
    """
    c = window.data[i]
    if c == SINGLE_QUOTE:
        return Decision(i, 1, action=StackAction.push(SingleQuoted()))
    if c == DOUBLE_QUOTE:
        return Decision(i, 1, action=StackAction.push(DoubleQuoted()))
    if c == HASH:
        return Decision(i, action=StackAction.push(Comment()))
    if c == BACKSLASH:
        return _pair_or_defer(window, i)
    if c == DOLLAR:
        if i + 1 < len(window.data) and window.data[i + 1] not in SPECIAL_PARAMETERS:
            return flush(i + 1)
        return _pair_or_defer(window, i)
    return None


@dataclass(frozen=True, slots=True)
class SingleQuoted(State):
    """Inside '...': nothing is special until the closing quote."""

    def decide(self, window: Window) -> Decision:
        end = window.data.find(b"'")
        if end == -1:
            return flush(len(window.data))
        return Decision(end, 1, action=POP)


@dataclass(frozen=True, slots=True)
class DoubleQuoted(State):
    """Inside "...": backslash escapes the next byte."""

    def decide(self, window: Window) -> Decision:
        data = window.data
        i = 0
        end = len(data)
        while i < end:
            c = data[i]
            if c == DOUBLE_QUOTE:
                return Decision(i, 1, action=POP)
            if c == BACKSLASH:
                if i + 1 == end:
                    return _pair_or_defer(window, i)
                i += 2
                continue
            i += 1
        return flush(end)


@dataclass(frozen=True, slots=True)
class Comment(State):
    """From # to the end of the line. The newline is left for the caller."""

    def decide(self, window: Window) -> Decision:
        end = window.data.find(b"\n")
        if end == -1:
            return flush(len(window.data))
        return Decision(end, action=POP)
