"""Pushdown-automaton protocol shared by every state.

A State looks at a Window (the unconsumed input it can currently see,
plus whether that input may still grow) and answers with exactly one
Decision: how many bytes to emit under its color, how many bytes to
retire after the stack change, an optional corrective literal, and a
StackAction.

Retirement rules applied by the engine:
    [0, emit_len)                     written under the deciding state's color
    action                            applied to the stack
    [emit_len, emit_len + skip_len)   written under the new top state's color,
                                      or replaced by ``insert`` when present
    cursor                            advances by emit_len + skip_len

Bytes after the retired span stay in the window and are offered to
whichever state is on top next, so a state can Pop and leave a word for
its caller to classify.

Thread Safety:
Window, Decision and StackAction are frozen and safe to share.
States are transient values owned by exactly one stack slot.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ColorClass(Enum):
    """Color tag attached to emitted bytes for a downstream highlighter."""

    NORMAL = auto()
    KEYWORD = auto()


class StackOp(Enum):
    """How the state stack changes after a Decision."""

    STAY = auto()  # Keep the current state on top
    REPLACE = auto()  # Swap the top state for another at the same depth
    PUSH = auto()  # Suspend the top state beneath a nested one
    POP = auto()  # Discard the top state


@dataclass(frozen=True, slots=True)
class Window:
    """Look-ahead view of the unconsumed input.

    Attributes:
        data: The visible bytes, starting at the engine's cursor
        extendable: True if more bytes may still be appended before the
            decision must be final; False at end of input

    """

    data: bytes
    extendable: bool = False

    def __len__(self) -> int:
        return len(self.data)

    def is_bounded(self, start: int, length: int) -> bool:
        """Check whether a word run's right edge is proven.

        A run that stops before the end of the window is followed by a
        non-word byte. A run that reaches the end is only proven when it
        starts at offset 0 of a final window; otherwise the caller should
        flush up to ``start`` and look again with the word at offset 0.

        Args:
            start: Offset of the run
            length: Length of the run

        Returns:
            True if the run cannot grow with more input.
        """
        if start + length < len(self.data):
            return True
        return start == 0 and not self.extendable


@dataclass(frozen=True, slots=True)
class StackAction:
    """Stack transition requested by a Decision.

    Use the module constants STAY and POP, or StackAction.push(state) and
    StackAction.replace(state).
    """

    op: StackOp
    state: State | None = None

    @classmethod
    def push(cls, state: State) -> StackAction:
        return cls(StackOp.PUSH, state)

    @classmethod
    def replace(cls, state: State) -> StackAction:
        return cls(StackOp.REPLACE, state)

    def __repr__(self) -> str:
        if self.state is None:
            return self.op.name
        return f"{self.op.name}({self.state!r})"


STAY = StackAction(StackOp.STAY)
POP = StackAction(StackOp.POP)


@dataclass(frozen=True, slots=True)
class Decision:
    """A state's verdict for one window.

    Attributes:
        emit_len: Leading bytes written under the deciding state's color
        skip_len: Bytes retired after the stack action
        insert: Literal written instead of the skipped bytes (corrective
            rewriting only)
        action: Stack transition

    """

    emit_len: int
    skip_len: int = 0
    insert: bytes | None = None
    action: StackAction = STAY

    @property
    def consumed(self) -> int:
        """Number of window bytes this decision retires."""
        return self.emit_len + self.skip_len

    @property
    def wants_more(self) -> bool:
        """True if the state could not decide anything with this window."""
        return self.action.op is StackOp.STAY and self.consumed == 0


def flush(n: int) -> Decision:
    """Emit n bytes under the current color and stay."""
    return Decision(emit_len=n)


class State:
    """Base class for automaton states.

    Subclasses are frozen dataclasses so two states compare equal when
    they would behave the same, and set COLOR for the bytes they emit.
    """

    __slots__ = ()

    COLOR: ColorClass = ColorClass.NORMAL

    def decide(self, window: Window) -> Decision:
        """Produce exactly one Decision for window. Implemented by subclasses."""
        raise NotImplementedError

    def color_tag(self) -> ColorClass:
        """Color for bytes this state emits as plain text."""
        return self.COLOR

    @property
    def name(self) -> str:
        """Human-readable construct name used in error messages."""
        return type(self).__name__
