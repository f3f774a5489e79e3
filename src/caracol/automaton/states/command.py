"""Command-start dispatch and simple command scanning.

keyword_or_command() is called by every state that sits at a position
where a new command may begin (the top level and case arms). It colors
reserved words, hands `case` to the case automaton and pushes a Command
state for anything else.

This is deliberately not a full shell grammar: a Command runs until a
newline or control operator and only knows enough about quoting to not
end early.
"""

from __future__ import annotations

from dataclasses import dataclass

from caracol.automaton.protocol import (
    POP,
    ColorClass,
    Decision,
    State,
    StackAction,
    Window,
    flush,
)
from caracol.automaton.states.quoting import HASH, Comment, common_quoting
from caracol.microparsers import (
    COMMAND_TERMINATORS,
    is_whitespace,
    is_word,
    predlen,
)

# Context tag meaning "no extra byte ends the command"
NO_TRIGGER = 0x100

RESERVED_WORDS = frozenset(
    {
        b"if",
        b"then",
        b"else",
        b"elif",
        b"fi",
        b"case",
        b"esac",
        b"for",
        b"select",
        b"while",
        b"until",
        b"do",
        b"done",
        b"in",
        b"function",
        b"time",
        b"coproc",
    }
)


def keyword_or_command(end_trigger: int, window: Window, i: int) -> Decision:
    """Classify what starts at offset i, a position where a command may begin.

    Args:
        end_trigger: Byte value that also ends a nested command, or NO_TRIGGER
        window: Current window
        i: Offset of the first byte of the candidate command

    Returns:
        Decision that emits the bytes before i and pushes the state for
        what was found, or flush(i) while the word at i is undecidable.
    """
    data = window.data
    if data[i] == HASH:
        return Decision(i, action=StackAction.push(Comment()))

    n = predlen(is_word, data, i)
    if n == 0:
        return Decision(i, action=StackAction.push(Command(end_trigger)))
    if not window.is_bounded(i, n):
        return flush(i)

    word = data[i : i + n]
    if word == b"case":
        # Local import: the case states dispatch back into this module
        from caracol.automaton.states.case import CaseClause

        return Decision(i, action=StackAction.push(CaseClause()))
    if word in RESERVED_WORDS:
        return Decision(i, n, action=StackAction.push(Keyword()))
    return Decision(i, action=StackAction.push(Command(end_trigger)))


@dataclass(frozen=True, slots=True)
class Keyword(State):
    """Transient state that only exists to color a reserved word.

    It is pushed with the word as its skip span and pops straight away.
    """

    COLOR = ColorClass.KEYWORD

    def decide(self, window: Window) -> Decision:
        return Decision(0, action=POP)


@dataclass(frozen=True, slots=True)
class Command(State):
    """A simple command, up to (not including) its terminator.

    Attributes:
        end_trigger: Extra byte value that ends the command, or NO_TRIGGER

    """

    end_trigger: int = NO_TRIGGER

    def decide(self, window: Window) -> Decision:
        data = window.data
        for i, c in enumerate(data):
            if c in COMMAND_TERMINATORS or c == self.end_trigger:
                return Decision(i, action=POP)
            if c == HASH:
                # Only a comment at the start of a word
                if i > 0 and is_whitespace(data[i - 1]):
                    return Decision(i, action=StackAction.push(Comment()))
                continue
            res = common_quoting(self.end_trigger, window, i)
            if res is not None:
                return res

        if not window.extendable or not data or not is_whitespace(data[-1]):
            return flush(len(data))
        # Keep the last blank so a following # still sees its whitespace
        return flush(len(data) - 1)
