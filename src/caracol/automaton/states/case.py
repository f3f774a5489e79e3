"""The case ... esac automaton.

States and transitions:

    CaseClause --"case"--> push Selector
    Selector   --"in"----> replace with Body
    Body       --")"-----> push Arm (Body stays beneath)
    Arm        --";;"----> pop back to Body
    Arm        --"esac"--> insert ";; ", pop back to Body
    Body       --"esac"--> pop back to CaseClause (esac left in the window)
    CaseClause --"esac"--> pop

Every keyword test follows the same end-of-window rule (see
Window.is_bounded): a word touching the end of the window is only judged
once it starts at offset 0 of a final window, so "fin" is never "in" and
"esacs" is never "esac" however the input happens to be chunked.
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
from caracol.automaton.states.command import NO_TRIGGER, keyword_or_command
from caracol.automaton.states.quoting import common_quoting
from caracol.config import get_rewrite_config
from caracol.microparsers import SEPARATORS, is_whitespace, is_word, predlen
from caracol.utils.logger import get_logger

logger = get_logger(__name__)

SEMICOLON = ord(";")
CLOSE_PAREN = ord(")")


@dataclass(frozen=True, slots=True)
class CaseClause(State):
    """Brackets a whole case construct for the state that started it.

    Pushed by keyword_or_command() in front of the word `case`. It pushes
    the Selector, and when Body pops it receives the `esac` that Body left
    behind, colors it as a keyword and pops itself.
    """

    COLOR = ColorClass.KEYWORD

    def decide(self, window: Window) -> Decision:
        data = window.data
        n = predlen(is_word, data)
        if not window.is_bounded(0, n):
            return flush(0)
        word = data[:n]
        if word == b"case":
            return Decision(0, n, action=StackAction.push(Selector()))
        if word == b"esac":
            return Decision(n, action=POP)
        return Decision(0, action=POP)


@dataclass(frozen=True, slots=True)
class Selector(State):
    """Between `case` and `in`: the subject word, then the keyword `in`."""

    COLOR = ColorClass.KEYWORD

    def decide(self, window: Window) -> Decision:
        data = window.data
        for i in range(len(data)):
            n = predlen(is_word, data, i)
            if n == 0:
                res = common_quoting(NO_TRIGGER, window, i)
                if res is not None:
                    return res
                continue
            if not window.is_bounded(i, n):
                return flush(i)
            if data[i : i + n] == b"in":
                return Decision(i + n, action=StackAction.replace(Body()))
            return flush(i + n)
        return flush(len(data))


@dataclass(frozen=True, slots=True)
class Body(State):
    """Between arms: patterns up to `)`, or the closing `esac`.

    Body never consumes `esac`; it pops and leaves the word for the
    enclosing state so all reserved words are colored in one place.
    """

    def decide(self, window: Window) -> Decision:
        data = window.data
        for i, c in enumerate(data):
            n = predlen(is_word, data, i)
            if n == 0:
                if c == CLOSE_PAREN:
                    return Decision(i, 1, action=StackAction.push(Arm()))
                res = common_quoting(NO_TRIGGER, window, i)
                if res is not None:
                    return res
                continue
            if not window.is_bounded(i, n):
                return flush(i)
            if data[i : i + n] == b"esac":
                return Decision(i, action=POP)
            return flush(i + n)
        return flush(len(data))


@dataclass(frozen=True, slots=True)
class Arm(State):
    """The commands of one arm, up to `;;`.

    An `esac` where a command could start means the arm's `;;` is
    missing: the configured terminator is inserted and the word is left
    for Body.
    """

    def decide(self, window: Window) -> Decision:
        data = window.data
        end = len(data)
        for i, c in enumerate(data):
            if c == SEMICOLON:
                if i + 1 < end:
                    if data[i + 1] == SEMICOLON:
                        return Decision(i, 2, action=POP)
                elif i > 0 or window.extendable:
                    return flush(i)
            if is_whitespace(c) or c in SEPARATORS:
                continue
            n = predlen(is_word, data, i)
            if window.is_bounded(i, n) and data[i : i + n] == b"esac":
                terminator = get_rewrite_config().arm_terminator
                logger.debug("Inserting %r before esac of an unterminated case arm", terminator)
                return Decision(i, insert=terminator, action=POP)
            return keyword_or_command(NO_TRIGGER, window, i)
        return flush(end)
