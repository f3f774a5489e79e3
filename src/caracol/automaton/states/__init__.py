"""States for the Caracol automaton.

Each state is a small frozen dataclass with a decide() method:
- root.py: Root, the outermost command sequence
- case.py: CaseClause, Selector, Body, Arm (the case ... esac construct)
- command.py: keyword_or_command dispatch, Command, Keyword
- quoting.py: common_quoting helper, SingleQuoted, DoubleQuoted, Comment
"""

from __future__ import annotations

from caracol.automaton.states.case import Arm, Body, CaseClause, Selector
from caracol.automaton.states.command import (
    NO_TRIGGER,
    RESERVED_WORDS,
    Command,
    Keyword,
    keyword_or_command,
)
from caracol.automaton.states.quoting import (
    Comment,
    DoubleQuoted,
    SingleQuoted,
    common_quoting,
)
from caracol.automaton.states.root import Root

__all__ = [
    "NO_TRIGGER",
    "RESERVED_WORDS",
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
]
