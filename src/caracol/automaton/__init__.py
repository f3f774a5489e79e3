"""Streaming pushdown automaton for shell scripts.

This package provides the decision protocol every state follows, the
engine that drives a stack of states over chunked input, and the states
themselves.

Architecture:
automaton/
├── __init__.py          # Re-exports Automaton and the protocol types
├── protocol.py          # Window, Decision, StackAction, State, ColorClass
├── engine.py            # Automaton (stack, buffer, cursor)
└── states/              # Concrete states
    ├── root.py          # Top level of a script
    ├── case.py          # case ... esac (CaseClause, Selector, Body, Arm)
    ├── command.py       # Command-start dispatch, simple commands, keywords
    └── quoting.py       # Quotes, comments, escapes

Usage:
    >>> from caracol.automaton import Automaton
    >>> for seg in Automaton().run([b"case x in\\n", b"esac\\n"]):
    ...     print(seg)
Segment(KEYWORD, b'case', @0)
Segment(KEYWORD, b' x', @4)
Segment(KEYWORD, b' in', @6)
Segment(NORMAL, b'\\n', @9)
Segment(KEYWORD, b'esac', @10)
Segment(NORMAL, b'\\n', @14)

"""

from caracol.automaton.protocol import (
    POP,
    STAY,
    ColorClass,
    Decision,
    StackAction,
    StackOp,
    State,
    Window,
    flush,
)
from caracol.automaton.engine import Automaton

__all__ = [
    "POP",
    "STAY",
    "Automaton",
    "ColorClass",
    "Decision",
    "StackAction",
    "StackOp",
    "State",
    "Window",
    "flush",
]
