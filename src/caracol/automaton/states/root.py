"""Top-level state of a script."""

from __future__ import annotations

from dataclasses import dataclass

from caracol.automaton.protocol import Decision, State, Window, flush
from caracol.automaton.states.command import NO_TRIGGER, keyword_or_command
from caracol.microparsers import SEPARATORS, is_whitespace


@dataclass(frozen=True, slots=True)
class Root(State):
    """Sequence of commands at the outermost level. Never pops."""

    def decide(self, window: Window) -> Decision:
        for i, c in enumerate(window.data):
            if is_whitespace(c) or c in SEPARATORS:
                continue
            return keyword_or_command(NO_TRIGGER, window, i)
        return flush(len(window.data))
