"""Stack-machine engine that drives states over chunked input.

The engine owns the state stack, the input buffer and the cursor. On
every cycle it offers the top state a Window over the unconsumed input
and applies the Decision it gets back. It is the only component that
grows the window: when a state decides nothing (STAY with no bytes
retired) the next chunk is read and the same state is asked again.

Thread Safety:
Automaton instances are single-use. Create one per script.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from caracol.automaton.protocol import Decision, StackOp, State, Window
from caracol.automaton.states.root import Root
from caracol.config import get_rewrite_config, rewrite_config_context
from caracol.errors import (
    AutomatonError,
    NestingDepthError,
    StalledAutomatonError,
    UnterminatedConstructError,
)
from caracol.location import SourceLocation
from caracol.segments import Segment
from caracol.utils.logger import get_logger

logger = get_logger(__name__)


class Automaton:
    """Pushdown automaton over a stream of script bytes.

    The bottom of the stack is always a Root state. An optional entry
    state is pushed above it, which lets a single construct be driven on
    its own.

    Usage:
            >>> from caracol.automaton import Automaton
            >>> out = Automaton().run([b"case $x in a) true\\n", b"esac\\n"])
            >>> b"".join(seg.value for seg in out)
            b'case $x in a) true\\n;; esac\\n'

    """

    __slots__ = (
        "_stack",
        "_origins",  # Location where each stack slot was entered
        "_buffer",
        "_pos",
        "_eof",
        "_location",
        "_source_file",
        "_config",  # RewriteConfig active when the automaton was created
    )

    def __init__(self, entry: State | None = None, *, source_file: str | None = None) -> None:
        """Initialize the automaton.

        Args:
            entry: State to start in, pushed above Root (optional)
            source_file: Optional source file path for error messages
        """
        self._source_file = source_file
        self._location = SourceLocation.start(source_file)
        self._stack: list[State] = [Root()]
        self._origins: list[SourceLocation] = [self._location]
        if entry is not None:
            self._stack.append(entry)
            self._origins.append(self._location)
        self._buffer = b""
        self._pos = 0
        self._eof = False
        self._config = get_rewrite_config()

    @property
    def depth(self) -> int:
        """Number of states on the stack, Root included."""
        return len(self._stack)

    @property
    def stack(self) -> tuple[State, ...]:
        """Snapshot of the stack, bottom first."""
        return tuple(self._stack)

    @property
    def location(self) -> SourceLocation:
        """Location of the next unconsumed input byte."""
        return self._location

    def run(self, chunks: Iterable[bytes]) -> Iterator[Segment]:
        """Drive the stack over chunks until input is exhausted.

        Args:
            chunks: Input bytes in order; chunk boundaries carry no meaning

        Yields:
            Segment objects in output order

        Raises:
            StalledAutomatonError: If a state cannot progress at end of input
            NestingDepthError: If the stack grows beyond max_depth
            UnterminatedConstructError: If input ends inside a construct and
                strict_eof is configured
        """
        source = iter(chunks)
        while True:
            window = Window(self._buffer[self._pos :], extendable=not self._eof)
            state = self._stack[-1]
            decision = self._decide(state, window)

            if decision.wants_more:
                if self._eof:
                    if not window.data:
                        break
                    raise StalledAutomatonError(
                        f"{state.name} made no progress at end of input",
                        lineno=self._location.lineno,
                        col_offset=self._location.col_offset,
                        source_file=self._source_file,
                    )
                self._read(source)
                continue

            yield from self._apply(state, window, decision)

        self._finish()

    def _decide(self, state: State, window: Window) -> Decision:
        """Ask state for a decision under the automaton's own config."""
        if get_rewrite_config() is self._config:
            return state.decide(window)
        # Resumed outside the context the automaton was created in
        with rewrite_config_context(self._config):
            return state.decide(window)

    def _read(self, source: Iterator[bytes]) -> None:
        """Lengthen the window by one chunk, or mark end of input."""
        try:
            chunk = next(source)
        except StopIteration:
            self._eof = True
            return
        self._buffer = self._buffer[self._pos :] + bytes(chunk)
        self._pos = 0

    def _apply(self, state: State, window: Window, decision: Decision) -> Iterator[Segment]:
        """Write the decision's output and carry out its stack action."""
        data = window.data
        emit = decision.emit_len
        end = decision.consumed
        if end > len(data):
            raise AutomatonError(
                f"{state.name} retired {end} bytes of a {len(data)}-byte window",
                lineno=self._location.lineno,
                col_offset=self._location.col_offset,
                source_file=self._source_file,
            )

        offset = self._location.offset
        if emit:
            yield Segment(state.color_tag(), data[:emit], offset)

        entered_at = self._location.advance(data[:emit])
        self._transition(decision, entered_at)

        top = self._stack[-1]
        if decision.insert is not None:
            yield Segment(top.color_tag(), decision.insert, offset + emit, synthetic=True)
        elif decision.skip_len:
            yield Segment(top.color_tag(), data[emit:end], offset + emit)

        self._pos += end
        self._location = entered_at.advance(data[emit:end])

    def _transition(self, decision: Decision, entered_at: SourceLocation) -> None:
        """Apply the stack action of decision."""
        action = decision.action
        op = action.op
        if op is StackOp.STAY:
            return
        if op is StackOp.POP:
            if len(self._stack) == 1:
                raise AutomatonError(
                    "cannot pop the root state",
                    lineno=entered_at.lineno,
                    col_offset=entered_at.col_offset,
                    source_file=self._source_file,
                )
            self._stack.pop()
            self._origins.pop()
            return

        assert action.state is not None
        if op is StackOp.REPLACE:
            # The construct keeps the location where it was entered
            self._stack[-1] = action.state
            return

        if len(self._stack) >= self._config.max_depth:
            raise NestingDepthError(
                f"nesting deeper than {self._config.max_depth} states",
                lineno=entered_at.lineno,
                col_offset=entered_at.col_offset,
                source_file=self._source_file,
            )
        self._stack.append(action.state)
        self._origins.append(entered_at)

    def _finish(self) -> None:
        """Report constructs left open at end of input."""
        if len(self._stack) == 1:
            return
        names = [s.name for s in self._stack[1:]]
        origin = self._origins[-1]
        if self._config.strict_eof:
            raise UnterminatedConstructError(
                names,
                lineno=origin.lineno,
                col_offset=origin.col_offset,
                source_file=self._source_file,
            )
        logger.warning(
            "%s: unexpected end of input inside %s",
            origin,
            ", ".join(names),
        )
