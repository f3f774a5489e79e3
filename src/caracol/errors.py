"""Exception classes for Caracol.

Provides standardized exceptions for error handling throughout Caracol.
The states themselves never raise on byte input; every error here is
raised by the automaton engine that drives them.
"""

from __future__ import annotations

from collections.abc import Sequence


class CaracolError(Exception):
    """Base exception for all Caracol errors.

    Subclass this for specific error categories.
    """

    pass


class AutomatonError(CaracolError):
    """Error while driving the state stack over a script.

    Raised when the engine encounters a protocol violation or
    input it cannot finish.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize automaton error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class UnterminatedConstructError(AutomatonError):
    """Input ended while constructs were still open.

    Only raised when RewriteConfig.strict_eof is set; otherwise the
    engine logs a warning and returns what it has written.
    """

    def __init__(
        self,
        constructs: Sequence[str],
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize with the names of the open constructs.

        Args:
            constructs: Names of the open states, outermost first
            lineno: Line where the innermost open construct started
            col_offset: Column where the innermost open construct started
            source_file: Path to source file (optional)
        """
        self.constructs = tuple(constructs)
        names = ", ".join(self.constructs)
        super().__init__(
            f"unexpected end of input inside {names}",
            lineno=lineno,
            col_offset=col_offset,
            source_file=source_file,
        )


class StalledAutomatonError(AutomatonError):
    """A state asked for more input although the input is exhausted.

    Every state must make progress on a final, non-empty window.
    """

    pass


class NestingDepthError(AutomatonError):
    """The state stack grew beyond RewriteConfig.max_depth."""

    pass
