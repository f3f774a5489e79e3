"""Source location tracking for error messages and debugging.

Provides SourceLocation dataclass for tracking positions in script input.
The engine keeps one per open construct so unterminated constructs can
be reported where they began.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    All positions are 1-indexed (lineno and col_offset start at 1).
    Columns count bytes, not characters.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset in bytes (1-indexed)
        offset: Absolute byte offset in the input stream
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(lineno=3, col_offset=5, offset=40)
            >>> str(loc)
            '3:5'
            >>> str(SourceLocation(1, 1, 0, "deploy.sh"))
            'deploy.sh:1:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.sh:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def advance(self, data: bytes) -> SourceLocation:
        """Return the location just past data, which starts at this location.

        Uses bytes.count for the newline tally (C implementation).

        Args:
            data: Bytes retired from the input starting at this location

        Returns:
            New SourceLocation after data
        """
        if not data:
            return self
        newline_count = data.count(b"\n")
        if newline_count:
            lineno = self.lineno + newline_count
            col = len(data) - data.rfind(b"\n")
        else:
            lineno = self.lineno
            col = self.col_offset + len(data)
        return SourceLocation(lineno, col, self.offset + len(data), self.source_file)

    @classmethod
    def start(cls, source_file: str | None = None) -> SourceLocation:
        """Location of the first byte of an input."""
        return cls(lineno=1, col_offset=1, offset=0, source_file=source_file)
