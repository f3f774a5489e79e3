"""Segment definition for the Caracol automaton output.

The engine produces a stream of Segment objects. Concatenating their
values gives the rewritten script; the color of each tells a highlighter
how to render it.

Thread Safety:
Segment is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from caracol.automaton.protocol import ColorClass


@dataclass(frozen=True, slots=True)
class Segment:
    """A run of output bytes with one color.

    Attributes:
        color: Color class of the state that wrote the bytes
        value: The bytes written to output
        offset: Absolute input offset where the segment starts (for a
            synthetic segment, the offset it was inserted at)
        synthetic: True if the bytes were inserted by a corrective
            rewrite and do not come from the input

    """

    color: ColorClass
    value: bytes
    offset: int
    synthetic: bool = False

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + b"..."
        mark = "+" if self.synthetic else ""
        return f"Segment({mark}{self.color.name}, {val!r}, @{self.offset})"


def merge_segments(segments: list[Segment]) -> list[Segment]:
    """Join neighbouring segments that share color and synthetic flag.

    How the input was chunked decides where the engine splits runs of the
    same color; merging gives a chunking-independent view.

    Args:
        segments: Segments in output order

    Returns:
        New list with adjacent compatible segments joined.
    """
    merged: list[Segment] = []
    for seg in segments:
        if not seg.value:
            continue
        if merged:
            last = merged[-1]
            if last.color is seg.color and last.synthetic == seg.synthetic:
                merged[-1] = Segment(last.color, last.value + seg.value, last.offset, last.synthetic)
                continue
        merged.append(seg)
    return merged
