"""Stream a script from disk and print reserved words in bold.

The automaton never needs the whole file: it asks for another chunk only
when a word touches the end of what it has seen so far.

Usage:
    python highlight_stream.py deploy.sh
"""

import sys
from functools import partial

from caracol import Automaton, ColorClass

BOLD = b"\x1b[1m"
RESET = b"\x1b[0m"


def main(path: str) -> None:
    out = sys.stdout.buffer
    with open(path, "rb") as f:
        chunks = iter(partial(f.read, 4096), b"")
        for seg in Automaton(source_file=path).run(chunks):
            if seg.color is ColorClass.KEYWORD:
                out.write(BOLD + seg.value + RESET)
            else:
                out.write(seg.value)
    out.flush()


if __name__ == "__main__":
    main(sys.argv[1])
