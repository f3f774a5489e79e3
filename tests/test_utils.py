"""Tests for Caracol utility modules."""

import logging


class TestGetLogger:
    """Tests for get_logger."""

    def test_prefixes_name(self) -> None:
        from caracol.utils.logger import get_logger

        assert get_logger("engine").name == "caracol.engine"

    def test_keeps_package_names(self) -> None:
        from caracol.utils.logger import get_logger

        assert get_logger("caracol").name == "caracol"
        assert get_logger("caracol.automaton.engine").name == "caracol.automaton.engine"

    def test_returns_stdlib_logger(self) -> None:
        from caracol.utils import get_logger

        assert isinstance(get_logger(__name__), logging.Logger)

    def test_repair_is_logged(self, caplog) -> None:
        from caracol import rewrite

        with caplog.at_level(logging.DEBUG, logger="caracol"):
            rewrite(b"case x in a) b\nesac\n")
        assert "unterminated case arm" in caplog.text


class TestMicroparsers:
    """Tests for the byte predicates."""

    def test_is_word(self) -> None:
        from caracol.microparsers import is_word

        assert all(is_word(c) for c in b"azAZ09_")
        assert not any(is_word(c) for c in b" -.$;)\xc3")

    def test_is_whitespace(self) -> None:
        from caracol.microparsers import is_whitespace

        assert all(is_whitespace(c) for c in b" \t\n\r")
        assert not is_whitespace(ord("x"))

    def test_predlen(self) -> None:
        from caracol.microparsers import is_word, predlen

        assert predlen(is_word, b"esac;;") == 4
        assert predlen(is_word, b";;esac", 2) == 4
        assert predlen(is_word, b"") == 0
        assert predlen(is_word, b"ab", 2) == 0


class TestSourceLocation:
    """Tests for location arithmetic."""

    def test_advance_same_line(self) -> None:
        from caracol.location import SourceLocation

        loc = SourceLocation.start().advance(b"case")
        assert (loc.lineno, loc.col_offset, loc.offset) == (1, 5, 4)

    def test_advance_over_newlines(self) -> None:
        from caracol.location import SourceLocation

        loc = SourceLocation.start().advance(b"a\nbc\nd")
        assert (loc.lineno, loc.col_offset, loc.offset) == (3, 2, 6)

    def test_advance_nothing(self) -> None:
        from caracol.location import SourceLocation

        loc = SourceLocation(2, 3, 10)
        assert loc.advance(b"") is loc

    def test_str(self) -> None:
        from caracol.location import SourceLocation

        assert str(SourceLocation(4, 2)) == "4:2"
        assert str(SourceLocation.start("x.sh")) == "x.sh:1:1"


class TestMergeSegments:
    """Tests for merge_segments."""

    def test_joins_same_color(self) -> None:
        from caracol import ColorClass, Segment, merge_segments

        merged = merge_segments(
            [
                Segment(ColorClass.NORMAL, b"a", 0),
                Segment(ColorClass.NORMAL, b"b", 1),
                Segment(ColorClass.KEYWORD, b"in", 2),
                Segment(ColorClass.NORMAL, b";; ", 4, synthetic=True),
                Segment(ColorClass.NORMAL, b"", 4),
                Segment(ColorClass.NORMAL, b"c", 4),
            ]
        )
        assert [(s.value, s.offset) for s in merged] == [
            (b"ab", 0),
            (b"in", 2),
            (b";; ", 4),
            (b"c", 4),
        ]
