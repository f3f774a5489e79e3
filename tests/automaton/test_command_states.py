"""Tests for command dispatch, quoting and the top-level state."""

from __future__ import annotations

import pytest

from caracol.automaton import POP, Decision, StackAction, Window, flush
from caracol.automaton.states import (
    NO_TRIGGER,
    RESERVED_WORDS,
    CaseClause,
    Command,
    Comment,
    DoubleQuoted,
    Keyword,
    Root,
    SingleQuoted,
    common_quoting,
    keyword_or_command,
)


def final(data: bytes) -> Window:
    return Window(data, extendable=False)


def more(data: bytes) -> Window:
    return Window(data, extendable=True)


class TestKeywordOrCommand:
    """Dispatch at a command start."""

    def test_plain_command(self) -> None:
        decision = keyword_or_command(NO_TRIGGER, final(b"  echo hi"), 2)
        assert decision == Decision(2, action=StackAction.push(Command(NO_TRIGGER)))

    def test_trigger_is_threaded_through(self) -> None:
        trigger = ord(")")
        decision = keyword_or_command(trigger, final(b"ls)"), 0)
        assert decision.action == StackAction.push(Command(trigger))

    def test_case_pushes_clause_before_the_word(self) -> None:
        decision = keyword_or_command(NO_TRIGGER, final(b"case x in"), 0)
        assert decision == Decision(0, action=StackAction.push(CaseClause()))

    @pytest.mark.parametrize("word", sorted(RESERVED_WORDS - {b"case"}))
    def test_reserved_word_is_colored(self, word: bytes) -> None:
        decision = keyword_or_command(NO_TRIGGER, final(word + b" "), 0)
        assert decision == Decision(0, len(word), action=StackAction.push(Keyword()))

    def test_unbounded_word_is_deferred(self) -> None:
        assert keyword_or_command(NO_TRIGGER, more(b"if"), 0) == flush(0)
        assert keyword_or_command(NO_TRIGGER, final(b" if"), 1) == flush(1)

    def test_word_at_start_of_final_window(self) -> None:
        decision = keyword_or_command(NO_TRIGGER, final(b"fi"), 0)
        assert decision == Decision(0, 2, action=StackAction.push(Keyword()))

    def test_prefix_of_keyword_is_a_command(self) -> None:
        decision = keyword_or_command(NO_TRIGGER, final(b"iffy "), 0)
        assert decision.action == StackAction.push(Command(NO_TRIGGER))

    def test_comment(self) -> None:
        decision = keyword_or_command(NO_TRIGGER, final(b" # note"), 1)
        assert decision == Decision(1, action=StackAction.push(Comment()))

    def test_non_word_start(self) -> None:
        decision = keyword_or_command(NO_TRIGGER, final(b'"$x" y'), 0)
        assert decision == Decision(0, action=StackAction.push(Command(NO_TRIGGER)))


class TestKeyword:
    """Keyword only exists to color a reserved word."""

    def test_pops_immediately(self) -> None:
        assert Keyword().decide(more(b" then")) == Decision(0, action=POP)
        assert Keyword().decide(final(b"")) == Decision(0, action=POP)

    def test_color(self) -> None:
        assert Keyword().color_tag().name == "KEYWORD"


class TestCommonQuoting:
    """The quoting helper opens regions the scanners must not look inside."""

    def test_single_quote(self) -> None:
        decision = common_quoting(NO_TRIGGER, final(b"a'b"), 1)
        assert decision == Decision(1, 1, action=StackAction.push(SingleQuoted()))

    def test_double_quote(self) -> None:
        decision = common_quoting(NO_TRIGGER, final(b'"b'), 0)
        assert decision == Decision(0, 1, action=StackAction.push(DoubleQuoted()))

    def test_hash(self) -> None:
        assert common_quoting(NO_TRIGGER, final(b"#"), 0) == Decision(
            0, action=StackAction.push(Comment())
        )

    def test_backslash_pair(self) -> None:
        assert common_quoting(NO_TRIGGER, final(b"x\\;y"), 1) == flush(3)

    def test_backslash_at_end(self) -> None:
        assert common_quoting(NO_TRIGGER, more(b"x\\"), 1) == flush(1)
        assert common_quoting(NO_TRIGGER, more(b"\\"), 0) == flush(0)
        assert common_quoting(NO_TRIGGER, final(b"\\"), 0) == flush(1)

    def test_special_parameter(self) -> None:
        assert common_quoting(NO_TRIGGER, final(b"$# "), 0) == flush(2)
        assert common_quoting(NO_TRIGGER, final(b"$?"), 0) == flush(2)

    def test_dollar_before_name(self) -> None:
        assert common_quoting(NO_TRIGGER, final(b"$x"), 0) == flush(1)

    def test_dollar_at_end(self) -> None:
        assert common_quoting(NO_TRIGGER, more(b"$"), 0) == flush(0)
        assert common_quoting(NO_TRIGGER, final(b"$"), 0) == flush(1)

    @pytest.mark.parametrize("byte", [b" ", b"a", b")", b";", b"|"])
    def test_ordinary_bytes(self, byte: bytes) -> None:
        assert common_quoting(NO_TRIGGER, final(byte), 0) is None


class TestQuotedStates:
    """Quoted regions and comments."""

    def test_single_quoted_closes(self) -> None:
        assert SingleQuoted().decide(final(b"a;;b' x")) == Decision(4, 1, action=POP)

    def test_single_quoted_ignores_backslash(self) -> None:
        assert SingleQuoted().decide(final(b"\\' x")) == Decision(1, 1, action=POP)

    def test_single_quoted_unclosed(self) -> None:
        assert SingleQuoted().decide(more(b"esac")) == flush(4)

    def test_double_quoted_closes(self) -> None:
        assert DoubleQuoted().decide(final(b'a)b" x')) == Decision(3, 1, action=POP)

    def test_double_quoted_escape(self) -> None:
        assert DoubleQuoted().decide(final(b'\\"x"')) == Decision(3, 1, action=POP)

    def test_double_quoted_escape_at_end(self) -> None:
        assert DoubleQuoted().decide(more(b"ab\\")) == flush(2)
        assert DoubleQuoted().decide(more(b"\\")) == flush(0)
        assert DoubleQuoted().decide(final(b"\\")) == flush(1)

    def test_comment_leaves_newline(self) -> None:
        assert Comment().decide(final(b"# esac\nx")) == Decision(6, action=POP)
        assert Comment().decide(final(b"\n")) == Decision(0, action=POP)

    def test_comment_unfinished(self) -> None:
        assert Comment().decide(more(b"# a)")) == flush(4)


class TestCommand:
    """Simple commands run up to their terminator."""

    @pytest.mark.parametrize("terminator", [b"\n", b";", b"&", b"|"])
    def test_pops_at_terminator(self, terminator: bytes) -> None:
        decision = Command().decide(final(b"echo hi" + terminator + b"x"))
        assert decision == Decision(7, action=POP)

    def test_end_trigger(self) -> None:
        decision = Command(ord(")")).decide(final(b"ls) x"))
        assert decision == Decision(2, action=POP)

    def test_no_trigger_ignores_paren(self) -> None:
        assert Command().decide(final(b"ls)")) == flush(3)

    def test_comment_after_blank(self) -> None:
        decision = Command().decide(final(b"echo #;;"))
        assert decision == Decision(5, action=StackAction.push(Comment()))

    def test_hash_inside_word(self) -> None:
        assert Command().decide(final(b"a#b")) == flush(3)

    def test_hash_at_window_start_is_not_a_comment(self) -> None:
        assert Command().decide(final(b"#b")) == flush(2)

    def test_quote_inside_command(self) -> None:
        decision = Command().decide(final(b"echo ';;'"))
        assert decision == Decision(5, 1, action=StackAction.push(SingleQuoted()))

    def test_escaped_terminator(self) -> None:
        assert Command().decide(final(b"echo \\; x")) == flush(7)

    def test_last_blank_kept_while_extendable(self) -> None:
        assert Command().decide(more(b"echo  ")) == flush(5)
        assert Command().decide(more(b"  ")) == flush(1)
        assert Command().decide(more(b" ")) == flush(0)
        assert Command().decide(final(b"echo  ")) == flush(6)

    def test_long_blank_run_is_retired(self) -> None:
        blanks = b" \t" * 5000
        assert Command().decide(more(b"echo" + blanks)) == flush(4 + len(blanks) - 1)

    def test_comment_after_kept_blank(self) -> None:
        decision = Command().decide(more(b" #x"))
        assert decision == Decision(1, action=StackAction.push(Comment()))


class TestRoot:
    """The top level dispatches every command start."""

    def test_empty(self) -> None:
        assert Root().decide(more(b"")) == flush(0)

    def test_blank_and_separators(self) -> None:
        assert Root().decide(final(b" ;\n&")) == flush(4)

    def test_command(self) -> None:
        decision = Root().decide(final(b"\nls -l\n"))
        assert decision == Decision(1, action=StackAction.push(Command(NO_TRIGGER)))

    def test_stray_esac_is_a_keyword(self) -> None:
        decision = Root().decide(final(b"esac\n"))
        assert decision == Decision(0, 4, action=StackAction.push(Keyword()))
