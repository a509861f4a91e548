"""Tests for the PL/0 lexer."""

from __future__ import annotations

import pytest

from pl0lib.parser.lexer import Lexer, tokenize
from pl0lib.parser.tokens import KEYWORDS, Token, TokenKind

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def lex(source: str) -> list[tuple[TokenKind, str]]:
    """Tokenize *source* and return ``(kind, lexeme)`` pairs."""
    return [(t.kind, t.lexeme) for t in tokenize(source, "<test>")]


def reconstruct(source: str, tokens: list[Token]) -> str:
    """Rebuild *source* from token spans plus the whitespace between them."""
    parts: list[str] = []
    pos = 0
    for tok in tokens:
        assert tok.location.offset is not None
        gap = source[pos : tok.location.offset]
        assert gap.strip(" \t\r\n") == "", f"non-whitespace skipped: {gap!r}"
        parts.append(gap)
        parts.append(tok.lexeme)
        pos = tok.location.offset + len(tok.lexeme)
    tail = source[pos:]
    assert tail.strip(" \t\r\n") == ""
    parts.append(tail)
    return "".join(parts)


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------


class TestKeywords:
    @pytest.mark.parametrize("word", sorted(KEYWORDS))
    def test_every_keyword(self, word: str) -> None:
        assert lex(word) == [(TokenKind.KEYWORD, word)]

    def test_keyword_takes_priority(self) -> None:
        assert lex("begin") == [(TokenKind.KEYWORD, "begin")]

    def test_keyword_prefix_is_identifier(self) -> None:
        assert lex("beginner") == [(TokenKind.IDENTIFIER, "beginner")]

    def test_keyword_with_digit_suffix_is_identifier(self) -> None:
        assert lex("end1") == [(TokenKind.IDENTIFIER, "end1")]

    def test_keywords_are_case_sensitive(self) -> None:
        assert lex("BEGIN") == [(TokenKind.IDENTIFIER, "BEGIN")]

    def test_else_is_not_reserved(self) -> None:
        assert lex("else") == [(TokenKind.IDENTIFIER, "else")]


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


class TestIdentifiers:
    def test_simple_ident(self) -> None:
        assert lex("foo") == [(TokenKind.IDENTIFIER, "foo")]

    def test_letters_and_digits(self) -> None:
        assert lex("x1y2") == [(TokenKind.IDENTIFIER, "x1y2")]

    def test_underscore_is_not_part_of_identifier(self) -> None:
        assert lex("a_b") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.UNKNOWN, "_"),
            (TokenKind.IDENTIFIER, "b"),
        ]

    def test_leading_digit_splits(self) -> None:
        assert lex("1abc") == [
            (TokenKind.INTEGER, "1"),
            (TokenKind.IDENTIFIER, "abc"),
        ]

    def test_case_preserved(self) -> None:
        assert lex("Count") == [(TokenKind.IDENTIFIER, "Count")]


# ---------------------------------------------------------------------------
# Integer literals
# ---------------------------------------------------------------------------


class TestIntLiterals:
    def test_zero(self) -> None:
        assert lex("0") == [(TokenKind.INTEGER, "0")]

    def test_multi_digit(self) -> None:
        assert lex("1024") == [(TokenKind.INTEGER, "1024")]

    def test_value_is_int(self) -> None:
        (tok,) = tokenize("42")
        assert tok.value == 42

    def test_no_sign_in_literal(self) -> None:
        assert lex("-5") == [(TokenKind.OPERATOR, "-"), (TokenKind.INTEGER, "5")]

    def test_no_decimal_point(self) -> None:
        assert lex("3.14") == [
            (TokenKind.INTEGER, "3"),
            (TokenKind.DELIMITER, "."),
            (TokenKind.INTEGER, "14"),
        ]

    def test_huge_literal_is_one_token(self) -> None:
        digits = "9" * 5000
        tokens = tokenize(digits)
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.INTEGER
        assert tokens[0].lexeme == digits

    def test_huge_literal_value_is_exact(self) -> None:
        (tok,) = tokenize("9" * 5000)
        assert tok.value == 10**5000 - 1

    def test_long_literal_value_across_chunks(self) -> None:
        (tok,) = tokenize("000" + "1" + "0" * 2500)
        assert tok.value == 10**2500


# ---------------------------------------------------------------------------
# Operators and delimiters
# ---------------------------------------------------------------------------


class TestOperators:
    @pytest.mark.parametrize("op", ["+", "-", "*", "/", "=", "<", ">"])
    def test_single_char(self, op: str) -> None:
        assert lex(op) == [(TokenKind.OPERATOR, op)]

    @pytest.mark.parametrize("op", [":=", "<=", ">=", "<>"])
    def test_two_char_longest_match(self, op: str) -> None:
        assert lex(op) == [(TokenKind.OPERATOR, op)]

    def test_assign_is_never_split(self) -> None:
        assert lex(":=") == [(TokenKind.OPERATOR, ":=")]

    def test_lone_colon_is_unknown(self) -> None:
        assert lex(":") == [(TokenKind.UNKNOWN, ":")]

    def test_colon_space_equals(self) -> None:
        assert lex(": =") == [(TokenKind.UNKNOWN, ":"), (TokenKind.OPERATOR, "=")]

    def test_less_then_greater_equal(self) -> None:
        assert lex("<>=") == [(TokenKind.OPERATOR, "<>"), (TokenKind.OPERATOR, "=")]

    def test_greater_less_is_two_tokens(self) -> None:
        assert lex("><") == [(TokenKind.OPERATOR, ">"), (TokenKind.OPERATOR, "<")]

    def test_operator_at_end_of_input(self) -> None:
        assert lex("x <") == [(TokenKind.IDENTIFIER, "x"), (TokenKind.OPERATOR, "<")]


class TestDelimiters:
    @pytest.mark.parametrize("sym", [",", ".", ";", "(", ")"])
    def test_delimiter(self, sym: str) -> None:
        assert lex(sym) == [(TokenKind.DELIMITER, sym)]


# ---------------------------------------------------------------------------
# Whitespace, unknown characters, totality
# ---------------------------------------------------------------------------


class TestWhitespaceAndUnknown:
    def test_empty_source(self) -> None:
        assert lex("") == []

    def test_only_whitespace(self) -> None:
        assert lex(" \t\r\n  ") == []

    def test_whitespace_separates(self) -> None:
        assert lex("a\tb\nc") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.IDENTIFIER, "b"),
            (TokenKind.IDENTIFIER, "c"),
        ]

    @pytest.mark.parametrize("ch", ["!", "?", "#", "{", "$", "_", "\f", "\u00a0"])
    def test_unknown_character(self, ch: str) -> None:
        assert lex(ch) == [(TokenKind.UNKNOWN, ch)]

    def test_unknown_advances_one_character(self) -> None:
        assert lex("!!x") == [
            (TokenKind.UNKNOWN, "!"),
            (TokenKind.UNKNOWN, "!"),
            (TokenKind.IDENTIFIER, "x"),
        ]

    def test_non_ascii_digit_is_unknown(self) -> None:
        assert lex("٣") == [(TokenKind.UNKNOWN, "٣")]

    @pytest.mark.parametrize(
        "source",
        [
            "const a = 1; var b; begin b := a + 1 end.",
            "  x:=y<>z  ;\n\t!? <= >= :: 12ab\r\n",
            "procedure p;\n  begin call p end;\ncall p.",
            ":",
            "",
        ],
    )
    def test_spans_reconstruct_source(self, source: str) -> None:
        assert reconstruct(source, tokenize(source)) == source


# ---------------------------------------------------------------------------
# Locations and restartability
# ---------------------------------------------------------------------------


class TestLocations:
    def test_line_and_column(self) -> None:
        tokens = tokenize("var x;\n  x := 1", "prog.pl0")
        assign = tokens[4]
        assert assign.lexeme == ":="
        assert assign.location.file == "prog.pl0"
        assert assign.location.line == 2
        assert assign.location.column == 5
        assert assign.location.offset == 11

    def test_end_position(self) -> None:
        (tok,) = tokenize("begin")
        assert tok.location.end_line == 1
        assert tok.location.end_column == 6

    def test_retokenize_gives_same_result(self) -> None:
        lexer = Lexer("if odd x then write x", "<test>")
        assert lexer.tokenize() == lexer.tokenize()

    def test_iter_tokens_is_lazy(self) -> None:
        it = Lexer("a b c").iter_tokens()
        first = next(it)
        assert first.lexeme == "a"

    def test_interleaved_passes_are_independent(self) -> None:
        lexer = Lexer("a b c d")
        pairs = [(x.lexeme, y.lexeme) for x, y in zip(lexer.iter_tokens(), lexer.iter_tokens())]
        assert pairs == [("a", "a"), ("b", "b"), ("c", "c"), ("d", "d")]

    def test_tokenize_during_partial_pass(self) -> None:
        lexer = Lexer("var x;\n  x := 1", "<test>")
        it = lexer.iter_tokens()
        assert next(it).lexeme == "var"
        full = lexer.tokenize()
        assert [t.lexeme for t in it] == [t.lexeme for t in full[1:]]
        assert list(lexer.iter_tokens()) == full


class TestTokenDisplay:
    def test_listing_format(self) -> None:
        shown = [str(t) for t in tokenize("x := 10;")]
        assert shown == [
            "Identifier: x",
            "Operator: :=",
            "IntegerLiteral: 10",
            "Delimiter: ;",
        ]

    def test_keyword_and_unknown(self) -> None:
        shown = [str(t) for t in tokenize("begin ?")]
        assert shown == ["Keyword: begin", "Unknown: ?"]

    def test_leading_zeros_displayed_as_value(self) -> None:
        (tok,) = tokenize("007")
        assert str(tok) == "IntegerLiteral: 7"

    def test_matching_helpers(self) -> None:
        kw, op, delim = tokenize("end := ;")
        assert kw.is_keyword("begin", "end")
        assert not kw.is_operator("end")
        assert op.is_operator(":=")
        assert delim.is_delimiter(";")
        assert not delim.is_keyword(";")
