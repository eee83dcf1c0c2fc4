"""Tests for the lexer."""

import sys

import pytest

from plang.core.errors import LexerError
from plang.surface.lexer import Lexer, lex
from plang.surface.tokens import Token


def types(source: str) -> list[str]:
    return [t.type for t in lex(source)]


class TestBasicTokens:
    def test_empty_source(self):
        assert lex("") == [Token("EOF", "", 1)]

    def test_keywords(self):
        assert types("let print if loop begin end") == ["LET", "PRINT", "IF", "LOOP", "BEGIN", "END", "EOF"]

    def test_keywords_are_case_sensitive(self):
        assert types("Let PRINT") == ["IDENT", "IDENT", "EOF"]

    def test_operators(self):
        assert types("+ - * / ! = ( ) ;") == [
            "PLUS",
            "MINUS",
            "STAR",
            "SLASH",
            "BANG",
            "EQUALS",
            "LPAREN",
            "RPAREN",
            "SC",
            "EOF",
        ]

    def test_identifiers_and_numbers(self):
        tokens = lex("x_1 42 letter")
        assert [(t.type, t.lexeme) for t in tokens[:-1]] == [
            ("IDENT", "x_1"),
            ("ICONST", "42"),
            ("IDENT", "letter"),
        ]

    def test_comments_skipped(self):
        assert types("# nothing here\nprint 1; # done") == ["PRINT", "ICONST", "SC", "EOF"]


class TestStrings:
    def test_string_lexeme_is_decoded(self):
        token = lex('"hello world"')[0]
        assert token == Token("SCONST", "hello world", 1)

    def test_escapes(self):
        assert lex(r'"a\nb\t\"q\"\\"')[0].lexeme == 'a\nb\t"q"\\'

    def test_unknown_escape(self):
        with pytest.raises(LexerError, match="Unknown escape"):
            lex(r'"\q"')

    def test_unterminated_string(self):
        with pytest.raises(LexerError) as exc_info:
            lex('print 1;\nprint "oops\n')
        assert exc_info.value.line == 2


class TestLines:
    def test_line_numbers(self):
        tokens = lex("let a = 1;\n\nprint a;")
        assert [t.line for t in tokens] == [1, 1, 1, 1, 1, 3, 3, 3, 3]

    def test_windows_newlines(self):
        tokens = Lexer("a\r\nb\rc").tokenize()
        assert [t.line for t in tokens] == [1, 2, 3, 3]

    def test_unexpected_character(self):
        with pytest.raises(LexerError) as exc_info:
            lex("let a = 1;\nlet b = $;")
        assert exc_info.value.line == 2
        assert "'$'" in exc_info.value.message


@pytest.mark.skipif(
    getattr(sys, "get_int_max_str_digits", lambda: 0)() == 0,
    reason="interpreter has no integer string conversion limit",
)
def test_integer_constant_too_long():
    with pytest.raises(LexerError) as exc_info:
        lex("let a = 1;\nprint " + "9" * 5000 + ";")
    assert exc_info.value.line == 2
    assert exc_info.value.message == "Integer constant too long (5000 digits)"
