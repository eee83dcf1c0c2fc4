"""Lexer for plang source text."""

from __future__ import annotations

import re

from loguru import logger

from plang.core.errors import LexerError
from plang.surface.tokens import KEYWORDS, Token

_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}


class Lexer:
    """Regex-driven tokenizer.

    Produces a list of tokens ending with a single EOF token. Whitespace
    and ``#`` comments are skipped; newlines only advance the line counter.
    """

    TOKEN_PATTERNS = [
        ("NEWLINE", r"\n|\r\n?"),
        ("WHITESPACE", r"[ \t\f]+"),
        ("COMMENT", r"#[^\n]*"),
        # Keywords are matched as identifiers and reclassified
        ("IDENT", r"[A-Za-z_][A-Za-z0-9_]*"),
        ("ICONST", r"[0-9]+"),
        ("SCONST", r'"(?:[^"\\\n]|\\.)*"'),
        ("UNTERMINATED", r'"'),
        ("PLUS", r"\+"),
        ("MINUS", r"-"),
        ("STAR", r"\*"),
        ("SLASH", r"/"),
        ("BANG", r"!"),
        ("EQUALS", r"="),
        ("LPAREN", r"\("),
        ("RPAREN", r"\)"),
        ("SC", r";"),
    ]

    _pattern = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in TOKEN_PATTERNS))

    def __init__(self, source: str, filename: str = "<stdin>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source."""
        tokens: list[Token] = []
        while self.pos < len(self.source):
            match = self._pattern.match(self.source, self.pos)
            if match is None:
                raise LexerError(f"Unexpected character {self.source[self.pos]!r}", self.line)

            kind = match.lastgroup
            text = match.group()
            self.pos = match.end()

            if kind == "NEWLINE":
                self.line += 1
            elif kind in ("WHITESPACE", "COMMENT"):
                continue
            elif kind == "UNTERMINATED":
                raise LexerError("Unterminated string constant", self.line)
            elif kind == "IDENT" and text in KEYWORDS:
                tokens.append(Token(text.upper(), text, self.line))
            elif kind == "ICONST":
                tokens.append(Token(kind, self._check_integer(text), self.line))
            elif kind == "SCONST":
                tokens.append(Token(kind, self._decode_string(text[1:-1]), self.line))
            else:
                tokens.append(Token(kind, text, self.line))

        tokens.append(Token("EOF", "", self.line))
        logger.debug("lexer.done file={} tokens={}", self.filename, len(tokens))
        return tokens

    def _check_integer(self, text: str) -> str:
        try:
            int(text)
        except ValueError as e:
            raise LexerError(f"Integer constant too long ({len(text)} digits)", self.line) from e
        return text

    def _decode_string(self, body: str) -> str:
        chars: list[str] = []
        i = 0
        while i < len(body):
            ch = body[i]
            if ch == "\\":
                escape = body[i + 1]
                if escape not in _ESCAPES:
                    raise LexerError(f"Unknown escape sequence \\{escape}", self.line)
                chars.append(_ESCAPES[escape])
                i += 2
            else:
                chars.append(ch)
                i += 1
        return "".join(chars)


def lex(source: str, filename: str = "<stdin>") -> list[Token]:
    """Convenience function to tokenize source."""
    return Lexer(source, filename).tokenize()
