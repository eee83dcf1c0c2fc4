"""Token definitions for the plang lexer."""

from __future__ import annotations

from dataclasses import dataclass

KEYWORDS = frozenset({"let", "print", "if", "loop", "begin", "end"})


@dataclass(frozen=True)
class Token:
    """A lexical token.

    ``type`` is the token kind (``"IDENT"``, ``"ICONST"``, ``"LET"``, ...).
    ``lexeme`` is the matched text; for string constants it holds the
    decoded contents without the surrounding quotes.
    """

    type: str
    lexeme: str
    line: int

    def __str__(self) -> str:
        return f"{self.type}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type!r}, {self.lexeme!r}, line={self.line})"
