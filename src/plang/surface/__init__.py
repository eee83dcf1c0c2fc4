"""Surface language: tokens, lexer, and parser."""

from plang.surface.lexer import Lexer, lex
from plang.surface.parser import Parser, parse_program
from plang.surface.tokens import KEYWORDS, Token

__all__ = [
    "KEYWORDS",
    "Token",
    "Lexer",
    "lex",
    "Parser",
    "parse_program",
]
