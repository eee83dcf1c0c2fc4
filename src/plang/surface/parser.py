"""Recursive descent parser for plang.

Grammar:
    program   ::= stmt_list EOF
    stmt_list ::= stmt ";" { stmt ";" }
    stmt      ::= "let" IDENT "=" expr
                | "print" expr
                | "if" expr "begin" stmt_list "end"
                | "loop" expr "begin" stmt_list "end"
    expr      ::= term { ("+" | "-") term }
    term      ::= unary { ("*" | "/") unary }
    unary     ::= "!" unary | primary
    primary   ::= IDENT | ICONST | SCONST | "(" expr ")"
"""

from __future__ import annotations

from plang.core.ast import (
    BinaryOp,
    BinaryOpKind,
    Identifier,
    If,
    IntLiteral,
    Let,
    Loop,
    Node,
    Not,
    Print,
    StatementList,
    StringLiteral,
)
from plang.core.errors import ParseError
from plang.surface.lexer import Lexer
from plang.surface.tokens import Token

_ADDITIVE = {"PLUS": BinaryOpKind.PLUS, "MINUS": BinaryOpKind.MINUS}
_MULTIPLICATIVE = {"STAR": BinaryOpKind.TIMES, "SLASH": BinaryOpKind.DIVIDE}


class Parser:
    """Builds an AST from a token list."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    def _current(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]

    def _advance(self) -> Token:
        token = self._current()
        if self.pos < len(self.tokens):
            self.pos += 1
        return token

    def _match(self, *token_types: str) -> bool:
        return self._current().type in token_types

    def _expect(self, token_type: str, what: str) -> Token:
        token = self._current()
        if token.type != token_type:
            found = "end of input" if token.type == "EOF" else repr(token.lexeme)
            raise ParseError(f"Expected {what}, found {found}", token.line)
        return self._advance()

    def parse(self) -> Node:
        """Parse a whole program."""
        program = self.parse_statement_list()
        self._expect("EOF", "end of input")
        return program

    def parse_statement_list(self) -> Node:
        statements = [self._parse_terminated_statement()]
        while not self._match("END", "EOF"):
            statements.append(self._parse_terminated_statement())

        # Build the right-nested chain from the tail
        chain: StatementList | None = None
        for statement in reversed(statements):
            chain = StatementList(statement, chain)
        assert chain is not None
        return chain

    def _parse_terminated_statement(self) -> Node:
        statement = self.parse_statement()
        self._expect("SC", "';'")
        return statement

    def parse_statement(self) -> Node:
        token = self._current()
        match token.type:
            case "LET":
                self._advance()
                name = self._expect("IDENT", "identifier")
                self._expect("EQUALS", "'='")
                return Let.from_token(name, self.parse_expression())
            case "PRINT":
                self._advance()
                return Print(self.parse_expression(), line=token.line)
            case "IF":
                self._advance()
                condition, body = self._parse_guarded_block()
                return If(condition, body, line=token.line)
            case "LOOP":
                self._advance()
                condition, body = self._parse_guarded_block()
                return Loop(condition, body, line=token.line)
            case "EOF":
                raise ParseError("Expected a statement, found end of input", token.line)
            case _:
                raise ParseError(f"Expected a statement, found {token.lexeme!r}", token.line)

    def _parse_guarded_block(self) -> tuple[Node, Node]:
        condition = self.parse_expression()
        self._expect("BEGIN", "'begin'")
        body = self.parse_statement_list()
        self._expect("END", "'end'")
        return condition, body

    def parse_expression(self) -> Node:
        left = self.parse_term()
        while self._match(*_ADDITIVE):
            op = self._advance()
            left = BinaryOp(_ADDITIVE[op.type], left, self.parse_term(), line=op.line)
        return left

    def parse_term(self) -> Node:
        left = self.parse_unary()
        while self._match(*_MULTIPLICATIVE):
            op = self._advance()
            left = BinaryOp(_MULTIPLICATIVE[op.type], left, self.parse_unary(), line=op.line)
        return left

    def parse_unary(self) -> Node:
        if self._match("BANG"):
            bang = self._advance()
            return Not(self.parse_unary(), line=bang.line)
        return self.parse_primary()

    def parse_primary(self) -> Node:
        token = self._current()
        match token.type:
            case "IDENT":
                return Identifier.from_token(self._advance())
            case "ICONST":
                return IntLiteral.from_token(self._advance())
            case "SCONST":
                return StringLiteral.from_token(self._advance())
            case "LPAREN":
                self._advance()
                expr = self.parse_expression()
                self._expect("RPAREN", "')'")
                return expr
            case "EOF":
                raise ParseError("Expected an expression, found end of input", token.line)
            case _:
                raise ParseError(f"Expected an expression, found {token.lexeme!r}", token.line)


def parse_program(source: str, filename: str = "<stdin>") -> Node:
    """Tokenize and parse a complete program."""
    tokens = Lexer(source, filename).tokenize()
    return Parser(tokens).parse()
