"""Error types for the plang interpreter."""

from __future__ import annotations


class PlangError(Exception):
    """Base class for all plang errors."""

    line: int | None

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class LexerError(PlangError):
    """Invalid character or malformed literal in the source text."""


class ParseError(PlangError):
    """Token stream does not match the grammar."""


class EvaluationError(PlangError):
    """Runtime error raised while evaluating a program."""


class UndefinedSymbol(EvaluationError):
    """Identifier looked up before any binding for it exists."""

    def __init__(self, name: str, line: int | None = None):
        self.name = name
        super().__init__(f"Symbol {name} not defined", line)


class LoopLimitExceeded(EvaluationError):
    """A conditional loop ran past the configured iteration limit."""

    def __init__(self, limit: int, line: int | None = None):
        self.limit = limit
        super().__init__(f"Loop exceeded {limit} iterations", line)


class ValueOperationError(PlangError):
    """Operator applied to values it does not support.

    Raised by the value layer (type mismatch, division by zero).
    The evaluator propagates these untouched.
    """


class NestingTooDeep(EvaluationError):
    """Program nests expressions deeper than the interpreter stack allows."""

    def __init__(self, line: int | None = None):
        super().__init__("Expression nested too deeply", line)
