"""Core language: AST, errors, and static passes."""

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
from plang.core.errors import (
    EvaluationError,
    LexerError,
    LoopLimitExceeded,
    NestingTooDeep,
    ParseError,
    PlangError,
    UndefinedSymbol,
    ValueOperationError,
)
from plang.core.traversal import collect_let_before_use, find_use_before_let, traverse

__all__ = [
    # AST
    "Node",
    "StatementList",
    "Let",
    "Print",
    "Loop",
    "If",
    "BinaryOp",
    "BinaryOpKind",
    "Not",
    "IntLiteral",
    "StringLiteral",
    "Identifier",
    # Errors
    "PlangError",
    "LexerError",
    "ParseError",
    "EvaluationError",
    "UndefinedSymbol",
    "LoopLimitExceeded",
    "NestingTooDeep",
    "ValueOperationError",
    # Passes
    "traverse",
    "collect_let_before_use",
    "find_use_before_let",
]
