"""Abstract syntax tree for plang programs.

Nodes are immutable dataclasses. Each node owns its children through its
fields, so a tree is always finite and acyclic. Every node records the
source line it came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Union

if TYPE_CHECKING:
    from plang.surface.tokens import Token


class BinaryOpKind(Enum):
    """Arithmetic operators."""

    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NodeBase:
    """Base class for AST nodes.

    Provides the classification queries used by diagnostics. Variants
    override only the queries that apply to them.
    """

    line: int = field(default=0, kw_only=True, compare=False)

    def children(self) -> Iterator[Node]:
        """Yield the child nodes, left before right."""
        return iter(())

    def is_identifier(self) -> bool:
        return False

    def is_let_binding(self) -> bool:
        return False

    def bound_name(self) -> str:
        return ""

    def is_negation(self) -> int:
        return 0


@dataclass(frozen=True)
class StatementList(NodeBase):
    """Statement sequencing: first, then the rest of the chain."""

    first: Node
    rest: Node | None = None

    def children(self) -> Iterator[Node]:
        yield self.first
        if self.rest is not None:
            yield self.rest

    def __str__(self) -> str:
        if self.rest is None:
            return f"{self.first};"
        return f"{self.first}; {self.rest}"


@dataclass(frozen=True)
class Let(NodeBase):
    """Binding statement: let name = value."""

    name: str
    value: Node

    @classmethod
    def from_token(cls, token: Token, value: Node) -> Let:
        return cls(token.lexeme, value, line=token.line)

    def children(self) -> Iterator[Node]:
        yield self.value

    def is_let_binding(self) -> bool:
        return True

    def bound_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        return f"let {self.name} = {self.value}"


@dataclass(frozen=True)
class Print(NodeBase):
    """Output statement."""

    expr: Node

    def children(self) -> Iterator[Node]:
        yield self.expr

    def __str__(self) -> str:
        return f"print {self.expr}"


@dataclass(frozen=True)
class Loop(NodeBase):
    """Loop statement: loop condition begin body end."""

    condition: Node
    body: Node

    def children(self) -> Iterator[Node]:
        yield self.condition
        yield self.body

    def __str__(self) -> str:
        return f"loop {self.condition} begin {self.body} end"


@dataclass(frozen=True)
class If(NodeBase):
    """Conditional statement without an else branch."""

    condition: Node
    body: Node

    def children(self) -> Iterator[Node]:
        yield self.condition
        yield self.body

    def __str__(self) -> str:
        return f"if {self.condition} begin {self.body} end"


@dataclass(frozen=True)
class BinaryOp(NodeBase):
    """Arithmetic expression: left op right."""

    op: BinaryOpKind
    left: Node
    right: Node

    def children(self) -> Iterator[Node]:
        yield self.left
        yield self.right

    def __str__(self) -> str:
        return f"({self.left} {self.op} {self.right})"


@dataclass(frozen=True)
class Not(NodeBase):
    """Boolean negation: !expr."""

    expr: Node

    def children(self) -> Iterator[Node]:
        yield self.expr

    def is_negation(self) -> int:
        return 1

    def __str__(self) -> str:
        return f"!{self.expr}"


@dataclass(frozen=True)
class IntLiteral(NodeBase):
    """Integer constant."""

    value: int

    @classmethod
    def from_token(cls, token: Token) -> IntLiteral:
        return cls(int(token.lexeme), line=token.line)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StringLiteral(NodeBase):
    """String constant."""

    value: str

    @classmethod
    def from_token(cls, token: Token) -> StringLiteral:
        return cls(token.lexeme, line=token.line)

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class Identifier(NodeBase):
    """Variable reference."""

    name: str

    @classmethod
    def from_token(cls, token: Token) -> Identifier:
        return cls(token.lexeme, line=token.line)

    def is_identifier(self) -> bool:
        return True

    def bound_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


# Sum type for all nodes
Node = Union[
    StatementList,
    Let,
    Print,
    Loop,
    If,
    BinaryOp,
    Not,
    IntLiteral,
    StringLiteral,
    Identifier,
]
