"""Runtime values for the plang interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from plang.core.errors import ValueOperationError


@dataclass(frozen=True)
class VInt:
    """Runtime integer value.

    Created by evaluating IntLiteral nodes and integer arithmetic.
    """

    value: int

    def __str__(self) -> str:
        try:
            return str(self.value)
        except ValueError:
            # Past the interpreter's integer string conversion limit
            return f"<int of {self.value.bit_length()} bits>"


@dataclass(frozen=True)
class VString:
    """Runtime string value."""

    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class VUnit:
    """Empty value returned by statements."""

    def __str__(self) -> str:
        return "()"


# Sum type for all values
Value = Union[VInt, VString, VUnit]

UNIT = VUnit()


def kind(value: Value) -> str:
    """Name of the value's kind, for error messages."""
    match value:
        case VInt():
            return "int"
        case VString():
            return "string"
        case _:
            return "unit"


def _unsupported(op: str, x: Value, y: Value) -> ValueOperationError:
    return ValueOperationError(f"Unsupported operand kinds for {op}: {kind(x)} and {kind(y)}")


def add(x: Value, y: Value) -> Value:
    """Integer addition or string concatenation."""
    match x, y:
        case VInt(a), VInt(b):
            return VInt(a + b)
        case VString(a), VString(b):
            return VString(a + b)
    raise _unsupported("+", x, y)


def subtract(x: Value, y: Value) -> Value:
    """Integer subtraction."""
    match x, y:
        case VInt(a), VInt(b):
            return VInt(a - b)
    raise _unsupported("-", x, y)


def multiply(x: Value, y: Value) -> Value:
    """Integer multiplication or string repetition."""
    match x, y:
        case VInt(a), VInt(b):
            return VInt(a * b)
        case (VString(s), VInt(n)) | (VInt(n), VString(s)):
            if n < 0:
                raise ValueOperationError(f"Cannot repeat a string {n} times")
            return VString(s * n)
    raise _unsupported("*", x, y)


def divide(x: Value, y: Value) -> Value:
    """Integer division, truncating toward zero."""
    match x, y:
        case VInt(a), VInt(b):
            if b == 0:
                raise ValueOperationError("Division by zero")
            quotient = abs(a) // abs(b)
            return VInt(quotient if (a < 0) == (b < 0) else -quotient)
    raise _unsupported("/", x, y)


def negate(x: Value) -> Value:
    """Boolean negation: zero becomes 1, anything else becomes 0."""
    match x:
        case VInt(a):
            return VInt(1 if a == 0 else 0)
    raise ValueOperationError(f"Unsupported operand kind for !: {kind(x)}")


def as_int(x: Value) -> int:
    """Extract the integer held by a value."""
    match x:
        case VInt(a):
            return a
    raise ValueOperationError(f"Expected an int value, got {kind(x)}")


def render(x: Value) -> str:
    """Textual form written by print statements."""
    match x:
        case VInt(a):
            try:
                return str(a)
            except ValueError as e:
                raise ValueOperationError(f"Integer too large to print ({a.bit_length()} bits)") from e
        case VString(s):
            return s
        case _:
            return ""
