"""Interpreter and runtime values."""

from plang.eval.environment import Environment
from plang.eval.machine import Evaluator
from plang.eval.value import UNIT, Value, VInt, VString, VUnit

__all__ = [
    "Evaluator",
    "Environment",
    "Value",
    "VInt",
    "VString",
    "VUnit",
    "UNIT",
]
