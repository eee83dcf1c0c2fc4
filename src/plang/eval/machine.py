"""Tree-walking evaluator for plang programs."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Callable, Iterator, TextIO

from loguru import logger

from plang.config.settings import EvalSettings
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
from plang.core.errors import LoopLimitExceeded, UndefinedSymbol, ValueOperationError
from plang.eval import value as ops
from plang.eval.environment import Environment
from plang.eval.value import UNIT, Value, VInt, VString


@contextmanager
def _located(node: Node) -> Iterator[None]:
    """Stamp the node's line on value errors that do not carry one yet."""
    try:
        yield
    except ValueOperationError as e:
        if e.line is None:
            e.line = node.line
        raise


class Evaluator:
    """Evaluates AST nodes against an explicit environment.

    Only Let (binding) and Print (output) have side effects. Errors from
    the value layer and from identifier lookup propagate to the caller.
    """

    def __init__(self, settings: EvalSettings | None = None, out: TextIO | None = None) -> None:
        self.settings = settings if settings is not None else EvalSettings()
        self._out = out
        self.binary_impls: dict[BinaryOpKind, Callable[[Value, Value], Value]] = {
            BinaryOpKind.PLUS: ops.add,
            BinaryOpKind.MINUS: ops.subtract,
            BinaryOpKind.TIMES: ops.multiply,
            BinaryOpKind.DIVIDE: ops.divide,
        }

    @property
    def out(self) -> TextIO:
        # Resolved lazily so a redirected sys.stdout is honoured
        return self._out if self._out is not None else sys.stdout

    def evaluate(self, node: Node, env: Environment) -> Value:
        """Evaluate node to a value, left to right, depth first."""
        match node:
            case StatementList():
                # Walk the right-nested chain without recursing on rest
                chain: Node | None = node
                while isinstance(chain, StatementList):
                    self.evaluate(chain.first, env)
                    chain = chain.rest
                if chain is not None:
                    self.evaluate(chain, env)
                return UNIT

            case Let(name, value):
                result = self.evaluate(value, env)
                env.bind(name, result)
                logger.debug("eval.let name={} kind={} line={}", name, ops.kind(result), node.line)
                return UNIT

            case Print(expr):
                result = self.evaluate(expr, env)
                with _located(node):
                    text = ops.render(result)
                self.out.write(text)
                return UNIT

            case Loop(condition, body):
                return self._evaluate_loop(node, condition, body, env)

            case If(condition, body):
                if self._is_true(node, self.evaluate(condition, env)):
                    return self.evaluate(body, env)
                return UNIT

            case BinaryOp():
                return self._evaluate_binary(node, env)

            case Not(expr):
                result = self.evaluate(expr, env)
                with _located(node):
                    return ops.negate(result)

            case IntLiteral(value):
                return VInt(value)

            case StringLiteral(value):
                return VString(value)

            case Identifier(name):
                found = env.lookup(name)
                if found is None:
                    raise UndefinedSymbol(name, node.line)
                return found

            case _:
                raise TypeError(f"Unknown node: {node!r}")

    def _evaluate_binary(self, node: BinaryOp, env: Environment) -> Value:
        """Evaluate a left-nested operator chain without recursing on the left spine.

        The parser builds ``a + b + c`` as ``((a + b) + c)``; long chains would
        otherwise exhaust the Python stack.
        """
        spine: list[BinaryOp] = []
        current: Node = node
        while isinstance(current, BinaryOp):
            spine.append(current)
            current = current.left

        result = self.evaluate(current, env)
        for op_node in reversed(spine):
            right_val = self.evaluate(op_node.right, env)
            with _located(op_node):
                result = self.binary_impls[op_node.op](result, right_val)
        return result

    def _is_true(self, node: Node, result: Value) -> bool:
        with _located(node):
            return ops.as_int(result) == 1

    def _evaluate_loop(self, node: Loop, condition: Node, body: Node, env: Environment) -> Value:
        settings = self.settings
        if settings.loop_mode == "fixed":
            # Condition is evaluated once and never inspected
            self.evaluate(condition, env)
            for _ in range(settings.loop_iterations):
                self.evaluate(body, env)
            logger.debug("eval.loop mode=fixed iterations={} line={}", settings.loop_iterations, node.line)
            return UNIT

        iterations = 0
        while self._is_true(node, self.evaluate(condition, env)):
            if settings.loop_limit is not None and iterations >= settings.loop_limit:
                raise LoopLimitExceeded(settings.loop_limit, node.line)
            self.evaluate(body, env)
            iterations += 1
        logger.debug("eval.loop mode=conditional iterations={} line={}", iterations, node.line)
        return UNIT

    def run(self, program: Node, env: Environment | None = None) -> Environment:
        """Evaluate a whole program and return the environment it left."""
        if env is None:
            env = Environment()
        self.evaluate(program, env)
        return env
