"""Program driver: parse source text and run it."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, TextIO

from loguru import logger

from plang.config.settings import EvalSettings
from plang.core.ast import Identifier, Node
from plang.core.errors import NestingTooDeep
from plang.core.traversal import find_use_before_let
from plang.eval.environment import Environment
from plang.eval.machine import Evaluator
from plang.surface.parser import parse_program


@contextmanager
def nesting_guard() -> Iterator[None]:
    """Report stack exhaustion from deeply nested source as a plang error."""
    try:
        yield
    except RecursionError as e:
        raise NestingTooDeep() from e


def parse_source(source: str, filename: str = "<stdin>") -> Node:
    """Parse program text into its root node."""
    with nesting_guard():
        return parse_program(source, filename)


def check_source(source: str, filename: str = "<stdin>") -> list[Identifier]:
    """Return identifiers used before any let of the same name."""
    return find_use_before_let(parse_source(source, filename))


def evaluate_source(source: str, evaluator: Evaluator, env: Environment, filename: str = "<stdin>") -> None:
    """Parse and evaluate source with an existing evaluator and environment."""
    program = parse_source(source, filename)
    logger.debug("driver.run file={}", filename)
    with nesting_guard():
        evaluator.evaluate(program, env)


def run_source(
    source: str,
    env: Environment | None = None,
    out: TextIO | None = None,
    settings: EvalSettings | None = None,
    filename: str = "<stdin>",
) -> Environment:
    """Parse and evaluate a program.

    Args:
        source: Program text
        env: Environment to evaluate in; a fresh one when omitted
        out: Stream receiving print output (stdout by default)
        settings: Evaluation settings (loaded from the environment by default)
        filename: Name used in diagnostics

    Returns:
        The environment after evaluation

    Raises:
        PlangError: on lexical, syntax or runtime errors
    """
    if env is None:
        env = Environment()
    evaluate_source(source, Evaluator(settings=settings, out=out), env, filename)
    return env
