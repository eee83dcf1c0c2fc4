"""Typer CLI entrypoints."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger

from plang.config.settings import EvalSettings, load_settings
from plang.core.errors import EvaluationError, PlangError, ValueOperationError
from plang.driver import check_source, run_source
from plang.logging_utils import configure_logging
from plang.repl import REPL

app = typer.Typer(name="plang", help="Tree-walking interpreter for the plang language", add_completion=False)


class LoopModeOption(str, Enum):
    fixed = "fixed"
    conditional = "conditional"


LoopModeArg = Annotated[Optional[LoopModeOption], typer.Option("--loop-mode", help="Loop semantics.")]
LoopIterationsArg = Annotated[Optional[int], typer.Option("--loop-iterations", min=0, help="Body runs per fixed loop.")]
LoopLimitArg = Annotated[Optional[int], typer.Option("--loop-limit", min=1, help="Iteration cap for conditional loops.")]


def _settings(loop_mode: LoopModeOption | None, loop_iterations: int | None, loop_limit: int | None) -> EvalSettings:
    return load_settings(
        loop_mode=loop_mode.value if loop_mode is not None else None,
        loop_iterations=loop_iterations,
        loop_limit=loop_limit,
    )


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Cannot read {path}: {e.strerror}", err=True)
        raise typer.Exit(code=2) from e


def _report_use_before_let(source: str, filename: str) -> int:
    missing = check_source(source, filename)
    for ident in missing:
        typer.echo(f"{filename}:{ident.line}: UNDECLARED VARIABLE {ident.name}", err=True)
    return len(missing)


@app.command()
def run(
    path: Annotated[Path, typer.Argument(help="Program file to run.")],
    loop_mode: LoopModeArg = None,
    loop_iterations: LoopIterationsArg = None,
    loop_limit: LoopLimitArg = None,
    check: Annotated[bool, typer.Option("--check", help="Refuse to run if a variable is used before let.")] = False,
) -> None:
    """Run a program file."""
    configure_logging()
    settings = _settings(loop_mode, loop_iterations, loop_limit)
    source = _read_source(path)
    logger.info("run.start file={} loop_mode={}", str(path), settings.loop_mode)

    try:
        if check and _report_use_before_let(source, str(path)):
            raise typer.Exit(code=1)
        run_source(source, settings=settings, filename=str(path))
    except (EvaluationError, ValueOperationError) as e:
        logger.info("run.error file={} error={}", str(path), e)
        line = e.line if e.line is not None else 0
        typer.echo(f"\nRUNTIME ERROR at line {line}: {e.message}", err=True)
        raise typer.Exit(code=1) from e
    except PlangError as e:
        typer.echo(f"{path}:{e}", err=True)
        raise typer.Exit(code=1) from e


@app.command()
def check(path: Annotated[Path, typer.Argument(help="Program file to check.")]) -> None:
    """Report variables used before any let binds them."""
    configure_logging()
    source = _read_source(path)
    try:
        count = _report_use_before_let(source, str(path))
    except PlangError as e:
        typer.echo(f"{path}:{e}", err=True)
        raise typer.Exit(code=1) from e
    if count:
        raise typer.Exit(code=1)
    typer.echo(f"{path}: ok")


@app.command()
def repl(
    loop_mode: LoopModeArg = None,
    loop_iterations: LoopIterationsArg = None,
    loop_limit: LoopLimitArg = None,
) -> None:
    """Start an interactive session."""
    configure_logging(profile="repl")
    REPL(settings=_settings(loop_mode, loop_iterations, loop_limit)).run()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
