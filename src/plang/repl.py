"""Interactive REPL for plang."""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

from plang.config.settings import EvalSettings
from plang.core.errors import PlangError
from plang.driver import evaluate_source
from plang.eval.environment import Environment
from plang.eval.machine import Evaluator


class REPL:
    """Read-Eval-Print Loop over one persistent environment.

    Each input line is parsed as a statement list and evaluated in the
    same environment, so bindings survive between lines.
    """

    def __init__(
        self,
        settings: EvalSettings | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.env = Environment()
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.evaluator = Evaluator(settings=settings, out=self.out)

    def run(self) -> None:
        """Run the REPL until :quit or end of input."""
        self.out.write("plang REPL\nType :quit to exit, :help for commands\n")
        while True:
            try:
                line = input("> ")
            except EOFError:
                self.out.write("\n")
                break
            except KeyboardInterrupt:
                self.out.write("\nInterrupted\n")
                continue
            if not self.handle_line(line):
                break

    def handle_line(self, line: str) -> bool:
        """Handle one input line. Returns False when the REPL should stop."""
        stripped = line.strip()
        if not stripped:
            return True
        if stripped.startswith(":"):
            return self._handle_command(stripped)
        self._evaluate(line)
        return True

    def _handle_command(self, line: str) -> bool:
        match line.split()[0]:
            case ":quit" | ":q":
                return False
            case ":help" | ":h":
                self.out.write(":env     show bindings\n:quit    exit\n")
            case ":env":
                for name in self.env:
                    self.out.write(f"{name} = {self.env.lookup(name)}\n")
            case cmd:
                self.err.write(f"Unknown command: {cmd}\n")
        return True

    def _evaluate(self, source: str) -> None:
        try:
            evaluate_source(source, self.evaluator, self.env, filename="<repl>")
        except PlangError as e:
            logger.debug("repl.error error={}", e)
            self.err.write(f"Error: {e}\n")
            return
        self.out.write("\n")
