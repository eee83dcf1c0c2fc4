"""Test configuration and shared fixtures."""

import io
import os
from pathlib import Path
from typing import Callable

import pytest

from plang.config.settings import EvalSettings
from plang.driver import run_source
from plang.eval.environment import Environment


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path: Path) -> None:
    """Keep ambient PLANG_* variables and .env files out of every test."""
    for name in list(os.environ):
        if name.upper().startswith("PLANG_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def program_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write program text to a temporary .pl file and return its path."""

    def _write(source: str) -> Path:
        path = tmp_path / "program.pl"
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def run_program() -> Callable[..., tuple[Environment, str]]:
    """Run program text, returning the final environment and printed output."""

    def _run(source: str, **settings) -> tuple[Environment, str]:
        out = io.StringIO()
        env = run_source(source, out=out, settings=EvalSettings(**settings))
        return env, out.getvalue()

    return _run
