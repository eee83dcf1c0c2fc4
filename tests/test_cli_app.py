import importlib
import sys

import pytest
from typer.testing import CliRunner

cli_app_module = importlib.import_module("plang.cli.app")
runner = CliRunner()


def test_run_prints_program_output(program_file) -> None:
    path = program_file('let x = (3 + 4) * 2;\nprint x;\nprint "\\n";\n')
    result = runner.invoke(cli_app_module.app, ["run", str(path)])
    assert result.exit_code == 0
    assert result.output == "14\n"


def test_run_fixed_loop_by_default(program_file) -> None:
    path = program_file("loop 0 begin print 1; end;")
    result = runner.invoke(cli_app_module.app, ["run", str(path)])
    assert result.exit_code == 0
    assert result.output == "1111"


def test_run_loop_options(program_file) -> None:
    path = program_file("let i = 3; loop !!i begin print i; let i = i - 1; end;")
    result = runner.invoke(cli_app_module.app, ["run", str(path), "--loop-mode", "conditional"])
    assert result.exit_code == 0
    assert result.output == "321"

    result = runner.invoke(cli_app_module.app, ["run", str(path), "--loop-iterations", "2"])
    assert result.exit_code == 0
    assert result.output == "32"


def test_run_rejects_unknown_loop_mode(program_file) -> None:
    path = program_file("print 1;")
    result = runner.invoke(cli_app_module.app, ["run", str(path), "--loop-mode", "forever"])
    assert result.exit_code == 2


def test_run_reports_runtime_error(program_file) -> None:
    path = program_file("print 1;\nprint y;\nprint 2;")
    result = runner.invoke(cli_app_module.app, ["run", str(path)])
    assert result.exit_code == 1
    assert "RUNTIME ERROR at line 2: Symbol y not defined" in result.output
    assert result.output.startswith("1")


def test_run_reports_value_error(program_file) -> None:
    path = program_file("print 1 / 0;")
    result = runner.invoke(cli_app_module.app, ["run", str(path)])
    assert result.exit_code == 1
    assert "RUNTIME ERROR at line 1: Division by zero" in result.output


def test_run_reports_syntax_error(program_file) -> None:
    path = program_file("print 1")
    result = runner.invoke(cli_app_module.app, ["run", str(path)])
    assert result.exit_code == 1
    assert "line 1: Expected ';', found end of input" in result.output


def test_run_check_refuses_use_before_let(program_file) -> None:
    path = program_file("print a;\nlet a = 1;")
    result = runner.invoke(cli_app_module.app, ["run", str(path), "--check"])
    assert result.exit_code == 1
    assert ":1: UNDECLARED VARIABLE a" in result.output


def test_run_missing_file(tmp_path) -> None:
    result = runner.invoke(cli_app_module.app, ["run", str(tmp_path / "nope.pl")])
    assert result.exit_code == 2
    assert "Cannot read" in result.output


def test_check_clean_program(program_file) -> None:
    path = program_file("let a = 1; print a;")
    result = runner.invoke(cli_app_module.app, ["check", str(path)])
    assert result.exit_code == 0
    assert result.output.strip().endswith(": ok")


def test_check_reports_each_use(program_file) -> None:
    path = program_file("let a = b;\nprint c;")
    result = runner.invoke(cli_app_module.app, ["check", str(path)])
    assert result.exit_code == 1
    assert ":1: UNDECLARED VARIABLE b" in result.output
    assert ":2: UNDECLARED VARIABLE c" in result.output


def test_repl_command_invokes_repl(monkeypatch) -> None:
    called = {}

    class _FakeRepl:
        def __init__(self, settings=None):
            called["settings"] = (settings.loop_mode, settings.loop_iterations, settings.loop_limit)

        def run(self) -> None:
            called["run"] = True

    monkeypatch.setattr(cli_app_module, "REPL", _FakeRepl)
    result = runner.invoke(
        cli_app_module.app,
        ["repl", "--loop-mode", "conditional", "--loop-iterations", "2", "--loop-limit", "9"],
    )
    assert result.exit_code == 0
    assert called == {"settings": ("conditional", 2, 9), "run": True}


def test_repl_rejects_unknown_loop_mode() -> None:
    result = runner.invoke(cli_app_module.app, ["repl", "--loop-mode", "forever"])
    assert result.exit_code == 2


@pytest.mark.skipif(
    getattr(sys, "get_int_max_str_digits", lambda: 0)() == 0,
    reason="interpreter has no integer string conversion limit",
)
def test_run_reports_integer_too_large_to_print(program_file) -> None:
    squarings = "let x = x * x;\n" * 9
    path = program_file("let x = 1000000000;\n" + squarings + "print x;\n")
    result = runner.invoke(cli_app_module.app, ["run", str(path)])
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "RUNTIME ERROR at line 11: Integer too large to print" in result.output


@pytest.mark.skipif(
    getattr(sys, "get_int_max_str_digits", lambda: 0)() == 0,
    reason="interpreter has no integer string conversion limit",
)
def test_run_reports_integer_constant_too_long(program_file) -> None:
    path = program_file("print " + "9" * 5000 + ";")
    result = runner.invoke(cli_app_module.app, ["run", str(path)])
    assert result.exit_code == 1
    assert "line 1: Integer constant too long (5000 digits)" in result.output


def test_run_long_operator_chain(program_file) -> None:
    path = program_file("print " + "+".join(["1"] * 3000) + ";")
    result = runner.invoke(cli_app_module.app, ["run", str(path), "--check"])
    assert result.exit_code == 0
    assert result.output == "3000"


def test_run_reports_deep_nesting(program_file) -> None:
    path = program_file("print " + "(" * 3000 + "1" + ")" * 3000 + ";")
    result = runner.invoke(cli_app_module.app, ["run", str(path)])
    assert result.exit_code == 1
    assert "Expression nested too deeply" in result.output
    assert not isinstance(result.exception, RecursionError)
