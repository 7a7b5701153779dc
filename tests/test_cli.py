import io
import re

from lispcore.__main__ import main, run_file, run_repl


def test_repl_keeps_state_and_reports_errors():
    stdin = io.StringIO("(define x 2)\n\n(* x 1.5)\n(/ x 0)\nmissing\n")
    stdout = io.StringIO()
    assert run_repl(stdin, stdout) == 0
    lines = [re.sub(r"^(lisp> )+", "", line) for line in stdout.getvalue().splitlines()]
    assert lines == [
        "2",
        "3.0",
        "ArithmeticError: Division by zero",
        "UndefinedVariableError: Undefined variable: missing",
        "",
    ]


def test_run_file(tmp_path):
    script = tmp_path / "counter.lisp"
    script.write_text(
        "; increment a counter\n"
        "(define counter 0)\n"
        "(define counter (+ counter 1))\n"
        "(define counter (+ counter 1))\n"
        "counter\n"
    )
    out = io.StringIO()
    assert run_file(script, out) == 0
    assert out.getvalue().splitlines() == ["0", "1", "2", "2"]


def test_run_file_error(tmp_path, capsys):
    script = tmp_path / "bad.lisp"
    script.write_text("(+ 1 2)\n(+ nope 1)\n")
    out = io.StringIO()
    assert run_file(script, out) == 1
    assert out.getvalue() == ""
    assert "UndefinedVariableError" in capsys.readouterr().err


def test_main_run(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("LISPCORE_PORT", raising=False)
    script = tmp_path / "sum.lisp"
    script.write_text("(+ 1 2 3)")
    assert main(["run", str(script)]) == 0
    assert capsys.readouterr().out == "6\n"


def test_main_missing_file(tmp_path, capsys):
    assert main(["run", str(tmp_path / "absent.lisp")]) == 2
    assert "cannot read" in capsys.readouterr().err


def test_repl_reports_integer_overflow_and_continues():
    squares = "(define x (* x x))\n" * 8
    stdin = io.StringIO(f"(define x {10 ** 19})\n" + squares + "(> x 0)\n")
    stdout = io.StringIO()
    assert run_repl(stdin, stdout) == 0
    lines = [re.sub(r"^(lisp> )+", "", line) for line in stdout.getvalue().splitlines()]
    assert lines[8] == "ArithmeticError: Integer overflow in *"
    assert lines[9] == "1"


def test_run_file_reports_overflow(tmp_path, capsys):
    script = tmp_path / "grow.lisp"
    script.write_text(f"(define x {10 ** 19})\n" + "(define x (* x x))\n" * 8)
    assert run_file(script, io.StringIO()) == 1
    assert "ArithmeticError: Integer overflow in *" in capsys.readouterr().err
