"""Console front end — tests for one-shot runs and the interactive session.

Tests cover:
    - positional expressions print results and set the exit status
    - session loop: results, reprompt on invalid input, continue on undefined
    - blank line and end of file end the session
    - --functions listing
    - output follows sys.stdout as it is at call time
    - expressions with a leading unary minus on the command line
"""

import contextlib
import io

import pytest

import app
from tools.calculator import CalculatorTool


@pytest.fixture
def calculator():
    return CalculatorTool(log_mode="off")


# ─── run_expressions ─────────────────────────────────────────────

def test_run_expressions_prints_results(calculator):
    out = io.StringIO()
    status = app.run_expressions(calculator, ["2 + 3 * 4", "1/4"], out=out)
    lines = out.getvalue().splitlines()
    assert status == 0
    assert lines[0].endswith(" 14")
    assert lines[1].endswith(" 0.25")


def test_run_expressions_reports_failures(calculator):
    out = io.StringIO()
    status = app.run_expressions(calculator, ["2++2", "sqrt(-1)", "3"], out=out)
    text = out.getvalue()
    assert status == 1
    assert "Error:" in text
    assert "Undefined result: sqrt(-1)" in text
    assert text.splitlines()[-1].endswith(" 3")


# ─── run_session ─────────────────────────────────────────────────

def test_session_stops_on_blank_line(calculator):
    stdin = io.StringIO("1+1\n\n5*5\n")
    out = io.StringIO()
    assert app.run_session(calculator, stdin=stdin, out=out) == 0
    text = out.getvalue()
    assert "2" in text
    assert "25" not in text
    assert text.count(app.PROMPT) == 2


def test_session_reprompts_after_invalid_input(calculator):
    stdin = io.StringIO("2++2\n2+2\n\n")
    out = io.StringIO()
    app.run_session(calculator, stdin=stdin, out=out)
    text = out.getvalue()
    assert "Invalid input:" in text
    assert text.count(app.PROMPT) == 3
    assert "Result:" in text


def test_session_continues_after_undefined_result(calculator):
    stdin = io.StringIO("fact(3.5)\nfact(3)\n")
    out = io.StringIO()
    assert app.run_session(calculator, stdin=stdin, out=out) == 0
    text = out.getvalue()
    assert "Undefined result: fact(3.5)" in text
    assert text.rstrip().endswith(app.PROMPT.rstrip())
    assert " 6\n" in text


def test_session_ends_on_eof(calculator):
    out = io.StringIO()
    assert app.run_session(calculator, stdin=io.StringIO(""), out=out) == 0
    assert out.getvalue() == app.PROMPT + "\n"


# ─── main ────────────────────────────────────────────────────────

def test_main_lists_functions(capsys):
    app.main(["--functions"])
    out = capsys.readouterr().out
    assert "Functions:" in out
    assert "tg, tan" in out
    assert "at least 1 argument" in out


def test_main_evaluates_arguments(capsys):
    app.main(["--log-mode", "off", "--precision", "3", "1/8"])
    assert "0.125" in capsys.readouterr().out


def test_main_exits_with_status_on_failure(capsys):
    with pytest.raises(SystemExit) as info:
        app.main(["--log-mode", "off", "1/0"])
    assert info.value.code == 1


def test_main_lists_every_alias():
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        app.main(["--functions"])
    text = out.getvalue()
    assert "34 functions, 68 names" in text
    assert "aliases: asin, arcsin" in text
    assert "aliases: lb, ld" in text


def test_output_follows_redirected_stdout(calculator):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        status = app.run_expressions(calculator, ["2+2"])
    assert status == 0
    assert out.getvalue().endswith(" 4\n")


# ─── leading unary minus ─────────────────────────────────────────

def test_main_accepts_leading_minus(capsys):
    app.main(["-3*2"])
    assert capsys.readouterr().out.splitlines()[-1].endswith(" -6")


def test_main_accepts_leading_minus_between_options(capsys):
    app.main(["--log-mode", "off", "-3*2", "--precision", "1", "-(1/4)"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[-2].endswith(" -6")
    assert lines[-1].endswith(" -0.2")


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["-3*2"], ["--", "-3*2"]),
        (["--log-mode", "off", "-1"], ["--log-mode", "off", "--", "-1"]),
        (["-1", "--precision=3", "--detail"], ["--precision=3", "--detail", "--", "-1"]),
        (["--functions"], ["--functions"]),
        (["-h"], ["-h"]),
        (["1", "--", "-2", "--detail"], ["--", "1", "-2", "--detail"]),
    ],
)
def test_split_arguments(argv, expected):
    assert app.split_arguments(argv) == expected
