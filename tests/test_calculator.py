"""Calculator tool — tests for the validate/evaluate/format facade.

Tests cover:
    - run returns floats for valid input
    - every failure class surfaces as its own exception
    - integral results print short, fractional results with fixed precision
    - blank line is end of input for evaluate, an error for run
    - log modes
"""

import pytest

from config.runtime import RuntimeSettings
from engine.errors import InputTooLongError, InvalidInputError, NestingTooDeepError, UndefinedResultError
from tools.calculator import CalculatorTool, ResultKind, classify, format_result


@pytest.fixture
def calculator():
    return CalculatorTool(log_mode="off")


# ─── run ─────────────────────────────────────────────────────────

def test_run_evaluates(calculator):
    assert calculator.run("2 + 3 * 4") == 14
    assert calculator.run("(2 + 3) * 4") == 20
    assert calculator.run("log(2,8)") == pytest.approx(3)


def test_run_rejects_invalid_input_before_evaluating(calculator):
    with pytest.raises(InvalidInputError) as info:
        calculator.run("2++2")
    assert info.value.check == "adjacency"


def test_run_reports_undefined_result(calculator):
    with pytest.raises(UndefinedResultError) as info:
        calculator.run("sqrt(-4)")
    assert info.value.function == "sqrt"


def test_run_blank_line_is_an_error(calculator):
    with pytest.raises(InvalidInputError) as info:
        calculator.run("\n")
    assert info.value.check == "empty"


def test_settings_limit_line_length():
    calculator = CalculatorTool(RuntimeSettings(max_line_length=8), log_mode="off")
    with pytest.raises(InputTooLongError):
        calculator.run("1+1+1+1")


def test_settings_limit_depth():
    calculator = CalculatorTool(RuntimeSettings(max_depth=2), log_mode="off")
    assert calculator.run("((1))") == 1
    with pytest.raises(NestingTooDeepError):
        calculator.run("(((1)))")


# ─── evaluate ────────────────────────────────────────────────────

def test_evaluate_returns_evaluation(calculator):
    evaluation = calculator.evaluate("7 / 2\n")
    assert evaluation.expression == "7 / 2"
    assert evaluation.value == 3.5
    assert evaluation.kind is ResultKind.FRACTIONAL
    assert evaluation.text == "3.50"


def test_evaluate_blank_line_is_none(calculator):
    assert calculator.evaluate("\n") is None
    assert calculator.evaluate("   \n") is None


def test_precision_from_settings():
    calculator = CalculatorTool(RuntimeSettings(precision=10), log_mode="off")
    assert calculator.evaluate("1/3").text == "0.3333333333"
    assert calculator.evaluate("6/3").text == "2"


def test_evaluation_text_uses_format():
    calculator = CalculatorTool(RuntimeSettings(precision=1), log_mode="off")
    assert calculator.format(0.25) == "0.2"
    assert calculator.format(-0.0) == "0"
    assert calculator.evaluate("1/4").text == calculator.format(0.25)


# ─── classification ──────────────────────────────────────────────

def test_classify():
    assert classify(14.0) is ResultKind.INTEGRAL
    assert classify(-3.0) is ResultKind.INTEGRAL
    assert classify(0.5) is ResultKind.FRACTIONAL
    assert classify(-0.25) is ResultKind.FRACTIONAL


@pytest.mark.parametrize(
    "value, precision, expected",
    [
        (14.0, 2, "14"),
        (-3.0, 2, "-3"),
        (-0.0, 2, "0"),
        (3.14159, 2, "3.14"),
        (2.0 / 3.0, 10, "0.6666666667"),
        (1e20, 2, "100000000000000000000"),
    ],
)
def test_format_result(value, precision, expected):
    assert format_result(value, precision) == expected


def test_negated_zero_prints_zero(calculator):
    assert calculator.evaluate("-0").text == "0"


# ─── logging ─────────────────────────────────────────────────────

def test_log_mode_off_is_silent(calculator, capsys):
    calculator.run("1+1")
    with pytest.raises(InvalidInputError):
        calculator.run("1++1")
    assert capsys.readouterr().out == ""


def test_log_mode_normal_reports_rejections(capsys):
    calculator = CalculatorTool(log_mode="normal")
    with pytest.raises(InvalidInputError):
        calculator.run("1++1")
    out = capsys.readouterr().out
    assert "[validator] rejected (adjacency)" in out


def test_log_mode_normal_hides_dispatch(capsys):
    calculator = CalculatorTool(log_mode="normal")
    calculator.run("sqrt(4)")
    out = capsys.readouterr().out
    assert "[calculator] evaluating: sqrt(4)" in out
    assert "[dispatch]" not in out


def test_log_mode_detail_traces_dispatch(capsys):
    calculator = CalculatorTool(log_mode="detail")
    calculator.run("sqrt(4)")
    out = capsys.readouterr().out
    assert "[dispatch] sqrt(4.0) -> 2.0" in out
    assert "[calculator] raw value: 2.0" in out


def test_log_mode_normal_reports_undefined(capsys):
    calculator = CalculatorTool(log_mode="normal")
    with pytest.raises(UndefinedResultError):
        calculator.run("1/0")
    assert "undefined_result" in capsys.readouterr().out


def test_unknown_log_mode_falls_back_to_normal():
    assert CalculatorTool(log_mode="loud").log_mode == "normal"
