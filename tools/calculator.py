"""Deterministic calculator tool."""
from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from enum import Enum

from config.runtime import RuntimeSettings
from engine.catalog import CATALOG, FunctionCatalog
from engine.errors import CalculatorError, InvalidInputError, UndefinedResultError
from engine.evaluator import Evaluator
from engine.validator import InputValidator, Verdict

RESET = "\033[0m"
CALC_COLOR = "\033[36m"
TRACE_COLOR = "\033[33m"
ERROR_COLOR = "\033[31m"

if not sys.stdout.isatty():
    RESET = CALC_COLOR = TRACE_COLOR = ERROR_COLOR = ""


class ResultKind(Enum):
    INTEGRAL = "integral"
    FRACTIONAL = "fractional"


def classify(value: float) -> ResultKind:
    return ResultKind.INTEGRAL if value == math.floor(value) else ResultKind.FRACTIONAL


def format_result(value: float, precision: int = 2) -> str:
    """Integral values print without a fraction, others with `precision` digits."""
    value = value + 0.0  # no "-0"
    if classify(value) is ResultKind.INTEGRAL:
        return f"{value:.0f}"
    return f"{value:.{precision}f}"


@dataclass(slots=True)
class Evaluation:
    expression: str
    value: float
    kind: ResultKind
    text: str


class CalculatorTool:
    """
    Tool: calculator

    Purpose:
      Validate and evaluate one arithmetic expression and return a number.

    Input:
      expression: string (one line, optional trailing newline)

    Grammar:
      - numbers: digits with at most one decimal point ("3", "2.5")
      - operators: + - * / : % ^ (":" is division, "%" is the float remainder)
      - unary minus, parentheses
      - named functions such as sin, tg, sqrt, log(base, x), min(a, b, ...)
        (case-insensitive, see engine.catalog)
      - NO variables, NO constants, NO implicit multiplication

    Semantics:
      - Deterministic, side-effect free apart from logging
      - Operators of equal precedence evaluate left to right, "^" included
      - Failures raise CalculatorError subclasses:
        InvalidInputError, UndefinedResultError, AllocationFailureError
    """

    def __init__(
        self,
        settings: RuntimeSettings | None = None,
        catalog: FunctionCatalog = CATALOG,
        log_mode: str | None = None,
    ) -> None:
        self.settings = settings or RuntimeSettings()
        mode = log_mode if log_mode is not None else self.settings.log_mode
        self.log_mode = mode if mode in {"off", "normal", "detail"} else "normal"
        self.catalog = catalog
        self.validator = InputValidator(self.settings.max_line_length, catalog)
        self.evaluator = Evaluator(catalog, self.settings.max_depth, trace=self._log_trace)

    def run(self, expression: str) -> float:
        evaluation = self.evaluate(expression)
        if evaluation is None:
            raise InvalidInputError("Nothing to evaluate", check="empty", raw=expression)
        return evaluation.value

    def evaluate(self, line: str) -> Evaluation | None:
        """Evaluate a line; None means the line was blank (end of input)."""
        if self.check(line) is Verdict.END_OF_INPUT:
            return None
        expression = line.rstrip("\n")
        self._log("normal", f"{CALC_COLOR}[calculator] evaluating: {expression}{RESET}")
        try:
            value = self.evaluator.evaluate(expression)
            if not math.isfinite(value):
                raise UndefinedResultError("result", (value,), "result is not finite")
        except CalculatorError as exc:
            self._log("normal", f"{ERROR_COLOR}[calculator] {exc.kind.value}: {exc}{RESET}")
            raise
        self._log("detail", f"{CALC_COLOR}[calculator] raw value: {value!r}{RESET}")
        return Evaluation(
            expression=expression,
            value=value,
            kind=classify(value),
            text=self.format(value),
        )

    def check(self, line: str) -> Verdict:
        try:
            return self.validator.validate(line)
        except InvalidInputError as exc:
            self._log("normal", f"{ERROR_COLOR}[validator] rejected ({exc.check}): {exc}{RESET}")
            raise

    def format(self, value: float) -> str:
        return format_result(value, self.settings.precision)

    def _log_trace(self, detail: str) -> None:
        self._log("detail", f"{TRACE_COLOR}[dispatch] {detail}{RESET}")

    def _log(self, level: str, message: str) -> None:
        if self.log_mode == "off":
            return
        if self.log_mode == "normal" and level == "detail":
            return
        print(message, flush=True)
