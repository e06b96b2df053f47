"""Failure classes raised by the expression engine."""
from __future__ import annotations

import math
from enum import Enum
from typing import Tuple


class FailureKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    UNDEFINED_RESULT = "undefined_result"
    UNRESOLVED_FUNCTION = "unresolved_function"
    ALLOCATION_FAILURE = "allocation_failure"


class CalculatorError(Exception):
    """Base class for every classified calculator failure."""

    kind: FailureKind = FailureKind.INVALID_INPUT


class InvalidInputError(CalculatorError, ValueError):
    """The line does not follow the expression grammar."""

    kind = FailureKind.INVALID_INPUT

    def __init__(
        self,
        message: str,
        check: str = "syntax",
        raw: str | None = None,
        position: int | None = None,
    ):
        super().__init__(message)
        self.check = check
        self.raw = raw
        self.position = position


class InputTooLongError(InvalidInputError):
    def __init__(self, length: int, limit: int, raw: str | None = None):
        super().__init__(
            f"Input too long: {length} characters (maximum {limit - 2})",
            check="length",
            raw=raw,
        )
        self.length = length
        self.limit = limit


class NestingTooDeepError(InvalidInputError):
    def __init__(self, limit: int, raw: str | None = None, position: int | None = None):
        super().__init__(
            f"Parentheses nested deeper than {limit} levels",
            check="depth",
            raw=raw,
            position=position,
        )
        self.limit = limit


class UndefinedResultError(CalculatorError, ArithmeticError):
    """A function or operator was applied outside of its domain."""

    kind = FailureKind.UNDEFINED_RESULT

    def __init__(self, function: str, arguments: Tuple[float, ...] = (), reason: str | None = None):
        rendered = ", ".join(_render(arg) for arg in arguments)
        message = f"Undefined result: {function}({rendered})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.function = function
        self.arguments = tuple(arguments)
        self.reason = reason


class UnresolvedFunctionError(CalculatorError, LookupError):
    kind = FailureKind.UNRESOLVED_FUNCTION

    def __init__(self, name: str, position: int | None = None):
        super().__init__(f"Unknown function: {name}")
        self.name = name
        self.position = position


class AllocationFailureError(CalculatorError, MemoryError):
    kind = FailureKind.ALLOCATION_FAILURE

    def __init__(self, message: str = "Out of memory while evaluating the expression"):
        super().__init__(message)


def _render(value: float) -> str:
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)
