"""Argument collection and application of catalog functions."""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, List, Sequence

from engine.catalog import Arity, FunctionSpec
from engine.errors import InvalidInputError, UndefinedResultError
from engine.lexer import TokenKind

if TYPE_CHECKING:
    from engine.evaluator import Evaluator, ParseState


class FunctionDispatcher:
    """
    Evaluates the arguments of a function call and applies the function.

    `call` expects the parse state to sit just past the opening parenthesis.
    It reads comma-separated expressions until the closing parenthesis,
    consumes it, checks the arity and runs the rule. Domain violations come
    back as UndefinedResultError, never as NaN.
    """

    def __init__(self, trace: Callable[[str], None] | None = None) -> None:
        self._trace = trace

    def call(self, spec: FunctionSpec, state: "ParseState", evaluator: "Evaluator") -> float:
        arguments: List[float] = [evaluator.expression(state)]
        while state.token.kind is TokenKind.COMMA:
            state.advance()
            arguments.append(evaluator.expression(state))
        state.expect(TokenKind.RPAREN, f"')' to close {spec.name}(")
        if not spec.arity.accepts(len(arguments)):
            raise InvalidInputError(
                f"{spec.name} expects {spec.arity.describe()}, got {len(arguments)}",
                raw=state.cursor.text,
            )
        return self.apply(spec, arguments)

    def apply(self, spec: FunctionSpec, arguments: Sequence[float]) -> float:
        args = tuple(arguments)
        try:
            if spec.arity is Arity.VARIADIC:
                value = spec.rule(args)
            else:
                value = spec.rule(*args)
        except (ValueError, OverflowError, ZeroDivisionError) as exc:
            raise UndefinedResultError(spec.name, args, str(exc)) from exc
        value = float(value)
        if not math.isfinite(value):
            raise UndefinedResultError(spec.name, args, "result is not finite")
        if self._trace:
            rendered = ", ".join(repr(arg) for arg in args)
            self._trace(f"{spec.name}({rendered}) -> {value!r}")
        return value
