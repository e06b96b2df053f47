"""Recursive-descent evaluator.

Grammar, lowest precedence first:

    expression -> term (('+' | '-') term)*
    term       -> factor (('*' | '/' | ':' | '%' | '^') factor)*
    factor     -> ['-'] ( '(' expression ')' | number | name '(' args ')' )

Values are computed while descending; no tree is built. Every operator is
left-associative, `^` included, so 2^3^2 is (2^3)^2 = 64.
"""
from __future__ import annotations

import math
from typing import Callable

from engine.catalog import CATALOG, FunctionCatalog
from engine.dispatch import FunctionDispatcher
from engine.errors import (
    AllocationFailureError,
    InvalidInputError,
    NestingTooDeepError,
    UndefinedResultError,
    UnresolvedFunctionError,
)
from engine.lexer import Cursor, Token, TokenKind, classify

DEFAULT_MAX_DEPTH = 64

ADDITIVE = {"+", "-"}
MULTIPLICATIVE = {"*", "/", ":", "%", "^"}


class ParseState:
    """Cursor plus current token for a single evaluation."""

    __slots__ = ("cursor", "token", "depth")

    def __init__(self, text: str) -> None:
        self.cursor = Cursor(text)
        self.token: Token = self.cursor.next_token()
        self.depth = 0

    def advance(self) -> Token:
        self.token = self.cursor.next_token()
        return self.token

    def expect(self, kind: TokenKind, what: str) -> None:
        if self.token.kind is not kind:
            raise self.unexpected(f"expected {what}")
        self.advance()

    def unexpected(self, hint: str | None = None) -> InvalidInputError:
        token = self.token
        found = "end of input" if token.kind is TokenKind.END else repr(token.text)
        message = f"Unexpected {found} at position {token.position}"
        if hint:
            message += f", {hint}"
        return InvalidInputError(message, raw=self.cursor.text, position=token.position)


class Evaluator:
    def __init__(
        self,
        catalog: FunctionCatalog = CATALOG,
        max_depth: int = DEFAULT_MAX_DEPTH,
        trace: Callable[[str], None] | None = None,
    ) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        self.catalog = catalog
        self.max_depth = max_depth
        self.dispatcher = FunctionDispatcher(trace=trace)

    def evaluate(self, text: str) -> float:
        """Evaluate one line. Raises a CalculatorError subclass on failure."""
        state = ParseState(text)
        try:
            value = self.expression(state)
        except RecursionError as exc:
            raise AllocationFailureError("Recursion limit reached while evaluating the expression") from exc
        except MemoryError as exc:
            raise AllocationFailureError() from exc
        if state.token.kind is not TokenKind.END:
            raise state.unexpected("expected an operator or end of input")
        return value

    def expression(self, state: ParseState) -> float:
        value = self.term(state)
        while state.token.kind is TokenKind.OPERATOR and state.token.text in ADDITIVE:
            operator = state.token.text
            state.advance()
            value = apply_operator(operator, value, self.term(state))
        return value

    def term(self, state: ParseState) -> float:
        value = self.factor(state)
        while state.token.kind is TokenKind.OPERATOR and state.token.text in MULTIPLICATIVE:
            operator = state.token.text
            state.advance()
            value = apply_operator(operator, value, self.factor(state))
        return value

    def factor(self, state: ParseState) -> float:
        negate = False
        if state.token.kind is TokenKind.OPERATOR and state.token.text == "-":
            negate = True
            state.advance()

        token = state.token
        if token.kind is TokenKind.LPAREN:
            self._enter(state)
            state.advance()
            value = self.expression(state)
            state.expect(TokenKind.RPAREN, "')'")
            state.depth -= 1
        elif token.kind is TokenKind.DIGIT:
            value = self._number(state)
        elif token.kind is TokenKind.LETTER:
            value = self._call(state)
        else:
            raise state.unexpected("expected a number, '(' or a function name")

        return -value if negate else value

    def _number(self, state: ParseState) -> float:
        start = state.token.position
        literal = state.token.text + state.cursor.take_while(
            lambda char: classify(char) in (TokenKind.DIGIT, TokenKind.POINT)
        )
        if literal.count(".") > 1 or literal.endswith("."):
            raise InvalidInputError(f"Malformed number {literal!r}", raw=state.cursor.text, position=start)
        state.advance()
        value = float(literal)
        if not math.isfinite(value):
            raise UndefinedResultError("number", (), f"literal {literal[:16]}... is out of range")
        return value

    def _call(self, state: ParseState) -> float:
        start = state.token.position
        name = state.token.text + state.cursor.take_while(lambda char: classify(char) is TokenKind.LETTER)
        state.advance()
        spec = self.catalog.lookup(name)
        if spec is None:
            raise UnresolvedFunctionError(name, position=start)
        if state.token.kind is not TokenKind.LPAREN:
            raise state.unexpected(f"expected '(' after {name}")
        self._enter(state)
        state.advance()
        value = self.dispatcher.call(spec, state, self)
        state.depth -= 1
        return value

    def _enter(self, state: ParseState) -> None:
        state.depth += 1
        if state.depth > self.max_depth:
            raise NestingTooDeepError(self.max_depth, raw=state.cursor.text, position=state.token.position)


def apply_operator(operator: str, left: float, right: float) -> float:
    if operator == "+":
        value = left + right
    elif operator == "-":
        value = left - right
    elif operator == "*":
        value = left * right
    elif operator in ("/", ":"):
        if right == 0:
            raise UndefinedResultError(operator, (left, right), "division by zero")
        value = left / right
    elif operator == "%":
        if right == 0:
            raise UndefinedResultError(operator, (left, right), "remainder by zero")
        value = math.fmod(left, right)
    elif operator == "^":
        try:
            value = math.pow(left, right)
        except OverflowError as exc:
            raise UndefinedResultError(operator, (left, right), "result is out of range") from exc
        except (ValueError, ZeroDivisionError) as exc:
            raise UndefinedResultError(operator, (left, right), "power is not a real number") from exc
    else:
        raise ValueError(f"Unknown operator: {operator}")
    if not math.isfinite(value):
        raise UndefinedResultError(operator, (left, right), "result is out of range")
    return value
