"""One-shot string checks run on a whole line before it is evaluated."""
from __future__ import annotations

import re
import string
from enum import Enum
from typing import Callable, FrozenSet, List, Tuple

from engine.catalog import CATALOG, FunctionCatalog
from engine.errors import InputTooLongError, InvalidInputError
from engine.lexer import OPERATORS

DEFAULT_MAX_LINE_LENGTH = 256

DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
ALLOWED = DIGITS | LETTERS | frozenset(OPERATORS + ".(), ")

# operators that may be followed by a unary minus
_BEFORE_UNARY = "*/:%^"


def _forbidden_pairs() -> FrozenSet[str]:
    pairs = set()
    for left in OPERATORS:
        for right in OPERATORS:
            if not (left in _BEFORE_UNARY and right == "-"):
                pairs.add(left + right)
        pairs.add(left + ")")
        pairs.add(left + ",")
        pairs.add("." + left)
    for right in ".(),":
        pairs.add("." + right)
    for right in "*/:%^+),":
        pairs.add("(" + right)
        pairs.add("," + right)
    pairs.update({")(", ")."})
    return frozenset(pairs)


FORBIDDEN_PAIRS = _forbidden_pairs()

_LETTER_RUN = re.compile(r"[A-Za-z]+")
_SPLIT_NUMBER = re.compile(r"(?<=[0-9]) +(?=[0-9])")


class Verdict(Enum):
    EXPRESSION = "expression"
    END_OF_INPUT = "end_of_input"


class InputValidator:
    """
    Validator: input line

    Purpose:
      Reject malformed lines before any parsing starts.

    Input:
      line: string, optionally ending in a newline

    Semantics:
      - A blank line (only spaces, then the newline) is END_OF_INPUT.
      - Checks run in a fixed order; the first violated one is reported as an
        InvalidInputError whose `check` names it.
      - The evaluator stays strict on its own: a line such as "2(-3)" passes
        here and is rejected there as a syntax error.
    """

    def __init__(
        self,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        catalog: FunctionCatalog = CATALOG,
    ) -> None:
        if max_line_length < 3:
            raise ValueError("max_line_length must be >= 3")
        self.max_line_length = max_line_length
        self.catalog = catalog
        self._checks: Tuple[Tuple[str, Callable[[str], None]], ...] = (
            ("edges", self._check_edges),
            ("charset", self._check_charset),
            ("content", self._check_content),
            ("adjacency", self._check_adjacency),
            ("parentheses", self._check_parentheses),
            ("points", self._check_points),
            ("spaces", self._check_spaces),
            ("letters", self._check_letters),
        )

    def validate(self, line: str) -> Verdict:
        self._check_length(line)
        text = line[:-1] if line.endswith("\n") else line
        if not text.strip(" "):
            return Verdict.END_OF_INPUT
        for name, check in self._checks:
            try:
                check(text)
            except InvalidInputError as exc:
                exc.check = name
                exc.raw = text
                raise
        return Verdict.EXPRESSION

    def is_valid(self, line: str) -> bool:
        try:
            self.validate(line)
        except InvalidInputError:
            return False
        return True

    def _check_length(self, line: str) -> None:
        # the limit is a line buffer that must also hold the newline and a terminator
        length = len(line) if line.endswith("\n") else len(line) + 1
        if length >= self.max_line_length:
            raise InputTooLongError(length - 1, self.max_line_length, raw=line)

    def _check_edges(self, text: str) -> None:
        first = text[0]
        if first == " ":
            raise InvalidInputError("Input starts with a space", position=0)
        if first in ".),+*/:%^":
            raise InvalidInputError(f"Input cannot start with {first!r}", position=0)
        body = text.rstrip(" ")
        last = body[-1]
        if last in OPERATORS or last in ".(,":
            raise InvalidInputError(f"Input cannot end with {last!r}", position=len(body) - 1)

    def _check_charset(self, text: str) -> None:
        for position, char in enumerate(text):
            if char not in ALLOWED:
                raise InvalidInputError(f"Illegal character {char!r}", position=position)

    def _check_content(self, text: str) -> None:
        has_digit = any(char in DIGITS for char in text)
        has_letter = any(char in LETTERS for char in text)
        if not has_digit and not has_letter:
            raise InvalidInputError("Input has operators but no operands")
        if has_letter and not has_digit:
            for match in _LETTER_RUN.finditer(text):
                if not self._is_call(text, match):
                    raise InvalidInputError("Input has letters but no numbers", position=match.start())

    def _check_adjacency(self, text: str) -> None:
        position = text.find("  ")
        if position != -1:
            raise InvalidInputError("Double space", position=position)
        compact = text.replace(" ", "")
        for index in range(len(compact) - 1):
            pair = compact[index : index + 2]
            if pair in FORBIDDEN_PAIRS:
                raise InvalidInputError(f"{pair!r} is not allowed")

    def _check_parentheses(self, text: str) -> None:
        stack: List[int] = []
        for position, char in enumerate(text):
            if char == "(":
                before = text[position - 1] if position > 0 else ""
                after = text[position + 1] if position + 1 < len(text) else ""
                if before in DIGITS and after in DIGITS:
                    raise InvalidInputError(
                        "Implicit multiplication is not supported, use '*'", position=position
                    )
                stack.append(position)
            elif char == ")":
                if not stack:
                    raise InvalidInputError("Unmatched ')'", position=position)
                stack.pop()
        if stack:
            raise InvalidInputError("Unclosed '('", position=stack[-1])

    def _check_points(self, text: str) -> None:
        seen_point = False
        for position, char in enumerate(text):
            if char == ".":
                before = text[position - 1] if position > 0 else ""
                after = text[position + 1] if position + 1 < len(text) else ""
                if before not in DIGITS or after not in DIGITS:
                    raise InvalidInputError("Decimal point must sit between two digits", position=position)
                if seen_point:
                    raise InvalidInputError("Number has more than one decimal point", position=position)
                seen_point = True
            elif char not in DIGITS:
                seen_point = False

    def _check_spaces(self, text: str) -> None:
        match = _SPLIT_NUMBER.search(text)
        if match:
            raise InvalidInputError("Space inside a number", position=match.start())

    def _check_letters(self, text: str) -> None:
        for match in _LETTER_RUN.finditer(text):
            if not self._is_call(text, match):
                raise InvalidInputError(f"Unknown name {match.group(0)!r}", position=match.start())

    def _is_call(self, text: str, match: re.Match[str]) -> bool:
        end = match.end()
        return end < len(text) and text[end] == "(" and match.group(0) in self.catalog


VALIDATOR = InputValidator()


def validate(line: str) -> Verdict:
    return VALIDATOR.validate(line)
