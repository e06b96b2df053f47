"""Character-level tokens read lazily from a cursor into the input line."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

OPERATORS = "+-*/:%^"


class TokenKind(Enum):
    DIGIT = "digit"
    LETTER = "letter"
    OPERATOR = "operator"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    POINT = "."
    END = "end"
    OTHER = "other"


@dataclass(slots=True, frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int


def classify(char: str) -> TokenKind:
    if "0" <= char <= "9":
        return TokenKind.DIGIT
    if ("a" <= char <= "z") or ("A" <= char <= "Z"):
        return TokenKind.LETTER
    if char in OPERATORS:
        return TokenKind.OPERATOR
    if char == "(":
        return TokenKind.LPAREN
    if char == ")":
        return TokenKind.RPAREN
    if char == ",":
        return TokenKind.COMMA
    if char == ".":
        return TokenKind.POINT
    return TokenKind.OTHER


class Cursor:
    """
    Forward-only position into a line of text.

    `next_token` skips spaces and consumes exactly one character. A trailing
    newline counts as end of input. `take_while` reads a raw run of
    characters without skipping spaces; the evaluator uses it to collect
    number literals and function names, which may not contain spaces.
    """

    def __init__(self, text: str) -> None:
        self.text = text.rstrip("\r\n")
        self.position = 0

    def next_token(self) -> Token:
        text = self.text
        while self.position < len(text) and text[self.position] == " ":
            self.position += 1
        if self.position >= len(text):
            return Token(TokenKind.END, "", self.position)
        char = text[self.position]
        token = Token(classify(char), char, self.position)
        self.position += 1
        return token

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.position
        text = self.text
        while self.position < len(text) and predicate(text[self.position]):
            self.position += 1
        return text[start : self.position]

