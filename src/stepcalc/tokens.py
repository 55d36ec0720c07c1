"""Token types, source spans, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto


class TokenType(Enum):
    NUMBER = auto()  # 1_234.5, value is the exact Decimal
    OPERATOR = auto()  # + - * / % ^ **
    LPAREN = auto()  # (
    RPAREN = auto()  # )

    EOF = auto()


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range [start, end) into the source string."""

    start: int
    end: int

    def cover(self, other: Span) -> Span:
        """Return the smallest span containing both spans."""
        return Span(min(self.start, other.start), max(self.end, other.end))


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with resolved value and original source text."""

    type: TokenType
    value: Decimal | str
    raw: str
    span: Span


# Two-character operators are matched before single characters
MULTI_CHAR_OPERATORS = ("**",)
SINGLE_CHAR_OPERATORS = frozenset("+-*/%^")
PREFIX_OPERATORS = frozenset("+-")

_DIGITS = frozenset("0123456789")

# Grouping separators allowed inside number literals
_DIGIT_SEPARATORS = frozenset("_,")


def is_number_start(ch: str) -> bool:
    """Return True if ch can begin a number literal."""
    return ch in _DIGITS or ch == "."


def is_number_char(ch: str) -> bool:
    """Return True if ch can continue a number literal (the point is handled separately)."""
    return ch in _DIGITS or ch in _DIGIT_SEPARATORS


def strip_separators(text: str) -> str:
    """Remove digit grouping separators from a literal."""
    return "".join(ch for ch in text if ch not in _DIGIT_SEPARATORS)
