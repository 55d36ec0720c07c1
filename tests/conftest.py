"""Shared test fixtures and helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from stepcalc.ast import Node
from stepcalc.eval import Step, evaluate_raw
from stepcalc.lexer import tokenize
from stepcalc.parser import parse
from stepcalc.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns the AST root."""

    def _parse(source: str) -> Node:
        return parse(tokenize(source), source)

    return _parse


@pytest.fixture
def run():
    """Return a helper that parses and evaluates source, returning (value, steps)."""

    def _run(source: str) -> tuple[Decimal, list[Step]]:
        return evaluate_raw(parse(tokenize(source), source), source=source)

    return _run


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_span(node_or_token, start: int, end: int) -> None:
    """Assert the half-open span of a node or token."""
    span = node_or_token.span
    assert (span.start, span.end) == (start, end), f"Expected [{start}:{end}), got {span}"
