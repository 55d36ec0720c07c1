"""AST node types for parsed expressions."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stepcalc.tokens import Span


@dataclass(frozen=True, slots=True)
class Number:
    """Numeric literal."""

    value: Decimal
    span: Span
    raw: str = ""


@dataclass(frozen=True, slots=True)
class Group:
    """Parenthesized sub-expression; evaluates to its inner value."""

    inner: Node
    span: Span


@dataclass(frozen=True, slots=True)
class Unary:
    """Prefix sign: +x or -x."""

    op: str
    operand: Node
    span: Span


@dataclass(frozen=True, slots=True)
class Binary:
    """Binary operation: left op right."""

    op: str
    left: Node
    right: Node
    span: Span


Node = Number | Group | Unary | Binary
