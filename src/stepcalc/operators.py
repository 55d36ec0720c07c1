"""Operator metadata shared by parser and printer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Assoc(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class OpInfo:
    """Binding power and associativity of a binary operator."""

    precedence: int
    assoc: Assoc


# Higher precedence binds tighter. Both the parser and the printer read this
# table; neither keeps its own copy of these rules.
OP_INFO: dict[str, OpInfo] = {
    "^": OpInfo(4, Assoc.RIGHT),
    "**": OpInfo(4, Assoc.RIGHT),
    "*": OpInfo(3, Assoc.LEFT),
    "/": OpInfo(3, Assoc.LEFT),
    "%": OpInfo(3, Assoc.LEFT),
    "+": OpInfo(2, Assoc.LEFT),
    "-": OpInfo(2, Assoc.LEFT),
}

RIGHT_ASSOC: frozenset[str] = frozenset(
    op for op, info in OP_INFO.items() if info.assoc is Assoc.RIGHT
)

ADDITIVE: frozenset[str] = frozenset({"+", "-"})


def precedence(op: str) -> int:
    return OP_INFO[op].precedence


def is_binary_operator(op: str) -> bool:
    return op in OP_INFO
