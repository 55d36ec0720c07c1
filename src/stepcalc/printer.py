"""Canonical re-printing of expressions and evaluation steps.

Parentheses are inserted only where the operator table requires them, so
``(1 - 2) - 3`` prints as ``1 - 2 - 3`` while ``1 - (2 - 3)`` keeps its
parentheses, and ``2 ** 3 ** 2`` prints without any.
"""

from __future__ import annotations

from stepcalc.ast import Binary, Group, Node, Number, Unary
from stepcalc.errors import EvalError
from stepcalc.eval import BinaryStep, Step, UnaryStep
from stepcalc.formatting import format_number
from stepcalc.operators import RIGHT_ASSOC, precedence


def expr_to_string(node: Node) -> str:
    """Return the canonical text of an expression."""
    try:
        return _to_string(node)
    except RecursionError:
        raise EvalError("expression is nested too deeply", node.span) from None


def _to_string(node: Node) -> str:
    if isinstance(node, Number):
        return format_number(node.value)
    if isinstance(node, Group):
        return f"({_to_string(node.inner)})"
    if isinstance(node, Unary):
        inner = _to_string(node.operand)
        if needs_paren_unary(node.operand):
            inner = f"({inner})"
        return f"{node.op}{inner}"
    if isinstance(node, Binary):
        # Walk the left spine iteratively; only right operands recurse
        spine: list[Binary] = []
        left: Node = node
        while isinstance(left, Binary):
            spine.append(left)
            left = left.left
        text = _to_string(left)
        for binary in reversed(spine):
            child = binary.left
            if isinstance(child, Binary) and precedence(child.op) < precedence(binary.op):
                text = f"({text})"
            text = f"{text} {binary.op} {_right_operand(binary)}"
        return text
    raise TypeError(f"cannot print {type(node).__name__}")


def needs_paren_unary(node: Node) -> bool:
    """True if the operand of a prefix sign must be parenthesized."""
    return isinstance(node, (Binary, Unary))


def format_maybe_paren(node: Node) -> str:
    """Print a plain number bare and anything else inside parentheses.

    A Group already prints its own parentheses and is not wrapped twice.
    """
    if isinstance(node, (Number, Group)):
        return expr_to_string(node)
    return f"({expr_to_string(node)})"


def format_step(step: Step) -> str:
    """Return a step as ``<expression> = <result>``."""
    if isinstance(step, UnaryStep):
        return f"{step.op}{format_maybe_paren(step.node.operand)} = {format_number(step.result)}"
    if isinstance(step, BinaryStep):
        return (
            f"{format_number(step.left)} {step.op} {format_number(step.right)}"
            f" = {format_number(step.result)}"
        )
    raise TypeError(f"cannot format {type(step).__name__}")


def _right_operand(node: Binary) -> str:
    right = node.right
    text = _to_string(right)
    if isinstance(right, Binary):
        outer = precedence(node.op)
        inner = precedence(right.op)
        if inner < outer or (inner == outer and node.op not in RIGHT_ASSOC):
            return f"({text})"
    return text
