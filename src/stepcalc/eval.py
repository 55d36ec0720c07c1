"""AST evaluator: computes an exact value and records every step taken.

Steps are produced in post-order (operands before the operation that
consumes them). Number and Group nodes record nothing. Each top-level call
owns its step list, so evaluation keeps no state between calls.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from stepcalc import numeric
from stepcalc.ast import Binary, Group, Node, Number, Unary
from stepcalc.errors import EvalError, InvalidOperationError
from stepcalc.numeric import DEFAULT_CONFIG, ArithmeticConfig


@dataclass(frozen=True, slots=True)
class UnaryStep:
    """One applied prefix sign."""

    op: str
    operand: Decimal
    result: Decimal
    node: Unary


@dataclass(frozen=True, slots=True)
class BinaryStep:
    """One applied binary operation."""

    op: str
    left: Decimal
    right: Decimal
    result: Decimal
    node: Binary


Step = UnaryStep | BinaryStep

_Operation = Callable[[Decimal, Decimal, ArithmeticConfig], Decimal]

# operator → arithmetic, all taking the config so the call site stays uniform
_OPERATIONS: dict[str, _Operation] = {
    "+": lambda a, b, cfg: numeric.add(a, b),
    "-": lambda a, b, cfg: numeric.subtract(a, b),
    "*": lambda a, b, cfg: numeric.multiply(a, b),
    "/": numeric.divide,
    "%": lambda a, b, cfg: numeric.modulo(a, b),
    "^": numeric.power,
    "**": numeric.power,
}


def evaluate_raw(
    ast: Node, config: ArithmeticConfig = DEFAULT_CONFIG, source: str = ""
) -> tuple[Decimal, list[Step]]:
    """Evaluate an AST, returning the value and the structured step list.

    ``source`` is the text the AST was parsed from; it is only used to show
    context in error messages.
    """
    steps: list[Step] = []
    try:
        value = _eval_node(ast, config, source, steps)
    except RecursionError:
        raise EvalError("expression is nested too deeply", ast.span, source) from None
    return value, steps


def evaluate(ast: Node, config: ArithmeticConfig = DEFAULT_CONFIG) -> tuple[Decimal, list[str]]:
    """Evaluate an AST, returning the value and the steps as display strings.

    Use ``evaluate_raw`` when the steps are needed as data.
    """
    from stepcalc.printer import format_step

    value, steps = evaluate_raw(ast, config)
    return value, [format_step(step) for step in steps]


def _eval_node(node: Node, config: ArithmeticConfig, source: str, steps: list[Step]) -> Decimal:
    if isinstance(node, Number):
        return node.value

    if isinstance(node, Group):
        return _eval_node(node.inner, config, source, steps)

    if isinstance(node, Unary):
        operand = _eval_node(node.operand, config, source, steps)
        result = numeric.negate(operand) if node.op == "-" else operand
        steps.append(UnaryStep(node.op, operand, result, node))
        return result

    if isinstance(node, Binary):
        # Left-leaning chains (1 + 2 + 3 + ...) are walked in a loop
        spine: list[Binary] = []
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left
        result = _eval_node(node, config, source, steps)
        for binary in reversed(spine):
            left = result
            right = _eval_node(binary.right, config, source, steps)
            result = _apply(binary, left, right, config, source)
            steps.append(BinaryStep(binary.op, left, right, result, binary))
        return result

    raise EvalError(f"unknown node type {type(node).__name__}", None, source)


def _apply(
    node: Binary, left: Decimal, right: Decimal, config: ArithmeticConfig, source: str
) -> Decimal:
    operation = _OPERATIONS.get(node.op)
    if operation is None:
        raise EvalError(f"unsupported operator '{node.op}'", node.span, source)
    try:
        return operation(left, right, config)
    except InvalidOperationError as exc:
        raise exc.at(node.span, source) from exc
    except (ArithmeticError, ValueError, MemoryError) as exc:
        raise EvalError(f"internal evaluation error: {exc}", node.span, source) from exc
