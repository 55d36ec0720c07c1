"""Splitting an expression into its top-level additive terms."""

from __future__ import annotations

from stepcalc.ast import Binary, Node, Unary
from stepcalc.operators import ADDITIVE


def extract_top_level_terms(ast: Node) -> list[Node]:
    """Return the operands of the root's ``+``/``-`` chain, in source order.

    A term reached through an odd number of subtractions is wrapped in a
    synthetic ``Unary("-")`` so every term can be summed. Groups and
    multiplicative or power sub-trees are single opaque terms.
    """
    terms: list[Node] = []
    pending: list[tuple[Node, int]] = [(ast, 1)]
    while pending:
        node, sign = pending.pop()
        if isinstance(node, Binary) and node.op in ADDITIVE:
            # right first, so the left operand is popped next
            pending.append((node.right, sign if node.op == "+" else -sign))
            pending.append((node.left, sign))
        elif sign < 0:
            terms.append(Unary("-", node, node.span))
        else:
            terms.append(node)
    return terms
