"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from stepcalc.ast import Binary, Group, Node, Number, Unary


def dump_ast(node: Node, *, file: TextIO | None = None) -> None:
    """Print a human-readable AST tree to *file*."""
    _dump_node(node, 0, file if file is not None else sys.stderr)


def _indent(depth: int) -> str:
    return "  " * depth


def _where(node: Node) -> str:
    return f"[{node.span.start}:{node.span.end}]"


def _dump_node(node: Node, depth: int, f: TextIO) -> None:
    if isinstance(node, Number):
        f.write(f"{_indent(depth)}Number {node.raw or node.value} {_where(node)}\n")
    elif isinstance(node, Group):
        f.write(f"{_indent(depth)}Group {_where(node)}\n")
        _dump_node(node.inner, depth + 1, f)
    elif isinstance(node, Unary):
        f.write(f"{_indent(depth)}Unary {node.op!r} {_where(node)}\n")
        _dump_node(node.operand, depth + 1, f)
    elif isinstance(node, Binary):
        f.write(f"{_indent(depth)}Binary {node.op!r} {_where(node)}\n")
        _dump_node(node.left, depth + 1, f)
        _dump_node(node.right, depth + 1, f)
