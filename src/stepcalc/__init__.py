"""Step-by-step exact decimal calculator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stepcalc.api import Calculation
    from stepcalc.numeric import ArithmeticConfig

__version__ = "0.1.0"


def calculate(
    expression: str,
    variables: Mapping[str, str] | str | None = None,
    config: ArithmeticConfig | None = None,
) -> Calculation:
    """Template, normalize, parse, and evaluate an expression.

    ``variables`` is either a mapping or a block of ``name = value`` lines.
    """
    from stepcalc.api import Calculation, summarize_terms
    from stepcalc.eval import evaluate_raw
    from stepcalc.normalize import normalize_expr
    from stepcalc.numeric import DEFAULT_CONFIG
    from stepcalc.parser import parse_source
    from stepcalc.printer import format_step
    from stepcalc.template import apply_template, parse_variables

    if config is None:
        config = DEFAULT_CONFIG
    if isinstance(variables, str):
        variables = parse_variables(variables)

    source = normalize_expr(apply_template(expression, variables or {}))
    ast = parse_source(source)
    value, steps = evaluate_raw(ast, config, source)
    return Calculation(
        source=source,
        ast=ast,
        value=value,
        steps=tuple(format_step(step) for step in steps),
        terms=tuple(summarize_terms(ast, config)),
    )
