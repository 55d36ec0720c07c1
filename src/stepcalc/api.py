"""Result types for the one-call pipeline and the running-total breakdown."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stepcalc import numeric
from stepcalc.ast import Node
from stepcalc.eval import evaluate_raw
from stepcalc.formatting import format_number
from stepcalc.numeric import DEFAULT_CONFIG, ArithmeticConfig
from stepcalc.printer import expr_to_string
from stepcalc.terms import extract_top_level_terms


@dataclass(frozen=True, slots=True)
class TermSummary:
    """One top-level term with the total of all terms up to and including it."""

    index: int
    node: Node
    text: str
    value: Decimal
    running_total: Decimal


@dataclass(frozen=True, slots=True)
class Calculation:
    """Everything computed for one expression."""

    source: str
    ast: Node
    value: Decimal
    steps: tuple[str, ...]
    terms: tuple[TermSummary, ...]

    @property
    def display(self) -> str:
        return format_number(self.value)


def summarize_terms(ast: Node, config: ArithmeticConfig = DEFAULT_CONFIG) -> list[TermSummary]:
    """Evaluate each top-level term on its own and accumulate a running total."""
    summaries: list[TermSummary] = []
    total = numeric.DECIMAL_ZERO
    for index, term in enumerate(extract_top_level_terms(ast), start=1):
        value, _ = evaluate_raw(term, config)
        total = numeric.add(total, value)
        summaries.append(TermSummary(index, term, expr_to_string(term), value, total))
    return summaries
