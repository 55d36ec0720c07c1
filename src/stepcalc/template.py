"""Named-variable substitution applied to an expression before parsing.

Variables are defined one per line as ``name = value`` and referenced in an
expression as ``{{ name }}``. Substitution is textual: the value is pasted in
verbatim and parsed along with the rest of the expression.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from stepcalc.errors import TemplateError

_DEFINITION = re.compile(r"^([A-Za-z_]\w*)\s*=\s*(.+)$")
_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_]\w*)\s*\}\}")


def parse_variables(text: str) -> dict[str, str]:
    """Parse ``name = value`` lines into a dict. Blank lines are ignored."""
    variables: dict[str, str] = {}
    if not text:
        return variables
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped:
            continue
        m = _DEFINITION.match(stripped)
        if m is None:
            raise TemplateError(
                f"variable definition on line {lineno} must be of the form name = value"
            )
        variables[m.group(1)] = m.group(2).strip()
    return variables


def apply_template(source: str, variables: Mapping[str, str]) -> str:
    """Replace every ``{{ name }}`` in source with its value."""

    def _substitute(m: re.Match[str]) -> str:
        name = m.group(1)
        if name not in variables:
            raise TemplateError(f"undefined template variable '{name}'")
        return variables[name]

    return _PLACEHOLDER.sub(_substitute, source)
