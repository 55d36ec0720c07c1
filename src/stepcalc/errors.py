"""Error types with formatted source context."""

from __future__ import annotations

from enum import Enum

from stepcalc.tokens import Span

_NO_SPAN = Span(0, 0)


def line_and_column(source: str, offset: int) -> tuple[int, int]:
    """Convert a 0-based offset into a 1-based (line, column) pair."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def format_caret(source: str, span: Span) -> str:
    """Render the source line holding span.start with a caret under it.

    Example::

        1 + 2 * 3
            ^
    """
    line, col = line_and_column(source, span.start)
    lines = source.split("\n")
    source_line = lines[line - 1] if line - 1 < len(lines) else ""
    return f"{source_line}\n{' ' * (col - 1)}^"


class CalcError(Exception):
    """Base class for every error raised by the calculator engine.

    Carries a stable ``kind`` tag, a human-readable ``message`` and the
    offending ``span`` so callers can underline the exact source range.
    """

    kind = "error"

    def __init__(self, message: str, span: Span | None = None, source: str = "") -> None:
        self.message = message
        self.span = span if span is not None else _NO_SPAN
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<expr>") -> str:
        if not self.source:
            return f"error: {self.message}"

        line, col = line_and_column(self.source, self.span.start)
        end_line, end_col = line_and_column(self.source, self.span.end)
        source_line = self.source.split("\n")[line - 1].rstrip("\r")

        # Underline the full span when on one line, otherwise to end of line
        if end_line == line:
            underline_len = max(1, end_col - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class ParseError(CalcError):
    """Raised on the first lexing or parsing error."""

    kind = "syntax_error"


class EvalError(CalcError):
    """Raised when evaluation fails for a reason the arithmetic layer did not classify."""

    kind = "eval_error"


class InvalidReason(Enum):
    DIVISION_BY_ZERO = "division_by_zero"
    NON_INTEGER_EXPONENT = "non_integer_exponent"
    EXPONENT_TOO_LARGE = "exponent_too_large"


_REASON_MESSAGES = {
    InvalidReason.DIVISION_BY_ZERO: "division by zero",
    InvalidReason.NON_INTEGER_EXPONENT: "exponent must be an integer",
    InvalidReason.EXPONENT_TOO_LARGE: "exponent is too large",
}


class InvalidOperationError(EvalError):
    """An arithmetic operation with no defined result (e.g. division by zero)."""

    kind = "invalid_operation"

    def __init__(
        self,
        reason: InvalidReason,
        span: Span | None = None,
        source: str = "",
        message: str | None = None,
    ) -> None:
        self.reason = reason
        super().__init__(message or _REASON_MESSAGES[reason], span, source)

    def at(self, span: Span, source: str = "") -> InvalidOperationError:
        """Return a copy of this error anchored at span."""
        return InvalidOperationError(self.reason, span, source, self.message)


class TemplateError(CalcError):
    """Raised for malformed variable definitions or undefined template variables.

    Templates are expanded before parsing, so there is no expression offset to
    point at and the span is always empty.
    """

    kind = "template_error"

    def __init__(self, message: str) -> None:
        super().__init__(message, _NO_SPAN, "")
