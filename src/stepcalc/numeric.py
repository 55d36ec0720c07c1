"""Exact decimal arithmetic used by the evaluator.

The engine never touches raw floats: every value is a ``decimal.Decimal`` and
every operation goes through the functions in this module. Addition,
subtraction, multiplication, negation and integer powers are exact. Division
keeps ``ArithmeticConfig.places`` fractional digits, rounded once with
``ArithmeticConfig.rounding``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)

from stepcalc.errors import InvalidOperationError, InvalidReason

# Unbounded context: operations on finite operands with finite exact results
# never round here. Always passed explicitly, never installed as the thread's
# current context.
EXACT_CONTEXT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

DECIMAL_ZERO = Decimal(0)
DECIMAL_ONE = Decimal(1)


@dataclass(frozen=True, slots=True)
class ArithmeticConfig:
    """Precision settings for inexact operations."""

    places: int = 40
    rounding: str = ROUND_HALF_UP
    max_exponent: int = 100_000

    def __post_init__(self) -> None:
        if self.places < 0:
            raise ValueError(f"places must be non-negative, got {self.places}")
        if self.max_exponent < 0:
            raise ValueError(f"max_exponent must be non-negative, got {self.max_exponent}")


DEFAULT_CONFIG = ArithmeticConfig()


def decimal_from(value: str | int) -> Decimal:
    """Build a Decimal from text or an int.

    Floats are refused: they would carry binary rounding error into the
    engine.
    """
    if isinstance(value, float):
        raise TypeError("float input is not accepted; pass the number as a string")
    result = Decimal(value)
    if not result.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return result


def add(a: Decimal, b: Decimal) -> Decimal:
    return EXACT_CONTEXT.add(a, b)


def subtract(a: Decimal, b: Decimal) -> Decimal:
    return EXACT_CONTEXT.subtract(a, b)


def multiply(a: Decimal, b: Decimal) -> Decimal:
    return EXACT_CONTEXT.multiply(a, b)


def negate(a: Decimal) -> Decimal:
    return EXACT_CONTEXT.minus(a)


def divide(a: Decimal, b: Decimal, config: ArithmeticConfig = DEFAULT_CONFIG) -> Decimal:
    """Return a / b rounded to config.places fractional digits."""
    if b.is_zero():
        raise InvalidOperationError(InvalidReason.DIVISION_BY_ZERO)

    # Truncated quotient with one guard digit, then a sticky bit so the final
    # quantize sees whether anything non-zero was cut off.
    scaled = EXACT_CONTEXT.scaleb(EXACT_CONTEXT.abs(a), Decimal(config.places + 1))
    quotient, remainder = EXACT_CONTEXT.divmod(scaled, EXACT_CONTEXT.abs(b))
    if not remainder.is_zero() and EXACT_CONTEXT.remainder(quotient, Decimal(5)).is_zero():
        quotient = EXACT_CONTEXT.add(quotient, DECIMAL_ONE)

    result = EXACT_CONTEXT.scaleb(quotient, Decimal(-(config.places + 1)))
    if a.is_signed() != b.is_signed():
        result = EXACT_CONTEXT.minus(result)
    result = result.quantize(
        DECIMAL_ONE.scaleb(-config.places), rounding=config.rounding, context=EXACT_CONTEXT
    )
    return _trim(result)


def modulo(a: Decimal, b: Decimal) -> Decimal:
    """Return the truncated remainder of a / b.

    The result takes the sign of the dividend: ``-7 % 3 == -1`` and
    ``7 % -3 == 1``.
    """
    if b.is_zero():
        raise InvalidOperationError(InvalidReason.DIVISION_BY_ZERO)
    return EXACT_CONTEXT.remainder(a, b)


def power(base: Decimal, exponent: Decimal, config: ArithmeticConfig = DEFAULT_CONFIG) -> Decimal:
    """Return base ** exponent for integral exponents.

    Non-negative exponents are exact. A negative exponent is computed as the
    reciprocal of the positive power, rounded like ``divide``.
    """
    if exponent != exponent.to_integral_value(context=EXACT_CONTEXT):
        raise InvalidOperationError(InvalidReason.NON_INTEGER_EXPONENT)
    if EXACT_CONTEXT.abs(exponent) > config.max_exponent:
        raise InvalidOperationError(
            InvalidReason.EXPONENT_TOO_LARGE,
            message=f"exponent is too large (limit is {config.max_exponent})",
        )

    n = int(exponent)
    if n < 0:
        return divide(DECIMAL_ONE, _int_power(base, -n), config)
    return _int_power(base, n)


def _int_power(base: Decimal, n: int) -> Decimal:
    if n == 0:
        return DECIMAL_ONE
    return EXACT_CONTEXT.power(base, n)


def _trim(value: Decimal) -> Decimal:
    """Drop trailing fractional zeros without switching to exponent notation."""
    if value == value.to_integral_value(context=EXACT_CONTEXT):
        return value.quantize(DECIMAL_ONE, context=EXACT_CONTEXT)
    return value.normalize(EXACT_CONTEXT)
