"""Test the decimal arithmetic wrapper."""

import time
from decimal import ROUND_DOWN, Decimal

import pytest

from stepcalc import numeric
from stepcalc.errors import InvalidOperationError, InvalidReason
from stepcalc.numeric import ArithmeticConfig, decimal_from

D = Decimal


class TestConstruction:
    def test_from_string(self):
        assert decimal_from("0.1") == D("0.1")

    def test_from_int(self):
        assert decimal_from(3) == D(3)

    def test_float_rejected(self):
        with pytest.raises(TypeError):
            decimal_from(0.1)

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            decimal_from("NaN")


class TestExactOperations:
    def test_add_is_exact(self):
        assert numeric.add(D("0.1"), D("0.2")) == D("0.3")

    def test_add_beyond_default_precision(self):
        a = D("12345678901234567890123456789012345678901234567890")
        assert numeric.add(a, D(1)) == D("12345678901234567890123456789012345678901234567891")

    def test_subtract(self):
        assert numeric.subtract(D("1.5"), D("2.25")) == D("-0.75")

    def test_multiply_is_exact(self):
        a = D("1.000000000000000000000000000001")
        expected = D("1.000000000000000000000000000002000000000000000000000000000001")
        assert numeric.multiply(a, a) == expected

    def test_negate(self):
        assert numeric.negate(D(5)) == D(-5)
        assert numeric.negate(D(-5)) == D(5)
        assert numeric.negate(D(0)) == 0


class TestDivide:
    def test_exact_quotient(self):
        assert numeric.divide(D(1), D(4)) == D("0.25")

    def test_integral_quotient_has_no_fraction(self):
        assert str(numeric.divide(D(10), D(2))) == "5"

    def test_one_third_keeps_forty_places(self):
        result = numeric.divide(D(1), D(3))
        assert result == D("0." + "3" * 40)

    def test_two_thirds_rounds_half_up(self):
        assert numeric.divide(D(2), D(3)) == D("0." + "6" * 39 + "7")

    def test_negative_rounds_away_from_zero_on_half(self):
        config = ArithmeticConfig(places=1)
        assert numeric.divide(D(-1), D(4), config) == D("-0.3")
        assert numeric.divide(D(1), D(-4), config) == D("-0.3")

    def test_sign_of_quotient(self):
        assert numeric.divide(D(-6), D(-4)) == D("1.5")
        assert numeric.divide(D(6), D(-4)) == D("-1.5")

    def test_reduced_places(self):
        config = ArithmeticConfig(places=2)
        assert numeric.divide(D(2), D(3), config) == D("0.67")

    def test_rounding_mode_is_configurable(self):
        config = ArithmeticConfig(places=2, rounding=ROUND_DOWN)
        assert numeric.divide(D(2), D(3), config) == D("0.66")

    def test_half_exactly_at_cutoff(self):
        config = ArithmeticConfig(places=2)
        assert numeric.divide(D(1), D(8), config) == D("0.13")

    def test_just_below_half_at_cutoff(self):
        # 0.12499... must not round up to 0.13
        config = ArithmeticConfig(places=2)
        assert numeric.divide(D("0.1249999"), D(1), config) == D("0.12")

    def test_divide_by_zero(self):
        with pytest.raises(InvalidOperationError) as exc_info:
            numeric.divide(D(1), D(0))
        assert exc_info.value.reason is InvalidReason.DIVISION_BY_ZERO

    def test_divide_by_negative_zero_point_zero(self):
        with pytest.raises(InvalidOperationError):
            numeric.divide(D(1), D("-0.000"))


class TestModulo:
    def test_positive(self):
        assert numeric.modulo(D(7), D(3)) == D(1)

    def test_negative_dividend_takes_dividend_sign(self):
        assert numeric.modulo(D(-7), D(3)) == D(-1)

    def test_negative_divisor_takes_dividend_sign(self):
        assert numeric.modulo(D(7), D(-3)) == D(1)

    def test_both_negative(self):
        assert numeric.modulo(D(-7), D(-3)) == D(-1)

    def test_fractional(self):
        assert numeric.modulo(D("5.5"), D(2)) == D("1.5")

    def test_modulo_by_zero(self):
        with pytest.raises(InvalidOperationError) as exc_info:
            numeric.modulo(D(1), D(0))
        assert exc_info.value.reason is InvalidReason.DIVISION_BY_ZERO


class TestPower:
    def test_integer_power(self):
        assert numeric.power(D(2), D(10)) == D(1024)

    def test_fractional_base_is_exact(self):
        assert numeric.power(D("0.1"), D(3)) == D("0.001")

    def test_large_power_is_exact(self):
        assert numeric.power(D(2), D(100)) == D(2**100)

    def test_huge_exponent_is_fast_and_exact(self):
        start = time.perf_counter()
        result = numeric.power(D("1.23456789"), D(100000))
        assert time.perf_counter() - start < 5
        # 123456789 ** 100000 ends in a non-zero digit, so no digits are lost
        assert result.normalize(numeric.EXACT_CONTEXT).as_tuple().exponent == -800000

    def test_negative_base(self):
        assert numeric.power(D(-2), D(3)) == D(-8)

    def test_zero_exponent(self):
        assert numeric.power(D(5), D(0)) == D(1)
        assert numeric.power(D(0), D(0)) == D(1)

    def test_integral_exponent_written_with_point(self):
        assert numeric.power(D(3), D("2.0")) == D(9)

    def test_negative_exponent(self):
        assert numeric.power(D(2), D(-2)) == D("0.25")

    def test_negative_exponent_rounds_like_divide(self):
        assert numeric.power(D(3), D(-1)) == numeric.divide(D(1), D(3))

    def test_zero_to_negative_power(self):
        with pytest.raises(InvalidOperationError) as exc_info:
            numeric.power(D(0), D(-1))
        assert exc_info.value.reason is InvalidReason.DIVISION_BY_ZERO

    def test_non_integer_exponent(self):
        with pytest.raises(InvalidOperationError) as exc_info:
            numeric.power(D(2), D("0.5"))
        assert exc_info.value.reason is InvalidReason.NON_INTEGER_EXPONENT

    def test_exponent_too_large(self):
        with pytest.raises(InvalidOperationError) as exc_info:
            numeric.power(D(2), D(10) ** 20)
        assert exc_info.value.reason is InvalidReason.EXPONENT_TOO_LARGE

    def test_exponent_limit_is_configurable(self):
        config = ArithmeticConfig(max_exponent=3)
        assert numeric.power(D(2), D(3), config) == D(8)
        with pytest.raises(InvalidOperationError):
            numeric.power(D(2), D(4), config)
        with pytest.raises(InvalidOperationError):
            numeric.power(D(2), D(-4), config)


class TestConfig:
    def test_defaults(self):
        config = ArithmeticConfig()
        assert config.places == 40
        assert config.max_exponent == 100_000

    def test_negative_places_rejected(self):
        with pytest.raises(ValueError):
            ArithmeticConfig(places=-1)
