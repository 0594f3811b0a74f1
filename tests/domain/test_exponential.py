"""Tests for Exponential — precision-tracked decimal arithmetic."""

from decimal import Decimal

import pytest

from quantal.domain.errors import DivisionByZeroError, ParseError
from quantal.domain.exponential import (
    UNITY,
    Exponential,
    combine_factors,
    count_significant_digits,
    factor_power,
)


def e(text: str) -> Exponential:
    return Exponential.parse(text)


class TestCountSignificantDigits:
    @pytest.mark.parametrize(
        ("literal", "expected"),
        [
            ("1", 1),
            ("1.0", 2),
            ("1000", 4),
            ("0.0250", 3),
            ("-80", 2),
            ("2.54e3", 3),
            ("1e-2", 1),
            (".5", 1),
            ("5.", 1),
            ("0", 1),
            ("0.00", 3),
        ],
    )
    def test_counts(self, literal: str, expected: int) -> None:
        assert count_significant_digits(literal) == expected


class TestParse:
    def test_value_and_precision(self) -> None:
        value = e("2.540")
        assert value.mantissa == Decimal("2.540")
        assert value.precision == 4

    def test_sign_and_whitespace(self) -> None:
        assert e(" +5 ").mantissa == Decimal(5)
        assert e("-0.5").mantissa == Decimal("-0.5")

    def test_exponent_form(self) -> None:
        value = e("6e1")
        assert value.mantissa == Decimal(60)
        assert value.precision == 1

    @pytest.mark.parametrize("text", ["", "abc", "1.2.3", "1e", "NaN", "Infinity", "1,5", "--1"])
    def test_rejects_non_numeric(self, text: str) -> None:
        with pytest.raises(ParseError):
            e(text)

    def test_rejects_non_text(self) -> None:
        with pytest.raises(ParseError):
            Exponential.parse(1.5)  # type: ignore[arg-type]

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            e("blub")

    def test_invalid_precision(self) -> None:
        with pytest.raises(ValueError):
            Exponential(Decimal(1), 0)


class TestFormat:
    @pytest.mark.parametrize("text", ["1", "1.0", "0.0250", "-80", "1000", "0.00", "123.456"])
    def test_reproduces_literal(self, text: str) -> None:
        assert e(text).format() == text

    def test_pads_trailing_zeros(self) -> None:
        assert Exponential(Decimal("0.0254"), 5).format() == "0.025400"

    def test_rounds_half_up(self) -> None:
        assert Exponential(Decimal("1.25"), 2).format() == "1.3"
        assert Exponential(Decimal("-1.25"), 2).format() == "-1.3"

    def test_integer_part_wider_than_precision(self) -> None:
        assert Exponential(Decimal(1000), 2).format() == "1000"
        assert Exponential(Decimal(1234567), 2).format() == "1200000"

    def test_rounding_into_next_magnitude(self) -> None:
        assert Exponential(Decimal("9.99"), 2).format() == "10"

    def test_never_scientific(self) -> None:
        assert e("1e-7").format() == "0.0000001"
        assert e("1.5e6").format() == "1500000"

    def test_negative_zero(self) -> None:
        assert e("-0").format() == "0"
        assert e("-0.0").format() == "0.0"

    def test_str_is_format(self) -> None:
        assert str(e("0.0250")) == "0.0250"

    def test_to_decimal(self) -> None:
        assert Exponential(Decimal("0.0254"), 5).to_decimal() == Decimal("0.025400")


class TestMultiplyDivide:
    def test_least_precise_operand_wins(self) -> None:
        product = e("2.0").multiply(e("3.00"))
        assert product.mantissa == Decimal(6)
        assert product.format() == "6.0"

    def test_unity_operand_is_identity(self) -> None:
        assert e("1").multiply(e("0.025400")).format() == "0.025400"
        assert e("0.025400").multiply(e("-1")).format() == "-0.025400"

    def test_both_exact_ones(self) -> None:
        assert e("1").multiply(e("-1")).format() == "-1"

    def test_measured_one_limits_the_product(self) -> None:
        assert e("1.000").multiply(e("3.14159")).format() == "3.142"
        assert e("3.14159").divide(e("1.000")).format() == "3.142"
        assert e("1").multiply(e("1.00")).format() == "1.00"

    def test_divide(self) -> None:
        assert e("6").divide(e("2")).format() == "3"
        assert e("1").divide(e("3.0")).format() == "0.33"

    def test_quotient_digits(self) -> None:
        quotient = e("1").divide(e("3"))
        assert len(quotient.mantissa.as_tuple().digits) == 50

    def test_divide_by_zero(self) -> None:
        with pytest.raises(DivisionByZeroError):
            e("1").divide(e("0.0"))

    def test_zero_dividend(self) -> None:
        assert e("0").divide(e("4")).format() == "0"


class TestAddSubtract:
    def test_aligns_to_coarser_operand(self) -> None:
        assert e("1.0").add(e("0.25")).format() == "1.3"

    def test_keeps_integer_digits(self) -> None:
        assert e("1000").add(e("1")).format() == "1001"

    def test_cancellation(self) -> None:
        assert e("1.00").subtract(e("1.00")).format() == "0.00"

    def test_carry_gains_a_digit(self) -> None:
        total = e("9.9").add(e("0.2"))
        assert total.format() == "10.1"
        assert total.precision == 3

    def test_difference_below_coarser_place_rounds_to_zero(self) -> None:
        difference = e("10").subtract(e("9.6"))
        assert difference.format() == "0"
        assert difference.place == 0

    def test_sum_below_coarser_place_keeps_that_place(self) -> None:
        total = e("1e2").add(e("-99"))
        assert total.format() == "0"
        assert total.place == 2
        assert total.compare(e("40")) == 0
        assert total.compare(e("60")) == -1

    def test_narrow_result_rounds_half_up_at_coarser_place(self) -> None:
        difference = e("10").subtract(e("9.4"))
        assert difference.format() == "1"
        assert difference.place == 0
        assert e("1e2").add(e("-40")).format() == "100"


class TestCompare:
    def test_equal_within_tolerance(self) -> None:
        assert e("1.0").compare(e("1.04")) == 0

    def test_outside_tolerance(self) -> None:
        assert e("1.0").compare(e("1.06")) == -1
        assert e("1.06").compare(e("1.0")) == 1

    def test_reflexive(self) -> None:
        value = e("0.025400")
        assert value.compare(value) == 0

    def test_coarser_operand_sets_tolerance(self) -> None:
        assert e("1e3").compare(e("1049")) == 0
        assert e("1000").compare(e("1049")) == -1


class TestExactFactors:
    def test_scale_keeps_every_digit(self) -> None:
        scaled = e("1").scale(e("1e3"))
        assert scaled.mantissa == Decimal(1000)
        assert scaled.precision == 2

    def test_scale_by_one_is_noop(self) -> None:
        value = e("2.54")
        assert value.scale(UNITY) is value

    def test_unscale_gives_back_factor_digits(self) -> None:
        assert Exponential(Decimal(1000), 5).unscale(e("1e3")).format() == "1.000"
        inch = e("2.54e-2")
        assert e("3").scale(inch).unscale(inch).format() == "3"

    def test_unscale_floor(self) -> None:
        assert e("1000").unscale(e("1e3"), floor=4).format() == "1.000"
        assert e("7").unscale(e("2.54e-2")).format() == "300"

    def test_unscale_by_zero(self) -> None:
        with pytest.raises(DivisionByZeroError):
            e("1").unscale(e("0"))

    def test_shift_keeps_place(self) -> None:
        assert e("20").shift(Decimal("273.15")).format() == "293"
        assert e("293.15").shift(Decimal("-273.15")).format() == "20.00"

    def test_reciprocal(self) -> None:
        assert e("1e-2").reciprocal().mantissa == Decimal(100)
        with pytest.raises(DivisionByZeroError):
            e("0").reciprocal()

    def test_combine_factors(self) -> None:
        assert combine_factors(UNITY, e("1e3")) == e("1e3")
        combined = combine_factors(e("2.54"), e("1e-2"))
        assert combined.mantissa == Decimal("0.0254")
        assert combined.precision == 4

    @pytest.mark.parametrize(
        ("exponent", "mantissa"),
        [(0, Decimal(1)), (1, Decimal("0.01")), (2, Decimal("0.0001")), (-1, Decimal(100)), (-2, Decimal(10000))],
    )
    def test_factor_power(self, exponent: int, mantissa: Decimal) -> None:
        assert factor_power(e("1e-2"), exponent).mantissa == mantissa
