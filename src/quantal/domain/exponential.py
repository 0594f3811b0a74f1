"""Exponential — a decimal value that remembers how precisely it was written.

Precision is the count of significant digits in the written literal:

- ``"1"`` has precision 1, ``"1.0"`` has precision 2 (same magnitude,
  different implied uncertainty).
- Leading zeros never count; trailing zeros after a decimal point do.
- A bare integer counts every digit (``"1000"`` has precision 4).
- A zero literal counts its decimal places plus one (``"0.00"`` has 3).

Arithmetic keeps the mantissa exact and only tracks precision; rounding
happens once, in :meth:`Exponential.format`.

INVARIANT: ``format()`` emits exactly ``precision`` significant digits in
fixed-point notation (integer-valued results may need trailing zeros
before the decimal point, which are printed as-is).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_EVEN, ROUND_HALF_UP, Context, Decimal

from quantal.domain.errors import DivisionByZeroError, ParseError

QUOTIENT_DIGITS = 50

_LITERAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

# Products and sums of finite decimals are exact under an unbounded context.
_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, rounding=ROUND_HALF_EVEN)
_QUOTIENT = Context(prec=QUOTIENT_DIGITS, rounding=ROUND_HALF_EVEN)

_ONE = Decimal(1)


def count_significant_digits(literal: str) -> int:
    """Count the significant digits written in a numeric *literal*.

    Examples:
        >>> count_significant_digits("0.0250")
        3
        >>> count_significant_digits("1000")
        4
        >>> count_significant_digits("0.00")
        3
    """
    body = re.split("[eE]", literal.strip().lstrip("+-"))[0]
    significant = body.replace(".", "").lstrip("0")
    if significant:
        return len(significant)
    decimals = len(body.split(".", 1)[1]) if "." in body else 0
    return 1 + decimals


def _magnitude(value: Decimal) -> int:
    """Decimal place of the leading digit (0 for zero)."""
    if value.is_zero():
        return 0
    return value.adjusted()


@dataclass(frozen=True)
class Exponential:
    """Immutable precision-tracked decimal.

    Attributes:
        mantissa: Exact decimal value.
        precision: Significant digits implied by the written form.
    """

    mantissa: Decimal
    precision: int

    def __post_init__(self) -> None:
        if self.precision < 1:
            msg = f"precision must be >= 1, got {self.precision}"
            raise ValueError(msg)
        if not self.mantissa.is_finite():
            msg = f"mantissa must be finite, got {self.mantissa}"
            raise ValueError(msg)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> Exponential:
        """Parse a numeric literal, deriving precision from its digits.

        Raises:
            ParseError: If *text* is not a finite decimal literal.
        """
        if not isinstance(text, str):
            msg = f"Numeric literal must be text, got {type(text).__name__}"
            raise ParseError(msg)
        literal = text.strip()
        if not _LITERAL.match(literal):
            msg = f"Not a numeric literal: {text!r}"
            raise ParseError(msg)
        return cls(Decimal(literal), count_significant_digits(literal))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def place(self) -> int:
        """Decimal place of the least significant retained digit.

        A zero rounded at a coarse place (``1e2 - 99``) keeps that place in
        its exponent.
        """
        if self.mantissa.is_zero():
            return max(1 - self.precision, int(self.mantissa.as_tuple().exponent))
        return self.mantissa.adjusted() - self.precision + 1

    @property
    def is_zero(self) -> bool:
        return self.mantissa.is_zero()

    @property
    def is_unity(self) -> bool:
        """True for an exact one: magnitude one written with a single digit."""
        return abs(self.mantissa) == _ONE and self.precision == 1

    # ------------------------------------------------------------------
    # Measured arithmetic
    # ------------------------------------------------------------------

    def multiply(self, other: Exponential) -> Exponential:
        return Exponential(_EXACT.multiply(self.mantissa, other.mantissa), _product_precision(self, other))

    def divide(self, other: Exponential) -> Exponential:
        """Quotient to ``QUOTIENT_DIGITS`` digits, least-precise operand wins.

        Raises:
            DivisionByZeroError: If *other* is zero.
        """
        if other.is_zero:
            msg = "Division by a zero-valued quantity"
            raise DivisionByZeroError(msg)
        return Exponential(_QUOTIENT.divide(self.mantissa, other.mantissa), _product_precision(self, other))

    def add(self, other: Exponential) -> Exponential:
        """Exact sum, rounded in place to the coarser operand's last digit."""
        return _aligned(_EXACT.add(self.mantissa, other.mantissa), max(self.place, other.place))

    def subtract(self, other: Exponential) -> Exponential:
        return _aligned(_EXACT.subtract(self.mantissa, other.mantissa), max(self.place, other.place))

    def compare(self, other: Exponential) -> int:
        """Return -1, 0 or 1; equal within half a unit of the coarser last digit."""
        difference = _EXACT.subtract(self.mantissa, other.mantissa)
        tolerance = Decimal(5).scaleb(max(self.place, other.place) - 1, context=_EXACT)
        if abs(difference) < tolerance:
            return 0
        return 1 if difference > 0 else -1

    # ------------------------------------------------------------------
    # Exact conversion factors
    # ------------------------------------------------------------------

    def scale(self, factor: Exponential) -> Exponential:
        """Multiply by an exact conversion *factor*, keeping every digit.

        The exact product of a p-digit and a q-digit decimal needs p + q
        digits, so that is the result precision. Scaling by one is a no-op.
        """
        if factor.mantissa == _ONE:
            return self
        return Exponential(
            _EXACT.multiply(self.mantissa, factor.mantissa),
            self.precision + factor.precision,
        )

    def unscale(self, factor: Exponential, *, floor: int = 1) -> Exponential:
        """Divide by an exact conversion *factor*, undoing :meth:`scale`.

        The factor's digits are given back, so ``x.scale(f).unscale(f)``
        has the precision of ``x``. The result never drops below *floor*
        digits.
        """
        if factor.mantissa == _ONE:
            return self
        if factor.is_zero:
            msg = "Conversion factor is zero"
            raise DivisionByZeroError(msg)
        precision = max(floor, 1, self.precision - factor.precision)
        return Exponential(_QUOTIENT.divide(self.mantissa, factor.mantissa), precision)

    def reciprocal(self) -> Exponential:
        """``1 / self`` for an exact factor (precision unchanged)."""
        if self.is_zero:
            msg = "Reciprocal of zero"
            raise DivisionByZeroError(msg)
        return Exponential(_QUOTIENT.divide(_ONE, self.mantissa), self.precision)

    def shift(self, offset: Decimal) -> Exponential:
        """Add an exact *offset* without moving the last significant digit."""
        return _aligned(_EXACT.add(self.mantissa, offset), self.place)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format(self) -> str:
        """Render with exactly ``precision`` significant digits, fixed-point."""
        place = self.place
        rounded = self._round_to(place)
        # 9.99 at two digits rounds up to 10.0; drop the extra digit.
        if not rounded.is_zero() and rounded.adjusted() > _magnitude(self.mantissa):
            rounded = self._round_to(place + 1)
        if rounded.is_zero():
            rounded = Decimal(0).scaleb(min(place, 0))
        return f"{rounded:f}"

    def to_decimal(self) -> Decimal:
        """The formatted value as a Decimal."""
        return Decimal(self.format())

    def _round_to(self, place: int) -> Decimal:
        return self.mantissa.quantize(Decimal(1).scaleb(place), rounding=ROUND_HALF_UP, context=_EXACT)

    def __str__(self) -> str:
        return self.format()


UNITY = Exponential(_ONE, 1)


def combine_factors(first: Exponential, second: Exponential) -> Exponential:
    """Product of two exact conversion factors; a factor of one drops out."""
    if first.mantissa == _ONE:
        return second
    return first.scale(second)


def factor_power(factor: Exponential, exponent: int) -> Exponential:
    """Raise an exact conversion factor to an integer power."""
    base = factor if exponent >= 0 else factor.reciprocal()
    result = UNITY
    for _ in range(abs(exponent)):
        result = combine_factors(result, base)
    return result


def _product_precision(a: Exponential, b: Exponential) -> int:
    """Least precise operand wins; an exact one is the identity."""
    if a.is_unity and not b.is_unity:
        return b.precision
    if b.is_unity and not a.is_unity:
        return a.precision
    return min(a.precision, b.precision)


def _aligned(value: Decimal, place: int) -> Exponential:
    """Wrap *value* so its last significant digit sits at *place*.

    A value with no digit at or above *place* is rounded there, which may
    leave a zero (``10 - 9.6`` is ``0``).
    """
    if value.is_zero() or value.adjusted() < place:
        value = value.quantize(Decimal(1).scaleb(place), rounding=ROUND_HALF_UP, context=_EXACT)
    if value.is_zero():
        return Exponential(value, max(1, 1 - place))
    return Exponential(value, value.adjusted() - place + 1)
