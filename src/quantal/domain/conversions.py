"""Conversions — canonicalization and cross-unit quantity arithmetic.

Canonicalization follows every axis of a Metric through the catalog until
only base units remain, accumulating exact scale factors on the way:

    1 [in_i]  ->  2.54 cm  ->  2.54 x 1e-2 m  ->  0.025400 m

Definition chains form a dependency graph. Resolution walks it with an
explicit work stack and a per-path visited set, so a cyclic or dangling
definition surfaces as :class:`CyclicOrUnresolvableUnitError` instead of
unbounded recursion.

INVARIANT: canonicalize(canonicalize(q)) == canonicalize(q).
"""

from __future__ import annotations

import logging
from decimal import Decimal

from quantal.domain.catalog import UnitCatalog
from quantal.domain.errors import (
    CyclicOrUnresolvableUnitError,
    IncompatibleDimensionsError,
    UnknownUnitError,
)
from quantal.domain.exponential import UNITY, Exponential, combine_factors, factor_power
from quantal.domain.metric import Metric
from quantal.domain.quantity import Quantity

logger = logging.getLogger(__name__)

DEFAULT_MAX_HOPS = 32

Reduction = tuple[Metric, Exponential, Decimal | None]


class Conversions:
    """Quantity algebra over an explicitly supplied, read-only catalog."""

    def __init__(self, catalog: UnitCatalog, *, max_hops: int = DEFAULT_MAX_HOPS) -> None:
        self.catalog = catalog
        self.max_hops = max_hops

    # ------------------------------------------------------------------
    # Reduction
    # ------------------------------------------------------------------

    def reduce(self, metric: Metric) -> Reduction:
        """Reduce *metric* to base axes: ``(base metric, scale, offset)``.

        Raises:
            UnknownUnitError: If an axis of *metric* itself is unknown, or an
                offset unit is combined with other axes or exponents.
            CyclicOrUnresolvableUnitError: If a definition chain loops,
                dangles, or exceeds ``max_hops``.
        """
        base_terms: list[tuple[str, int]] = []
        scale = UNITY
        offset: Decimal | None = None
        stack: list[tuple[str, int, tuple[str, ...]]] = [
            (atom, exponent, ()) for atom, exponent in reversed(metric.terms())
        ]

        while stack:
            atom, exponent, path = stack.pop()
            if self.catalog.is_base(atom):
                base_terms.append((atom, exponent))
                continue
            if atom in path:
                chain = " -> ".join((*path, atom))
                msg = f"Cyclic unit definition: {chain}"
                raise CyclicOrUnresolvableUnitError(msg)
            if len(path) >= self.max_hops:
                msg = f"Unit {path[0]!r} did not reduce to base units within {self.max_hops} hops"
                raise CyclicOrUnresolvableUnitError(msg)

            if not path:
                # An unknown atom written by the caller is a caller error.
                self.catalog.lookup(atom)
            try:
                defined_in, factor, unit_offset = self.catalog.base_composition(atom)
            except UnknownUnitError as exc:
                origin = path[0] if path else atom
                msg = f"Definition of {origin!r} does not resolve: {exc}"
                raise CyclicOrUnresolvableUnitError(msg) from exc

            if unit_offset is not None:
                if path or exponent != 1 or len(metric.axes) != 1:
                    msg = f"Offset unit {atom!r} cannot be combined with other units or exponents"
                    raise UnknownUnitError(msg)
                offset = unit_offset

            scale = combine_factors(scale, factor_power(factor, exponent))
            child_path = (*path, atom)
            for sub_atom, sub_exponent in reversed(defined_in.terms()):
                stack.append((sub_atom, sub_exponent * exponent, child_path))

        return Metric.from_terms(base_terms), scale, offset

    def is_compatible(self, first: Metric, second: Metric) -> bool:
        """True when both Metrics reduce to the same base-axis composition."""
        return self.reduce(first)[0] == self.reduce(second)[0]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def canonicalize(self, quantity: Quantity) -> Quantity:
        """Express *quantity* in base units only."""
        metric, scale, offset = self.reduce(quantity.metric)
        value = quantity.value.scale(scale)
        if offset is not None:
            value = value.shift(offset)
        logger.debug("canonicalize %s -> %s %s", quantity, value, metric)
        return Quantity(value, metric)

    def multiply(self, first: Quantity, second: Quantity) -> Quantity:
        a, b = self.canonicalize(first), self.canonicalize(second)
        return Quantity(a.value.multiply(b.value), a.metric.multiply(b.metric))

    def divide(self, first: Quantity, second: Quantity) -> Quantity:
        """Raises DivisionByZeroError when *second* is zero-valued."""
        a, b = self.canonicalize(first), self.canonicalize(second)
        return Quantity(a.value.divide(b.value), a.metric.divide(b.metric))

    def add(self, first: Quantity, second: Quantity) -> Quantity:
        a, b = self._compatible_pair(first, second, "add")
        return Quantity(a.value.add(b.value), a.metric)

    def subtract(self, first: Quantity, second: Quantity) -> Quantity:
        a, b = self._compatible_pair(first, second, "subtract")
        return Quantity(a.value.subtract(b.value), a.metric)

    def compare(self, first: Quantity, second: Quantity) -> int:
        """-1, 0 or 1; equality is tolerance-aware (see Exponential.compare)."""
        a, b = self._compatible_pair(first, second, "compare")
        return a.value.compare(b.value)

    def convert_to(self, quantity: Quantity, target: str) -> Quantity:
        """Express *quantity* in the *target* unit expression.

        Dividing by the target scale gives back the digits that scale
        contributed, but never drops below the input's precision, so a round
        trip (``1 [in_i]`` to ``[in_i]``) returns ``1``. The result carries
        the target Metric (not reduced to base units).

        Raises:
            UnknownUnitError: If *target* does not resolve.
            IncompatibleDimensionsError: If the dimensions differ.
        """
        target_metric = self.catalog.resolve(target)
        canonical = self.canonicalize(quantity)
        base_metric, scale, offset = self.reduce(target_metric)
        if canonical.metric != base_metric:
            msg = (
                f"Cannot convert {canonical.unit or '(dimensionless)'} "
                f"to {target!r} ({base_metric.to_canonical_string() or 'dimensionless'})"
            )
            raise IncompatibleDimensionsError(msg)
        value = canonical.value
        if offset is not None:
            value = value.shift(-offset)
        return Quantity(value.unscale(scale, floor=quantity.value.precision), target_metric)

    def _compatible_pair(self, first: Quantity, second: Quantity, op: str) -> tuple[Quantity, Quantity]:
        a, b = self.canonicalize(first), self.canonicalize(second)
        if a.metric != b.metric:
            msg = (
                f"Cannot {op} {a.unit or '(dimensionless)'} and {b.unit or '(dimensionless)'}: "
                "dimensions differ"
            )
            raise IncompatibleDimensionsError(msg)
        return a, b
