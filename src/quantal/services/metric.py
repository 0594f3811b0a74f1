"""MetricService — string triples in, ServiceResult out.

Marshals ``(value, unit, system)`` tuples into engine types, runs the
conversion engine, and serializes the result back:

- ``value`` is formatted with :meth:`Exponential.format`
- ``unit`` is the Metric's canonical string (empty when dimensionless)
- ``system`` is always the UCUM identifier

Quantities in any other unit system are rejected with
``UNSUPPORTED_SYSTEM``, except by :meth:`MetricService.compare`, which
falls back to literal unit-symbol equality when both sides use the same
foreign system.
"""

from __future__ import annotations

from typing import Any

from quantal import UCUM_SYSTEM
from quantal.domain.errors import IncompatibleDimensionsError, UnsupportedSystemError
from quantal.domain.exponential import Exponential
from quantal.domain.metric import DIMENSIONLESS
from quantal.domain.quantity import Quantity
from quantal.services.base import BaseService
from quantal.services.result import ServiceResult

QuantityTuple = tuple[str, str | None, str]


class MetricService(BaseService):
    """Adapter exposing the quantity algebra engine."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def canonicalize(self, quantity: QuantityTuple) -> ServiceResult:
        """Express *quantity* in UCUM base units."""

        def action() -> dict[str, Any]:
            return self._to_tuple(self._conversions.canonicalize(self._to_quantity(quantity)))

        return self._run("canonicalize", action)

    def multiply(self, first: QuantityTuple, second: QuantityTuple) -> ServiceResult:
        def action() -> dict[str, Any]:
            product = self._conversions.multiply(self._to_quantity(first), self._to_quantity(second))
            return self._to_tuple(product)

        return self._run("multiply", action)

    def divide(self, first: QuantityTuple, second: QuantityTuple) -> ServiceResult:
        """Fails with ``DIVISION_BY_ZERO`` when *second* is zero-valued."""

        def action() -> dict[str, Any]:
            quotient = self._conversions.divide(self._to_quantity(first), self._to_quantity(second))
            return self._to_tuple(quotient)

        return self._run("divide", action)

    def add(self, first: QuantityTuple, second: QuantityTuple) -> ServiceResult:
        def action() -> dict[str, Any]:
            total = self._conversions.add(self._to_quantity(first), self._to_quantity(second))
            return self._to_tuple(total)

        return self._run("add", action)

    def subtract(self, first: QuantityTuple, second: QuantityTuple) -> ServiceResult:
        def action() -> dict[str, Any]:
            difference = self._conversions.subtract(self._to_quantity(first), self._to_quantity(second))
            return self._to_tuple(difference)

        return self._run("subtract", action)

    def compare(self, first: QuantityTuple, second: QuantityTuple) -> ServiceResult:
        """``data["comparison"]`` is -1, 0 or 1 (tolerance-aware equality).

        Two quantities in the same non-UCUM system compare by value when
        their unit symbols are identical.
        """

        def action() -> dict[str, Any]:
            if _system(first) != UCUM_SYSTEM or _system(second) != UCUM_SYSTEM:
                return {"comparison": _compare_literal(first, second)}
            comparison = self._conversions.compare(self._to_quantity(first), self._to_quantity(second))
            return {"comparison": comparison}

        return self._run("compare", action)

    def convert_to(self, quantity: QuantityTuple, target_unit: str) -> ServiceResult:
        """Express *quantity* in *target_unit* (any compatible expression)."""

        def action() -> dict[str, Any]:
            converted = self._conversions.convert_to(self._to_quantity(quantity), target_unit)
            return self._to_tuple(converted)

        return self._run("convert_to", action, meta={"target": target_unit})

    # ------------------------------------------------------------------
    # Marshalling
    # ------------------------------------------------------------------

    def _to_quantity(self, quantity: QuantityTuple) -> Quantity:
        value, unit, system = quantity
        if system != UCUM_SYSTEM:
            msg = f"Unsupported unit system {system!r}; expected {UCUM_SYSTEM}"
            raise UnsupportedSystemError(msg)
        metric = self._catalog.resolve(unit) if unit else DIMENSIONLESS
        return Quantity(Exponential.parse(value), metric)

    @staticmethod
    def _to_tuple(quantity: Quantity) -> dict[str, Any]:
        return {"value": quantity.value.format(), "unit": quantity.unit, "system": UCUM_SYSTEM}


def _system(quantity: QuantityTuple) -> str:
    return quantity[2]


def _compare_literal(first: QuantityTuple, second: QuantityTuple) -> int:
    """Compare quantities outside UCUM by value, requiring identical units."""
    if _system(first) != _system(second):
        msg = f"Cannot compare quantities from different unit systems: {_system(first)!r}, {_system(second)!r}"
        raise UnsupportedSystemError(msg)
    if (first[1] or "") != (second[1] or ""):
        msg = f"Cannot compare {first[1]!r} and {second[1]!r} outside UCUM: units differ"
        raise IncompatibleDimensionsError(msg)
    return Exponential.parse(first[0]).compare(Exponential.parse(second[0]))
