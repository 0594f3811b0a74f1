"""Quantity — a precision-tracked value paired with a unit Metric."""

from __future__ import annotations

from dataclasses import dataclass

from quantal.domain.exponential import Exponential
from quantal.domain.metric import DIMENSIONLESS, Metric


@dataclass(frozen=True)
class Quantity:
    """Immutable value type; every operation produces a new Quantity."""

    value: Exponential
    metric: Metric = DIMENSIONLESS

    @property
    def unit(self) -> str:
        """The Metric's canonical text (empty when dimensionless)."""
        return self.metric.to_canonical_string()

    def with_value(self, value: Exponential) -> Quantity:
        return Quantity(value, self.metric)

    def __str__(self) -> str:
        if self.metric.is_dimensionless:
            return self.value.format()
        return f"{self.value.format()} {self.unit}"
