"""Metric — a unit as a dimension vector.

A Metric is an ordered set of :class:`Axis` values keyed by symbol. The
symbols may be any catalog atoms (``km``, ``[in_i]``); after
canonicalization they are base-unit symbols only.

INVARIANT: No axis has exponent 0, and axes are sorted by symbol, so equal
dimensional content always yields identical structure and text.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Axis:
    """One unit symbol raised to a non-zero integer exponent."""

    symbol: str
    exponent: int = 1

    def __post_init__(self) -> None:
        if self.exponent == 0:
            msg = f"Axis {self.symbol!r} cannot have exponent 0"
            raise ValueError(msg)

    def __str__(self) -> str:
        if self.exponent == 1:
            return self.symbol
        return f"{self.symbol}{self.exponent}"


@dataclass(frozen=True)
class Metric:
    """Immutable dimension vector; the empty Metric is dimensionless."""

    axes: tuple[Axis, ...] = ()

    @classmethod
    def from_terms(cls, terms: Iterable[tuple[str, int]]) -> Metric:
        """Build a Metric from ``(symbol, exponent)`` pairs, merging repeats."""
        exponents: dict[str, int] = {}
        for symbol, exponent in terms:
            exponents[symbol] = exponents.get(symbol, 0) + exponent
        return cls._from_exponents(exponents)

    @classmethod
    def of(cls, symbol: str, exponent: int = 1) -> Metric:
        """A single-axis Metric."""
        return cls.from_terms([(symbol, exponent)])

    @classmethod
    def _from_exponents(cls, exponents: dict[str, int]) -> Metric:
        axes = sorted(Axis(symbol, exp) for symbol, exp in exponents.items() if exp != 0)
        return cls(tuple(axes))

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def multiply(self, other: Metric) -> Metric:
        return Metric.from_terms([*self.terms(), *other.terms()])

    def divide(self, other: Metric) -> Metric:
        return Metric.from_terms([*self.terms(), *other.power(-1).terms()])

    def power(self, exponent: int) -> Metric:
        """Raise every axis to *exponent* (``power(0)`` is dimensionless)."""
        return Metric.from_terms((axis.symbol, axis.exponent * exponent) for axis in self.axes)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def terms(self) -> list[tuple[str, int]]:
        return [(axis.symbol, axis.exponent) for axis in self.axes]

    @property
    def is_dimensionless(self) -> bool:
        return not self.axes

    def to_canonical_string(self) -> str:
        """``m2``, ``g.m-1.s-2``; the empty string when dimensionless."""
        return ".".join(str(axis) for axis in self.axes)

    def __str__(self) -> str:
        return self.to_canonical_string()


DIMENSIONLESS = Metric()
