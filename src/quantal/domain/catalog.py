"""Unit catalog — an immutable lookup table of base units, prefixes and units.

The catalog answers two questions:

- ``resolve(expression)``: is this a valid unit expression, and what Metric
  does it denote (over the atoms as written)?
- ``base_composition(atom)``: one definition hop for a single atom —
  the Metric it is defined in, the exact scale factor, and the offset.

Following hops down to base units is the conversion engine's job
(:mod:`quantal.domain.conversions`), which guards against cycles.

INVARIANT: A catalog is never mutated after construction, so lookups need
no locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from decimal import Decimal

from quantal.domain.errors import DefinitionError, UnknownUnitError
from quantal.domain.exponential import UNITY, Exponential, combine_factors
from quantal.domain.expression import parse_expression
from quantal.domain.metric import Metric


@dataclass(frozen=True)
class BaseUnit:
    """A base axis of the unit system (``m``, ``s``, ``g`` ...)."""

    symbol: str
    dimension: str
    name: str = ""


@dataclass(frozen=True)
class Prefix:
    """A metric prefix with its exact power-of-ten factor."""

    symbol: str
    factor: Exponential
    name: str = ""


@dataclass(frozen=True)
class UnitDefinition:
    """A unit defined as ``value`` times the unit expression ``unit``.

    Attributes:
        symbol: Case-sensitive UCUM symbol.
        value: Exact factor (one of this unit is ``value`` of ``unit``).
        unit: Defining unit expression; may reference other derived units.
        offset: Added after scaling for non-ratio scales (``Cel``).
        metric: Whether metric prefixes may be applied.
        name: Human-readable name.
        property: The kind of quantity measured (``length``, ``pressure``).
    """

    symbol: str
    value: Exponential
    unit: str
    offset: Decimal | None = None
    metric: bool = False
    name: str = ""
    property: str = ""


Composition = tuple[Metric, Exponential, Decimal | None]


class UnitCatalog:
    """Immutable, symbol-keyed table of unit definitions.

    Usage::

        catalog = UnitCatalog(base_units, prefixes, units)
        catalog.resolve("km/h")          # Metric over km and h
        catalog.base_composition("km")   # (Metric m, 1e3, None)
    """

    def __init__(
        self,
        base_units: Iterable[BaseUnit],
        prefixes: Iterable[Prefix],
        units: Iterable[UnitDefinition],
        *,
        name: str = "",
    ) -> None:
        self.name = name
        self._base: dict[str, BaseUnit] = {}
        self._prefixes: dict[str, Prefix] = {}
        self._units: dict[str, UnitDefinition] = {}

        for base in base_units:
            self._register(self._base, base.symbol, base)
        for prefix in prefixes:
            if prefix.symbol in self._prefixes:
                msg = f"Duplicate prefix symbol: {prefix.symbol!r}"
                raise DefinitionError(msg)
            self._prefixes[prefix.symbol] = prefix
        for unit in units:
            self._register(self._units, unit.symbol, unit)
            if unit.offset is not None:
                self._check_offset_unit(unit)

        # Longest prefix first so "da" wins over "d".
        self._prefix_order = sorted(self._prefixes, key=len, reverse=True)

    def _register(self, table: dict[str, object], symbol: str, entry: object) -> None:
        if symbol in self._base or symbol in self._units:
            msg = f"Duplicate unit symbol: {symbol!r}"
            raise DefinitionError(msg)
        table[symbol] = entry

    def _check_offset_unit(self, unit: UnitDefinition) -> None:
        terms = parse_expression(unit.unit)
        if len(terms) != 1 or terms[0][1] != 1 or terms[0][0] not in self._base:
            msg = f"Offset unit {unit.symbol!r} must be defined on a single base unit, got {unit.unit!r}"
            raise DefinitionError(msg)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, atom: str) -> tuple[Prefix | None, BaseUnit | UnitDefinition]:
        """Split *atom* into an optional prefix and its unit entry.

        Literal symbols win over prefix decompositions (``cd`` is candela,
        ``Pa`` is pascal).

        Raises:
            UnknownUnitError: If *atom* is neither a literal nor prefix + metric unit.
        """
        entry = self._literal(atom)
        if entry is not None:
            return None, entry
        for symbol in self._prefix_order:
            if not atom.startswith(symbol) or len(atom) == len(symbol):
                continue
            entry = self._literal(atom[len(symbol) :])
            if entry is not None and self._accepts_prefix(entry):
                return self._prefixes[symbol], entry
        msg = f"Unknown unit: {atom!r}"
        raise UnknownUnitError(msg)

    def _literal(self, symbol: str) -> BaseUnit | UnitDefinition | None:
        return self._base.get(symbol) or self._units.get(symbol)

    @staticmethod
    def _accepts_prefix(entry: BaseUnit | UnitDefinition) -> bool:
        return isinstance(entry, BaseUnit) or entry.metric

    def is_base(self, atom: str) -> bool:
        """True for an unprefixed base-unit symbol."""
        return atom in self._base

    def resolve(self, expression: str) -> Metric:
        """Validate a unit expression and return its Metric over the atoms.

        Raises:
            UnknownUnitError: On malformed expressions or unknown atoms.
        """
        terms = parse_expression(expression)
        for atom, _ in terms:
            self.lookup(atom)
        return Metric.from_terms(terms)

    def base_composition(self, atom: str) -> Composition:
        """One definition hop for *atom*: ``(metric, scale, offset)``.

        Base units map to themselves with scale one. Prefixes multiply the
        unit's scale by their power-of-ten factor.

        Raises:
            UnknownUnitError: If *atom* does not resolve.
        """
        prefix, entry = self.lookup(atom)
        if isinstance(entry, BaseUnit):
            metric, scale, offset = Metric.of(entry.symbol), UNITY, None
        else:
            metric, scale, offset = self.resolve(entry.unit), entry.value, entry.offset
        if prefix is not None:
            scale = combine_factors(scale, prefix.factor)
        return metric, scale, offset

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def base_units(self) -> list[BaseUnit]:
        return list(self._base.values())

    @property
    def prefixes(self) -> list[Prefix]:
        return list(self._prefixes.values())

    def units(self, *, property: str | None = None) -> Iterator[UnitDefinition]:  # noqa: A002
        """Iterate unit definitions, optionally only those measuring *property*."""
        for unit in self._units.values():
            if property is None or unit.property == property:
                yield unit

    def __contains__(self, atom: object) -> bool:
        if not isinstance(atom, str):
            return False
        try:
            self.lookup(atom)
        except UnknownUnitError:
            return False
        return True

    def __len__(self) -> int:
        return len(self._base) + len(self._units)
