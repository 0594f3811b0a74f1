"""Typed failures raised by the quantity algebra engine.

Every kind stays distinct so adapters can report rich diagnostics.
The service layer maps each class to a stable ``ServiceError.code``.
"""

from __future__ import annotations


class QuantalError(Exception):
    """Base class for all engine failures."""

    code: str = "ERROR"


class ParseError(QuantalError, ValueError):
    """A numeric literal could not be parsed."""

    code = "PARSE_ERROR"


class UnknownUnitError(QuantalError, KeyError):
    """A unit symbol or expression does not resolve through the catalog."""

    code = "UNKNOWN_UNIT"

    def __str__(self) -> str:
        # KeyError quotes its argument; keep messages readable.
        return str(self.args[0]) if self.args else ""


class CyclicOrUnresolvableUnitError(QuantalError):
    """A definition chain never reaches base units (catalog data fault)."""

    code = "CYCLIC_UNIT"


class DivisionByZeroError(QuantalError, ZeroDivisionError):
    """The divisor's canonical value is zero."""

    code = "DIVISION_BY_ZERO"


class IncompatibleDimensionsError(QuantalError):
    """Operands reduce to different base-axis compositions."""

    code = "INCOMPATIBLE_DIMENSIONS"


class UnsupportedSystemError(QuantalError):
    """The quantity names a unit system other than UCUM."""

    code = "UNSUPPORTED_SYSTEM"


class DefinitionError(QuantalError):
    """The unit definition table is malformed."""

    code = "DEFINITION_ERROR"
