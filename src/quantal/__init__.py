"""quantal — UCUM quantity canonicalization and arithmetic."""

__version__ = "0.1.0"

UCUM_SYSTEM = "http://unitsofmeasure.org"
