"""UCUM unit-expression parsing.

Supports the subset of the UCUM grammar needed to name composite units:

- ``.`` multiplies and ``/`` divides (left-associative; a leading ``/``
  inverts the first component)
- integer exponents written directly after the atom (``m2``, ``s-1``);
  ``10*3`` and ``10^3`` are the atoms ``10*`` and ``10^`` cubed
- parentheses for grouping (``kg/(m.s2)``)
- curly-brace annotations, which carry no dimension (``{count}``)
- the literal ``1`` for "dimensionless"

The parser knows nothing about which atoms exist; the catalog validates them.
"""

from __future__ import annotations

import re

from quantal.domain.errors import UnknownUnitError

Term = tuple[str, int]

_EXPONENT = re.compile(r"^(?P<atom>.*?)(?P<exp>[+-]?\d+)?$")
_DELIMITERS = frozenset("./(){}")


def parse_expression(expression: str) -> list[Term]:
    """Split a UCUM expression into ``(atom, exponent)`` terms.

    Repeated atoms are returned as separate terms; callers merge them.

    Examples:
        >>> parse_expression("kg.m/s2")
        [('kg', 1), ('m', 1), ('s', -2)]
        >>> parse_expression("10*3/L")
        [('10*', 3), ('L', -1)]

    Raises:
        UnknownUnitError: If the expression is malformed.
    """
    text = expression.strip()
    if not text:
        return []
    parser = _Parser(text)
    terms = parser.term()
    if parser.pos != len(text):
        raise _malformed(text, parser.pos)
    return terms


class _Parser:
    """Recursive-descent parser over a single expression string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def term(self) -> list[Term]:
        sign = 1
        if self.peek() == "/":
            self.pos += 1
            sign = -1
        terms = _signed(self.component(), sign)
        while self.peek() in (".", "/"):
            sign = -1 if self.peek() == "/" else 1
            self.pos += 1
            terms.extend(_signed(self.component(), sign))
        return terms

    def component(self) -> list[Term]:
        char = self.peek()
        if char == "(":
            self.pos += 1
            inner = self.term()
            if self.peek() != ")":
                raise _malformed(self.text, self.pos)
            self.pos += 1
            return inner
        if char == "{":
            self.annotation()
            return []
        terms = self.simple_unit()
        if self.peek() == "{":
            self.annotation()
        return terms

    def annotation(self) -> None:
        end = self.text.find("}", self.pos)
        if end < 0:
            raise _malformed(self.text, self.pos)
        self.pos = end + 1

    def simple_unit(self) -> list[Term]:
        start = self.pos
        depth = 0
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == "[":
                depth += 1
            elif char == "]":
                depth -= 1
            elif depth == 0 and char in _DELIMITERS:
                break
            self.pos += 1
        raw = self.text[start : self.pos]
        if not raw or depth != 0:
            raise _malformed(self.text, start)

        match = _EXPONENT.match(raw)
        assert match is not None  # the pattern accepts any string
        atom = match.group("atom")
        exponent = int(match.group("exp")) if match.group("exp") else 1
        if not atom:
            # A bare integer: only the unity factor carries no scale.
            if raw == "1":
                return []
            msg = f"Numeric factor {raw!r} is not supported in unit expressions"
            raise UnknownUnitError(msg)
        return [(atom, exponent)]


def _signed(terms: list[Term], sign: int) -> list[Term]:
    return [(atom, exponent * sign) for atom, exponent in terms]


def _malformed(text: str, pos: int) -> UnknownUnitError:
    return UnknownUnitError(f"Malformed unit expression {text!r} at position {pos}")
