"""Catalog bootstrap — load the static unit definition table.

The table is TOML (``data/ucum.toml`` ships with the package). Its shape is
validated with Pydantic before any domain object is built, so a malformed
table fails once, at load time, with :class:`DefinitionError`.

The process-wide default catalog is built on first use under a lock:
the first caller builds it, every other caller observes the finished,
immutable instance.
"""

from __future__ import annotations

import logging
import threading
import tomllib
from decimal import Decimal, InvalidOperation
from importlib.resources import files
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from quantal.domain.catalog import BaseUnit, Prefix, UnitCatalog, UnitDefinition
from quantal.domain.errors import DefinitionError, ParseError
from quantal.domain.exponential import Exponential

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "ucum.toml"


# ---------------------------------------------------------------------------
# Table schema
# ---------------------------------------------------------------------------


class BaseUnitSpec(BaseModel):
    """[base] entry."""

    model_config = {"frozen": True, "extra": "forbid"}

    dimension: str
    name: str = ""


class PrefixSpec(BaseModel):
    """[prefixes] entry."""

    model_config = {"frozen": True, "extra": "forbid"}

    factor: str
    name: str = ""


class UnitSpec(BaseModel):
    """[units] entry."""

    model_config = {"frozen": True, "extra": "forbid"}

    value: str
    unit: str
    offset: str | None = None
    metric: bool = False
    name: str = ""
    property: str = ""

    @field_validator("offset")
    @classmethod
    def _offset_is_decimal(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                Decimal(value)
            except InvalidOperation as exc:
                msg = f"offset must be a decimal literal, got {value!r}"
                raise ValueError(msg) from exc
        return value


class DefinitionTable(BaseModel):
    """The whole definition file."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str = ""
    base: dict[str, BaseUnitSpec]
    prefixes: dict[str, PrefixSpec] = Field(default_factory=dict)
    units: dict[str, UnitSpec] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def read_table(path: Path | None = None) -> dict[str, Any]:
    """Read the raw TOML table from *path*, or the packaged UCUM table."""
    try:
        if path is None:
            resource = files("quantal.infrastructure").joinpath("data").joinpath(DEFAULT_TABLE)
            raw = resource.read_text(encoding="utf-8")
        else:
            raw = path.read_text(encoding="utf-8")
        return tomllib.loads(raw)
    except OSError as exc:
        msg = f"Cannot read unit definitions from {path or DEFAULT_TABLE}: {exc}"
        raise DefinitionError(msg) from exc
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path or DEFAULT_TABLE}: {exc}"
        raise DefinitionError(msg) from exc


def build_catalog(data: dict[str, Any]) -> UnitCatalog:
    """Validate a raw definition table and build a :class:`UnitCatalog`."""
    try:
        table = DefinitionTable.model_validate(data)
    except ValidationError as exc:
        msg = f"Malformed unit definition table: {exc}"
        raise DefinitionError(msg) from exc

    try:
        base_units = [
            BaseUnit(symbol=symbol, dimension=spec.dimension, name=spec.name)
            for symbol, spec in table.base.items()
        ]
        prefixes = [
            Prefix(symbol=symbol, factor=Exponential.parse(spec.factor), name=spec.name)
            for symbol, spec in table.prefixes.items()
        ]
        units = [
            UnitDefinition(
                symbol=symbol,
                value=Exponential.parse(spec.value),
                unit=spec.unit,
                offset=Decimal(spec.offset) if spec.offset is not None else None,
                metric=spec.metric,
                name=spec.name,
                property=spec.property,
            )
            for symbol, spec in table.units.items()
        ]
    except ParseError as exc:
        msg = f"Malformed factor in unit definition table: {exc}"
        raise DefinitionError(msg) from exc

    catalog = UnitCatalog(base_units, prefixes, units, name=table.name)
    logger.debug(
        "Built unit catalog %r: %d base units, %d prefixes, %d units",
        table.name,
        len(base_units),
        len(prefixes),
        len(units),
    )
    return catalog


def load_catalog(path: Path | None = None) -> UnitCatalog:
    """Load a catalog from *path*; ``None`` returns the shared default."""
    if path is None:
        return default_catalog()
    return build_catalog(read_table(path))


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------

_default: UnitCatalog | None = None
_default_lock = threading.Lock()


def default_catalog() -> UnitCatalog:
    """The packaged UCUM catalog, built exactly once per process."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = build_catalog(read_table())
    return _default
