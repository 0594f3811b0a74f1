"""Shared pytest fixtures and test helpers for quantal tests."""

from __future__ import annotations

import os
from typing import Any

import pytest
from click.testing import CliRunner

from quantal.domain.catalog import UnitCatalog
from quantal.domain.conversions import Conversions
from quantal.infrastructure.definitions import build_catalog, default_catalog

# A handful of units with the same shapes as the real table: base units,
# prefixes, a chained customary unit, a composite derived unit and an
# offset unit.
MINI_TABLE: dict[str, Any] = {
    "name": "mini",
    "base": {
        "m": {"dimension": "length", "name": "meter"},
        "s": {"dimension": "time", "name": "second"},
        "g": {"dimension": "mass", "name": "gram"},
        "K": {"dimension": "temperature", "name": "kelvin"},
    },
    "prefixes": {
        "k": {"factor": "1e3", "name": "kilo"},
        "c": {"factor": "1e-2", "name": "centi"},
        "m": {"factor": "1e-3", "name": "milli"},
    },
    "units": {
        "[in_i]": {"value": "2.54", "unit": "cm", "name": "inch", "property": "length"},
        "[ft_i]": {"value": "12", "unit": "[in_i]", "name": "foot", "property": "length"},
        "N": {"value": "1", "unit": "kg.m/s2", "metric": True, "name": "newton", "property": "force"},
        "min": {"value": "6e1", "unit": "s", "name": "minute", "property": "time"},
        "Cel": {
            "value": "1",
            "unit": "K",
            "offset": "273.15",
            "metric": True,
            "name": "degree Celsius",
            "property": "temperature",
        },
    },
}

# Definitions that never reach a base unit.
BROKEN_TABLE: dict[str, Any] = {
    "name": "broken",
    "base": {"m": {"dimension": "length"}},
    "units": {
        "[foo]": {"value": "2", "unit": "[bar]"},
        "[bar]": {"value": "3", "unit": "[foo].m"},
        "[loose]": {"value": "1", "unit": "[nowhere]"},
    },
}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def mini_catalog() -> UnitCatalog:
    """Small in-memory catalog built from MINI_TABLE."""
    return build_catalog(MINI_TABLE)


@pytest.fixture
def broken_catalog() -> UnitCatalog:
    """Catalog whose definitions loop or dangle."""
    return build_catalog(BROKEN_TABLE)


@pytest.fixture
def ucum_catalog() -> UnitCatalog:
    """The packaged UCUM catalog."""
    return default_catalog()


@pytest.fixture
def conversions(mini_catalog: UnitCatalog) -> Conversions:
    return Conversions(mini_catalog)


@pytest.fixture
def ucum(ucum_catalog: UnitCatalog) -> Conversions:
    """Conversion engine over the packaged UCUM catalog."""
    return Conversions(ucum_catalog)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep the developer's quantal.toml and QUANTAL_* env vars out of tests."""
    for key in list(os.environ):
        if key.startswith("QUANTAL_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
