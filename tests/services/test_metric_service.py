"""Tests for MetricService — string triples in, ServiceResult out."""

import pytest

from quantal import UCUM_SYSTEM
from quantal.domain.catalog import UnitCatalog
from quantal.services.metric import MetricService

OTHER_SYSTEM = "http://example.org/units"


@pytest.fixture
def svc(ucum_catalog: UnitCatalog) -> MetricService:
    return MetricService(ucum_catalog)


def u(value: str, unit: str | None) -> tuple[str, str | None, str]:
    return (value, unit, UCUM_SYSTEM)


class TestCanonicalize:
    @pytest.mark.parametrize(
        ("value", "unit", "expected_value", "expected_unit"),
        [
            ("1", "m", "1", "m"),
            ("1", "km", "1000", "m"),
            ("1", "[in_i]", "0.025400", "m"),
            ("-80", "cm", "-0.800", "m"),
        ],
    )
    def test_reduction(
        self,
        svc: MetricService,
        value: str,
        unit: str,
        expected_value: str,
        expected_unit: str,
    ) -> None:
        result = svc.canonicalize(u(value, unit))
        assert result.ok
        assert result.op == "canonicalize"
        assert result.quantity == (expected_value, expected_unit, UCUM_SYSTEM)

    @pytest.mark.parametrize("unit", [None, "", "1"])
    def test_dimensionless(self, svc: MetricService, unit: str | None) -> None:
        assert svc.canonicalize(u("42", unit)).quantity == ("42", "", UCUM_SYSTEM)

    def test_unknown_unit(self, svc: MetricService) -> None:
        result = svc.canonicalize(u("1", "blub"))
        assert not result.ok
        assert result.quantity is None
        assert result.error is not None
        assert result.error.code == "UNKNOWN_UNIT"
        assert "blub" in result.error.message
        assert result.error.detail == {"kind": "UnknownUnitError"}

    def test_bad_number(self, svc: MetricService) -> None:
        result = svc.canonicalize(u("one", "m"))
        assert result.error is not None
        assert result.error.code == "PARSE_ERROR"

    def test_foreign_system(self, svc: MetricService) -> None:
        result = svc.canonicalize(("1", "m", OTHER_SYSTEM))
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_SYSTEM"


class TestDivide:
    @pytest.mark.parametrize(
        ("first", "second", "expected"),
        [
            (("1", "m"), ("1", "m"), ("1", "")),
            (("1", "m2"), ("1", "m"), ("1", "m")),
            (("1", "[in_i]"), ("1", "m"), ("0.025400", "")),
            (("6", "m"), ("2", "m"), ("3", "")),
        ],
    )
    def test_divide(
        self,
        svc: MetricService,
        first: tuple[str, str],
        second: tuple[str, str],
        expected: tuple[str, str],
    ) -> None:
        result = svc.divide(u(*first), u(*second))
        assert result.quantity == (*expected, UCUM_SYSTEM)

    def test_unknown_unit(self, svc: MetricService) -> None:
        result = svc.divide(u("1", "blub"), u("1", "m"))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_UNIT"

    def test_division_by_zero(self, svc: MetricService) -> None:
        result = svc.divide(u("1", "m"), u("0", "s"))
        assert result.error is not None
        assert result.error.code == "DIVISION_BY_ZERO"


class TestMultiply:
    @pytest.mark.parametrize(
        ("first", "second", "expected"),
        [
            (("1", "m"), ("1", "m"), ("1", "m2")),
            (("1", "m2"), ("1", "m"), ("1", "m3")),
            (("1", "[in_i]"), ("1", "m"), ("0.025400", "m2")),
            (("1000", "m"), ("1", "km"), ("1000000", "m2")),
        ],
    )
    def test_multiply(
        self,
        svc: MetricService,
        first: tuple[str, str],
        second: tuple[str, str],
        expected: tuple[str, str],
    ) -> None:
        result = svc.multiply(u(*first), u(*second))
        assert result.quantity == (*expected, UCUM_SYSTEM)

    def test_unknown_unit(self, svc: MetricService) -> None:
        result = svc.multiply(u("1", "blub"), u("1", "m"))
        assert result.error is not None
        assert result.error.code == "UNKNOWN_UNIT"


class TestAddSubtract:
    def test_add(self, svc: MetricService) -> None:
        assert svc.add(u("1.5", "m"), u("20", "cm")).quantity == ("1.7", "m", UCUM_SYSTEM)

    def test_subtract(self, svc: MetricService) -> None:
        assert svc.subtract(u("1.5", "m"), u("20", "cm")).quantity == ("1.3", "m", UCUM_SYSTEM)

    def test_incompatible(self, svc: MetricService) -> None:
        result = svc.add(u("1", "m"), u("1", "s"))
        assert result.error is not None
        assert result.error.code == "INCOMPATIBLE_DIMENSIONS"


class TestCompare:
    @pytest.mark.parametrize(
        ("first", "second", "expected"),
        [
            (("1", "m"), ("1", "m"), 0),
            (("1", "m"), ("2", "m"), -1),
            (("2", "m"), ("1", "m"), 1),
            (("1", "m"), ("1", "km"), -1),
            (("1", "m"), ("10", "[in_i]"), 1),
        ],
    )
    def test_compare(
        self,
        svc: MetricService,
        first: tuple[str, str],
        second: tuple[str, str],
        expected: int,
    ) -> None:
        result = svc.compare(u(*first), u(*second))
        assert result.ok
        assert result.data == {"comparison": expected}

    def test_unknown_unit(self, svc: MetricService) -> None:
        result = svc.compare(u("1", "blub"), u("1", "m"))
        assert not result.ok
        assert "comparison" not in result.data

    def test_foreign_system_same_unit(self, svc: MetricService) -> None:
        result = svc.compare(("1", "blub", OTHER_SYSTEM), ("1", "blub", OTHER_SYSTEM))
        assert result.ok
        assert result.data["comparison"] == 0

    def test_foreign_system_orders_values(self, svc: MetricService) -> None:
        result = svc.compare(("2", "blub", OTHER_SYSTEM), ("1", "blub", OTHER_SYSTEM))
        assert result.data["comparison"] == 1

    def test_foreign_system_different_units(self, svc: MetricService) -> None:
        result = svc.compare(("1", "blub", OTHER_SYSTEM), ("1", "blob", OTHER_SYSTEM))
        assert result.error is not None
        assert result.error.code == "INCOMPATIBLE_DIMENSIONS"

    def test_mixed_systems(self, svc: MetricService) -> None:
        result = svc.compare(u("1", "m"), ("1", "m", OTHER_SYSTEM))
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_SYSTEM"


class TestConvertTo:
    def test_convert(self, svc: MetricService) -> None:
        result = svc.convert_to(u("1", "[mi_i]"), "km")
        assert result.ok
        assert result.quantity == ("1.60934400", "km", UCUM_SYSTEM)
        assert result.meta == {"target": "km"}

    def test_temperature(self, svc: MetricService) -> None:
        assert svc.convert_to(u("37.0", "Cel"), "K").quantity == ("310.2", "K", UCUM_SYSTEM)

    def test_incompatible(self, svc: MetricService) -> None:
        result = svc.convert_to(u("1", "m"), "s")
        assert result.error is not None
        assert result.error.code == "INCOMPATIBLE_DIMENSIONS"


class TestCyclicCatalog:
    def test_cycle_reported(self, broken_catalog: UnitCatalog) -> None:
        result = MetricService(broken_catalog).canonicalize(u("1", "[foo]"))
        assert result.error is not None
        assert result.error.code == "CYCLIC_UNIT"

    def test_hop_bound_configurable(self, mini_catalog: UnitCatalog) -> None:
        result = MetricService(mini_catalog, max_hops=1).canonicalize(u("1", "[ft_i]"))
        assert result.error is not None
        assert result.error.code == "CYCLIC_UNIT"
