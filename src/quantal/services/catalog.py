"""CatalogService — read-only views over the unit catalog."""

from __future__ import annotations

from typing import Any

from quantal.services.base import BaseService
from quantal.services.result import ServiceResult


class CatalogService(BaseService):
    """Lists and explains catalog entries."""

    def list_units(self, *, property: str | None = None) -> ServiceResult:  # noqa: A002
        """All unit definitions, optionally only those measuring *property*."""

        def action() -> dict[str, Any]:
            units = [
                {
                    "symbol": unit.symbol,
                    "name": unit.name,
                    "property": unit.property,
                    "definition": f"{unit.value.format()} {unit.unit}",
                    "metric": unit.metric,
                }
                for unit in self._catalog.units(property=property)
            ]
            return {"count": len(units), "units": units}

        return self._run("list_units", action, meta={"catalog": self._catalog.name})

    def describe(self, expression: str) -> ServiceResult:
        """Reduce a unit expression and report its base form and scale."""

        def action() -> dict[str, Any]:
            metric = self._catalog.resolve(expression)
            base, scale, offset = self._conversions.reduce(metric)
            return {
                "expression": expression,
                "unit": metric.to_canonical_string(),
                "canonical": base.to_canonical_string(),
                "scale": scale.format(),
                "offset": str(offset) if offset is not None else None,
            }

        return self._run("describe", action)

    def compatible(self, first: str, second: str) -> ServiceResult:
        """Whether two unit expressions share a base-axis composition."""

        def action() -> dict[str, Any]:
            a, b = self._catalog.resolve(first), self._catalog.resolve(second)
            return {"compatible": self._conversions.is_compatible(a, b)}

        return self._run("compatible", action)
