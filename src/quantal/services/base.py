"""BaseService — foundation for quantal services.

Every service receives a read-only :class:`UnitCatalog` at construction
time instead of reaching for a process-wide singleton, so tests can run
against a handful of units. Engine failures are translated into
``ServiceResult`` here, in one place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from quantal.domain.catalog import UnitCatalog
from quantal.domain.conversions import DEFAULT_MAX_HOPS, Conversions
from quantal.domain.errors import QuantalError
from quantal.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Subclasses implement operations as small functions returning result
    data and hand them to :meth:`_run`::

        class UnitsService(BaseService):
            def describe(self, symbol: str) -> ServiceResult:
                return self._run("describe", lambda: {"symbol": symbol})
    """

    def __init__(self, catalog: UnitCatalog, *, max_hops: int = DEFAULT_MAX_HOPS) -> None:
        self._catalog = catalog
        self._conversions = Conversions(catalog, max_hops=max_hops)

    def _run(
        self,
        op: str,
        action: Callable[[], dict[str, Any]],
        *,
        meta: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Execute *action*; map engine failures to an error result.

        INVARIANT: Only :class:`QuantalError` is converted. Anything else is
        a bug and propagates.
        """
        try:
            data = action()
        except QuantalError as exc:
            logger.debug("service.failed op=%s code=%s: %s", op, exc.code, exc)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code=exc.code, message=str(exc), detail={"kind": type(exc).__name__}),
                meta=meta,
            )
        logger.debug("service.complete op=%s fields=%s", op, sorted(data))
        return ServiceResult(ok=True, op=op, data=data, meta=meta)
