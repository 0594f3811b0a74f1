"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy catalog loading and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from quantal.domain.errors import QuantalError
from quantal.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from quantal.config.settings import QuantalSettings
    from quantal.domain.catalog import UnitCatalog
    from quantal.services.catalog import CatalogService
    from quantal.services.metric import MetricService
    from quantal.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The catalog is loaded on first use so ``--help`` and ``--version``
    never read the definition table.
    """

    def __init__(self, settings: QuantalSettings) -> None:
        self.settings = settings
        self._catalog: UnitCatalog | None = None

        from quantal.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def catalog(self) -> UnitCatalog:
        """The unit catalog (loaded lazily on first access)."""
        if self._catalog is None:
            from quantal.infrastructure.definitions import load_catalog

            try:
                self._catalog = load_catalog(self.settings.catalog.definitions)
            except QuantalError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._catalog

    @property
    def metric_service(self) -> MetricService:
        from quantal.services.metric import MetricService

        return MetricService(self.catalog, max_hops=self.settings.catalog.max_hops)

    @property
    def catalog_service(self) -> CatalogService:
        from quantal.services.catalog import CatalogService

        return CatalogService(self.catalog, max_hops=self.settings.catalog.max_hops)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
            width=self.settings.output.width,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
