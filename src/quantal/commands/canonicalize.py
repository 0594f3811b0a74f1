"""Command: express a quantity in UCUM base units."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from quantal.commands._base import SIGNED_ARGS, QuantalCommand, system_option

if TYPE_CHECKING:
    from quantal.commands._context import AppContext


@click.command(
    cls=QuantalCommand,
    context_settings=SIGNED_ARGS,
    examples="""\
  quantal canonicalize 1 km
  quantal canonicalize 1 '[in_i]'
  quantal canonicalize -- -80 cm
  quantal canonicalize 20 Cel
  quantal --json canonicalize 2 'kg.m/s2'""",
)
@click.argument("value")
@click.argument("unit", required=False, default="")
@system_option
@click.pass_obj
def canonicalize(app: AppContext, value: str, unit: str, system: str) -> None:
    """Express VALUE UNIT in base units (UNIT omitted means dimensionless)."""
    app.emit(app.metric_service.canonicalize((value, unit, system)))
