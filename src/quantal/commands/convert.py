"""Command: express a quantity in another compatible unit."""

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
  quantal convert 1 '[mi_i]' km
  quantal convert 37 Cel K
  quantal convert 1 h --to s""",
)
@click.argument("value")
@click.argument("unit")
@click.argument("target", required=False)
@click.option("--to", "target_option", default=None, help="Target unit (alternative to TARGET).")
@system_option
@click.pass_obj
def convert(
    app: AppContext,
    value: str,
    unit: str,
    target: str | None,
    target_option: str | None,
    system: str,
) -> None:
    """Convert VALUE UNIT to TARGET."""
    goal = target_option or target
    if not goal:
        raise click.UsageError("A target unit is required (TARGET or --to).")
    app.emit(app.metric_service.convert_to((value, unit, system), goal))
