"""Command: compare two quantities."""

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
  quantal compare 1 m 1 km
  quantal compare 1 m 10 '[in_i]'
  quantal compare 100 cm 1 m
  quantal compare 5 mmol 5 mmol --system http://example.org/units""",
)
@click.argument("value1")
@click.argument("unit1")
@click.argument("value2")
@click.argument("unit2")
@system_option
@click.option(
    "--second-system",
    default=None,
    help="Unit system of the second quantity (defaults to --system).",
)
@click.pass_obj
def compare(
    app: AppContext,
    value1: str,
    unit1: str,
    value2: str,
    unit2: str,
    system: str,
    second_system: str | None,
) -> None:
    """Compare VALUE1 UNIT1 with VALUE2 UNIT2 (prints -1, 0 or 1)."""
    first = (value1, unit1, system)
    second = (value2, unit2, second_system or system)
    app.emit(app.metric_service.compare(first, second))
