"""Command group: browse the unit catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from quantal.commands._base import QuantalGroup

if TYPE_CHECKING:
    from quantal.commands._context import AppContext


@click.group(
    cls=QuantalGroup,
    examples="""\
  quantal units list
  quantal units list --property length
  quantal units describe 'kg.m/s2'
  quantal units compatible J 'N.m'""",
)
def units() -> None:
    """Inspect the units the catalog knows about."""


@units.command(
    "list",
    examples="""\
  quantal units list
  quantal units list --property pressure
  quantal --json units list""",
)
@click.option("--property", "property_", default=None, help="Only units measuring this property.")
@click.pass_obj
def list_units(app: AppContext, property_: str | None) -> None:
    """List defined units with their definitions."""
    app.emit(app.catalog_service.list_units(property=property_))


@units.command(
    examples="""\
  quantal units describe N
  quantal units describe 'mm[Hg]'
  quantal units describe Cel""",
)
@click.argument("expression")
@click.pass_obj
def describe(app: AppContext, expression: str) -> None:
    """Show the base form and scale of a unit EXPRESSION."""
    app.emit(app.catalog_service.describe(expression))


@units.command(
    examples="""\
  quantal units compatible J 'N.m'
  quantal units compatible m s""",
)
@click.argument("first")
@click.argument("second")
@click.pass_obj
def compatible(app: AppContext, first: str, second: str) -> None:
    """Check whether FIRST and SECOND measure the same dimension."""
    app.emit(app.catalog_service.compatible(first, second))
