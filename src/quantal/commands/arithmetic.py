"""Commands: multiply, divide, add and subtract two quantities.

All four share the ``VALUE1 UNIT1 VALUE2 UNIT2`` signature; pass ``1``
as the unit of a dimensionless operand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from quantal.commands._base import SIGNED_ARGS, QuantalCommand, system_option

if TYPE_CHECKING:
    from quantal.commands._context import AppContext


def _binary_command(name: str, summary: str, examples: str) -> click.Command:
    """Build a VALUE1 UNIT1 VALUE2 UNIT2 command bound to MetricService.<name>."""

    @click.command(name=name, cls=QuantalCommand, context_settings=SIGNED_ARGS, examples=examples, help=summary)
    @click.argument("value1")
    @click.argument("unit1")
    @click.argument("value2")
    @click.argument("unit2")
    @system_option
    @click.pass_obj
    def command(app: AppContext, value1: str, unit1: str, value2: str, unit2: str, system: str) -> None:
        operation = getattr(app.metric_service, name)
        app.emit(operation((value1, unit1, system), (value2, unit2, system)))

    return command


multiply = _binary_command(
    "multiply",
    "Multiply VALUE1 UNIT1 by VALUE2 UNIT2.",
    """\
  quantal multiply 1 '[in_i]' 1 m
  quantal multiply 1000 m 1 km
  quantal multiply 3 1 2 m""",
)

divide = _binary_command(
    "divide",
    "Divide VALUE1 UNIT1 by VALUE2 UNIT2.",
    """\
  quantal divide 1 m2 1 m
  quantal divide 10 km 2 h""",
)

add = _binary_command(
    "add",
    "Add VALUE2 UNIT2 to VALUE1 UNIT1 (dimensions must match).",
    """\
  quantal add 1 m 1 km
  quantal add 12 '[in_i]' 1 '[ft_i]'""",
)

subtract = _binary_command(
    "subtract",
    "Subtract VALUE2 UNIT2 from VALUE1 UNIT1 (dimensions must match).",
    """\
  quantal subtract 1 km 1 m
  quantal subtract 1 h 30 min""",
)
