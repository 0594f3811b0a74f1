"""Subcommand modules for quantal.

Provides register_commands() which uses deferred imports to keep
``quantal --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the quantity commands and the ``units`` group on the root CLI."""
    # --- Groups ---
    from quantal.commands.units import units

    cli.add_command(units)

    # --- Standalone commands ---
    from quantal.commands.arithmetic import add, divide, multiply, subtract
    from quantal.commands.canonicalize import canonicalize
    from quantal.commands.compare import compare
    from quantal.commands.convert import convert

    cli.add_command(canonicalize)
    cli.add_command(convert)
    cli.add_command(compare)
    cli.add_command(multiply)
    cli.add_command(divide)
    cli.add_command(add)
    cli.add_command(subtract)
