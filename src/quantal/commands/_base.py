"""Custom Click base classes with --examples support and signed arguments.

QuantalCommand and QuantalGroup accept an ``examples`` parameter. When
``--examples`` is passed, the command prints usage examples and exits,
keeping ``--help`` concise.

Quantity commands take numeric literals as positional arguments, so
``-80`` must reach the command as a value rather than as an option.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from quantal import UCUM_SYSTEM

# Lets "-80" through as a positional value.
SIGNED_ARGS: dict[str, Any] = {"ignore_unknown_options": True}


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class QuantalCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class QuantalGroup(click.Group):
    """Click Group whose subcommands accept ``examples`` without ``cls=``."""

    command_class = QuantalCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def system_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Shared ``--system`` option (unit-system identifier of every operand)."""
    return click.option(
        "--system",
        default=UCUM_SYSTEM,
        show_default=True,
        help="Unit-system identifier of the operands.",
    )(func)
