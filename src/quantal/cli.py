"""Root CLI group for quantal with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from quantal import __version__
from quantal.commands import register_commands
from quantal.commands._context import AppContext
from quantal.config.settings import QuantalSettings
from quantal.domain.errors import QuantalError


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="quantal")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """quantal: UCUM quantity canonicalization and arithmetic."""
    try:
        settings = QuantalSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            verbose=verbose,
            log_json=log_json,
        )
    except (QuantalError, ValidationError) as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
