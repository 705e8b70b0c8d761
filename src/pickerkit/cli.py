"""Root CLI group for pickerkit with global flags and command registration."""

from __future__ import annotations

import click

from pickerkit import __version__
from pickerkit.commands import register_commands
from pickerkit.commands._context import AppContext
from pickerkit.config.settings import PickerSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pickerkit")
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
    """pickerkit — temporal input engine toolkit."""
    settings = PickerSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
