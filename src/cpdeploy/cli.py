"""Root CLI group for cpdeploy with global flags and command registration."""

from __future__ import annotations

import click

from cpdeploy import __version__
from cpdeploy.commands import register_commands
from cpdeploy.commands._context import AppContext
from cpdeploy.config.settings import CpSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="cpdeploy")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
) -> None:
    """cpdeploy — CloudPanel site deployment CLI."""
    ctx.ensure_object(dict)
    settings = CpSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
