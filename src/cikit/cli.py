"""Root CLI group for cikit with global flags and command registration."""

from __future__ import annotations

import click

from cikit import __version__
from cikit.commands import register_commands
from cikit.commands._context import AppContext
from cikit.config.settings import CiSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="cikit")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Path to cikit.toml.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """cikit: shared CI targets for Go projects."""
    cli_options = {
        "config_path": config_path,
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    ctx.obj = AppContext(CiSettings.from_cli(**cli_options), cli_options)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return

    from cikit.config.logging import bind_target

    bind_target(ctx.invoked_subcommand)


register_commands(cli)
