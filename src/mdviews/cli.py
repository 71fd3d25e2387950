"""Root CLI group for mdviews with global flags and command registration."""

from __future__ import annotations

import click

from mdviews import __version__
from mdviews.commands import register_commands
from mdviews.commands._context import AppContext
from mdviews.config.settings import MdvSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="mdviews")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and result summaries.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Path to mdviews.toml.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """mdviews — query markdown frontmatter like a spreadsheet."""
    flags = {"json_output": json_output, "verbose": verbose, "log_json": log_json}
    # Unset flags must not shadow env vars or TOML values.
    settings = MdvSettings.from_cli(
        config_path=config_path,
        **{name: value for name, value in flags.items() if value},
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
