"""Root CLI group for sheetgraph with global flags and command registration."""

from __future__ import annotations

import click

from sheetgraph import __version__
from sheetgraph.commands import register_commands
from sheetgraph.commands._base import SheetGroup
from sheetgraph.commands._context import AppContext
from sheetgraph.config.settings import SheetgraphSettings

_CLI_EXAMPLES = """\
  sheetgraph render
  sheetgraph -c project/sheetgraph.toml render --workers 4
  sheetgraph neighbors 24811
  sheetgraph summary
  sheetgraph export --format json --output graph.json"""


@click.group(cls=SheetGroup, examples=_CLI_EXAMPLES, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="sheetgraph")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """sheetgraph — one-hop dependency diagrams for measure sheets."""
    settings = SheetgraphSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
