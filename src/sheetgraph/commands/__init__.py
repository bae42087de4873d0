"""Subcommand modules for sheetgraph.

Provides register_commands(), which uses deferred imports so
``sheetgraph --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from sheetgraph.commands.export import export
    from sheetgraph.commands.neighbors import neighbors
    from sheetgraph.commands.render import render
    from sheetgraph.commands.summary import summary

    cli.add_command(render)
    cli.add_command(neighbors)
    cli.add_command(summary)
    cli.add_command(export)
