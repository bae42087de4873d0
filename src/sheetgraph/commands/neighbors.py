"""Command: show one sheet's neighbor view without rendering."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from sheetgraph.commands._base import SheetCommand, input_option
from sheetgraph.services.diagram import DiagramService

if TYPE_CHECKING:
    from sheetgraph.commands._context import AppContext


@click.command(
    cls=SheetCommand,
    examples="""\
  sheetgraph neighbors 24811
  sheetgraph -q neighbors 24811 > 12.3.d2
  sheetgraph --json neighbors 24811""",
)
@click.argument("node_id", type=int)
@input_option
@click.pass_obj
def neighbors(app: AppContext, node_id: int, input_path: Path | None) -> None:
    """Print the upstream and downstream edges of NODE_ID."""
    app.emit(DiagramService(app.workspace).neighbors(node_id, input_path=input_path))
