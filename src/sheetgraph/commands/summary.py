"""Command: record, filter and graph counts for an export."""

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
  sheetgraph summary
  sheetgraph --json summary --input export/data.json""",
)
@input_option
@click.pass_obj
def summary(app: AppContext, input_path: Path | None) -> None:
    """Show how many records survive filtering and graph construction."""
    app.emit(DiagramService(app.workspace).summary(input_path=input_path))
