"""Command: render one neighbor diagram per measure sheet."""

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
  sheetgraph render
  sheetgraph render --input export/data.json --output-dir out/diagrams
  sheetgraph render --workers 4 --continue-on-error
  sheetgraph --json render""",
)
@input_option
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for diagram files (default: [render] output_dir).",
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Renderer threads.")
@click.option(
    "--continue-on-error/--fail-fast",
    default=None,
    help="Keep rendering after a failed diagram and report all failures at the end.",
)
@click.pass_obj
def render(
    app: AppContext,
    input_path: Path | None,
    output_dir: Path | None,
    workers: int | None,
    continue_on_error: bool | None,
) -> None:
    """Render the upstream/downstream diagram of every measure sheet."""
    app.emit(
        DiagramService(app.workspace).render_all(
            input_path=input_path,
            output_dir=output_dir,
            workers=workers,
            continue_on_error=continue_on_error,
        )
    )
