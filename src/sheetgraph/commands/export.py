"""Command: export the whole dependency graph."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from sheetgraph.commands._base import SheetCommand, input_option
from sheetgraph.services.export import GRAPH_FORMATS, ExportService
from sheetgraph.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from sheetgraph.commands._context import AppContext


@click.command(
    cls=SheetCommand,
    examples="""\
  sheetgraph export
  sheetgraph export --format json --output graph.json
  sheetgraph export | dot -Tsvg > sheets.svg""",
)
@input_option
@click.option(
    "--format",
    "fmt",
    type=click.Choice(GRAPH_FORMATS),
    default="dot",
    help="Output format.",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.pass_obj
def export(app: AppContext, input_path: Path | None, fmt: str, output_file: Path | None) -> None:
    """Export the filtered dependency graph in DOT or JSON format."""
    result = ExportService(app.workspace).export_graph(fmt=fmt, input_path=input_path)

    if not result.ok:
        app.emit(result)
        return

    if output_file is None:
        # Pipe-friendly: raw content to stdout
        click.echo(result.data["content"], nl=False)
        return

    try:
        output_file.write_text(result.data["content"], encoding="utf-8")
    except OSError as exc:
        app.emit(
            ServiceResult(
                ok=False,
                op="export_graph",
                error=ServiceError(
                    code="IO_FAILURE",
                    message=f"Cannot write {output_file}: {exc.strerror or exc}",
                    detail={"path": str(output_file)},
                ),
            )
        )
        return

    app.emit(
        ServiceResult(
            ok=True,
            op="export_graph",
            data={
                "format": fmt,
                "output_file": str(output_file),
                "node_count": result.data["node_count"],
                "edge_count": result.data["edge_count"],
            },
        )
    )
