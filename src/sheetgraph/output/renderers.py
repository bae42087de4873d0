"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from sheetgraph.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from sheetgraph.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "render":
        return "\n".join(item["path"] for item in result.data.get("diagrams", []))
    if result.op == "neighbors":
        return str(result.data.get("source", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="sg.ok")
    op = Text(f"  {result.op}", style="sg.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="sg.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="sg.id")
    elif key in ("path", "input", "output_dir", "output_file"):
        v = Text(str(value), style="sg.path")
    elif key == "label":
        v = Text(str(value), style="sg.label")
    elif isinstance(value, int):
        v = Text(str(value), style="sg.count")
    else:
        v = Text(str(value))
    console.print(k, v)


def _render_failures(console: Console, failed: list[dict[str, Any]]) -> None:
    for item in failed:
        console.print(
            Text("  failed ", style="sg.error"),
            Text(f"{item.get('label')} (id={item.get('id')}): {item.get('message')}"),
        )


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="sg.error")
    op = Text(f"  {result.op}", style="sg.op")
    console.print(label, op, Text(" — "), Text(msg))

    _render_failures(console, result.data.get("failed", []))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}", markup=False)


# ── Operation renderers ───────────────────────────────────────────────


def _render_render(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the per-node diagram run."""
    _status_line(console, result)
    d = result.data
    for key in ("input", "output_dir", "format", "node_count", "written_count"):
        if key in d:
            _field(console, key, d[key])

    diagrams = d.get("diagrams", [])
    if diagrams and verbose:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("ID", style="sg.id", no_wrap=True)
        table.add_column("Label", style="sg.label")
        table.add_column("Name")
        table.add_column("Edges", style="sg.count", justify="right")
        table.add_column("Path", style="sg.path")
        for item in diagrams:
            table.add_row(
                str(item.get("id", "")),
                str(item.get("label", "")),
                str(item.get("name", "")),
                str(item.get("edges", "")),
                str(item.get("path", "")),
            )
        console.print()
        console.print(table)

    if verbose and d.get("stats"):
        console.print()
        console.print(Text("  graph:", style="dim"))
        for k, v in d["stats"].items():
            console.print(f"    {k}: {v}", markup=False)


def _render_neighbors(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render one node's upstream and downstream edges."""
    d = result.data
    console.print(
        Text(str(d.get("label", "?")), style="sg.label"),
        Text(f"  {d.get('name', '')}"),
        Text(f"  (id={d.get('id')})", style="sg.id"),
    )
    for heading, key in (("upstream", "upstream"), ("downstream", "downstream")):
        edges = d.get(key, [])
        console.print(Text(f"  {heading} ({len(edges)}):", style="sg.key"))
        for edge in edges:
            console.print(f"    {edge['source']} → {edge['target']}", markup=False)
    if verbose and d.get("source"):
        console.print()
        console.print(Text("  d2 source:", style="dim"))
        for line in str(d["source"]).splitlines():
            console.print(f"    {line}", markup=False)


def _render_summary(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render stage counts and rejection reasons."""
    _status_line(console, result)
    d = result.data
    for key in ("input", "records", "eligible"):
        if key in d:
            _field(console, key, d[key])

    rejected = d.get("rejected", {})
    if rejected:
        console.print(Text("  rejected:", style="sg.key"))
        for reason, count in sorted(rejected.items()):
            console.print(f"    {reason}: {count}")

    graph = d.get("graph", {})
    if graph:
        console.print(Text("  graph:", style="sg.key"))
        for k, v in graph.items():
            console.print(f"    {k}: {v}", markup=False)


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render export results with output path and counts."""
    _status_line(console, result)
    d = result.data
    for key in ("output_file", "format", "node_count", "edge_count"):
        if key in d:
            _field(console, key, d[key])


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "render": _render_render,
    "neighbors": _render_neighbors,
    "summary": _render_summary,
    "export_graph": _render_export,
}
