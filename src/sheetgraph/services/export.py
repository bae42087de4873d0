"""ExportService — whole-graph export via NetworkX."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import networkx as nx

from sheetgraph.domain.errors import SheetgraphError
from sheetgraph.infrastructure.graph.engine import to_digraph
from sheetgraph.services.base import BaseService
from sheetgraph.services.result import ServiceError, ServiceResult

GRAPH_FORMATS = ("dot", "json")


class ExportService(BaseService):
    """Export the filtered dependency graph in portable formats."""

    def export_graph(self, *, fmt: str = "dot", input_path: Path | None = None) -> ServiceResult:
        """Export every retained node and link.

        Formats:
        - ``dot`` — Graphviz DOT language
        - ``json`` — D3-compatible ``{"nodes": [...], "links": [...]}``

        Returns the content as a string in ``data["content"]``.
        """
        op = "export_graph"
        if fmt not in GRAPH_FORMATS:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_FORMAT",
                    message=f"Unknown graph format: {fmt}",
                    detail={"format": fmt, "valid": list(GRAPH_FORMATS)},
                ),
            )

        try:
            built = self._build(input_path)
        except SheetgraphError as exc:
            return self._failure(op, exc)

        g = to_digraph(built.store, pattern=self._workspace.label_pattern)
        content = self._to_dot(g) if fmt == "dot" else self._to_d3_json(g)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "format": fmt,
                "content": content,
                "node_count": g.number_of_nodes(),
                "edge_count": g.number_of_edges(),
            },
        )

    @staticmethod
    def _to_dot(g: nx.MultiDiGraph) -> str:
        """Generate Graphviz DOT notation, labelling nodes by short label."""
        lines = ["digraph sheets {", "  rankdir=LR;", "  node [shape=box];"]
        for node_id, attrs in g.nodes(data=True):
            label = _dot_escape(str(attrs.get("label", node_id)))
            name = _dot_escape(str(attrs.get("name", "")))
            lines.append(f'  {node_id} [label="{label}" tooltip="{name}"];')
        for src, tgt in g.edges():
            lines.append(f"  {src} -> {tgt};")
        lines.append("}")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _to_d3_json(g: nx.MultiDiGraph) -> str:
        """Generate D3-compatible JSON."""
        d3_nodes: list[dict[str, Any]] = [
            {
                "id": node_id,
                "name": attrs.get("name", ""),
                "label": attrs.get("label", ""),
                "type": attrs.get("type", ""),
            }
            for node_id, attrs in g.nodes(data=True)
        ]
        d3_links = [{"source": src, "target": tgt} for src, tgt in g.edges()]
        return json.dumps({"nodes": d3_nodes, "links": d3_links}, indent=2) + "\n"


def _dot_escape(value: str) -> str:
    """Escape *value* for a double-quoted DOT string."""
    return value.replace("\\", "\\\\").replace('"', '\\"')
