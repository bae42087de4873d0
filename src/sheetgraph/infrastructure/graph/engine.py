"""Project the node arena onto a NetworkX graph for export.

Diagrams are produced from the arena directly; this view exists for
whole-graph exports (DOT, D3 JSON). Parallel edges from repeated
references are kept, self-references are not.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TypeAlias

import networkx as nx

from sheetgraph.domain.graph import Node
from sheetgraph.domain.labels import SHORT_LABEL_PATTERN, short_label

_Graph: TypeAlias = nx.MultiDiGraph


def to_digraph(
    store: Mapping[int, Node], *, pattern: re.Pattern[str] = SHORT_LABEL_PATTERN
) -> _Graph:
    """Build a MultiDiGraph with an edge ``dependency -> dependent`` per link."""
    g: _Graph = nx.MultiDiGraph()
    for node_id, node in store.items():
        g.add_node(
            node_id,
            name=node.name,
            label=short_label(node.name, pattern),
            type=node.type_name,
        )

    # Every link appears once in some node's incoming list.
    for node_id, node in store.items():
        for dep in node.incoming:
            if dep.id == node_id:
                continue
            g.add_edge(dep.id, node_id)
    return g
