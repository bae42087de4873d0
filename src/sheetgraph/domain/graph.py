"""Graph builder — turn filtered records into linked nodes.

All nodes live in one arena (``dict[int, Node]``). The ``incoming`` and
``outgoing`` lists hold the arena's own Node objects, so a neighbor is
shared by identity and never copied. The structure may contain cycles.

INVARIANT: edges are created in pairs. Appending A to ``B.incoming`` and
B to ``A.outgoing`` happens in one step, never separately.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from sheetgraph.domain.records import Record

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Node:
    """One measure sheet in the dependency graph.

    Attributes:
        incoming: Nodes this sheet depends on (data flows from them).
        outgoing: Nodes that depend on this sheet (data flows to them).
    """

    id: int
    name: str
    type_name: str
    incoming: list[Node] = field(default_factory=list, repr=False)
    outgoing: list[Node] = field(default_factory=list, repr=False)

    @classmethod
    def from_record(cls, record: Record) -> Node:
        return cls(id=record.id, name=record.name, type_name=record.type_name)

    def add_dependency(self, dependency: Node) -> None:
        """Wire ``dependency -> self`` on both ends."""
        self.incoming.append(dependency)
        dependency.outgoing.append(self)

    @property
    def is_isolated(self) -> bool:
        return not self.incoming and not self.outgoing


@dataclass(frozen=True)
class BuildStats:
    """Counters collected while building the graph."""

    records: int
    materialized: int
    resolved_edges: int
    unresolved_references: int
    pruned: int
    nodes: int

    def to_dict(self) -> dict[str, int]:
        return {
            "records": self.records,
            "materialized": self.materialized,
            "resolved_edges": self.resolved_edges,
            "unresolved_references": self.unresolved_references,
            "pruned": self.pruned,
            "nodes": self.nodes,
        }


def build_graph_with_stats(records: Sequence[Record]) -> tuple[dict[int, Node], BuildStats]:
    """Build the node arena from filtered *records* and report counters.

    Runs three passes in order: materialize one node per record (a repeated
    id replaces the earlier node), wire every reference whose target is in
    the arena, then prune nodes left without any edge. References to ids
    outside the arena are dropped silently.
    """
    store: dict[int, Node] = {}
    for record in records:
        store[record.id] = Node.from_record(record)
    materialized = len(store)

    resolved = 0
    unresolved = 0
    for record in records:
        node = store[record.id]
        for ref in record.references:
            target = store.get(ref.id)
            if target is None:
                unresolved += 1
                logger.debug("Dropping unresolved reference %s -> %s", record.id, ref.id)
                continue
            node.add_dependency(target)
            resolved += 1

    isolated = [node_id for node_id, node in store.items() if node.is_isolated]
    for node_id in isolated:
        del store[node_id]

    stats = BuildStats(
        records=len(records),
        materialized=materialized,
        resolved_edges=resolved,
        unresolved_references=unresolved,
        pruned=len(isolated),
        nodes=len(store),
    )
    return store, stats


def build_graph(records: Sequence[Record]) -> dict[int, Node]:
    """Build the node arena from filtered *records* (see :func:`build_graph_with_stats`)."""
    store, _stats = build_graph_with_stats(records)
    return store
