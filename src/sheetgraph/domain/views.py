"""Neighbor views — the one-hop edge lists drawn for a single node.

A node's diagram is its upstream edges (dependency -> node) followed by
its downstream edges (node -> dependent). Self-references recorded during
construction are dropped here. Repeated neighbors produce repeated lines.

The payload handed to the diagram renderer is D2 source, one edge per
line::

    '12.1' -> '12.3'
    '12.3' -> '14'
"""

from __future__ import annotations

import re
from typing import NamedTuple

from sheetgraph.domain.graph import Node
from sheetgraph.domain.labels import SHORT_LABEL_PATTERN, short_label


class EdgeDescriptor(NamedTuple):
    """One directed edge between two short labels."""

    source: str
    target: str

    def to_line(self) -> str:
        return f"{quote_label(self.source)} -> {quote_label(self.target)}"


def quote_label(label: str) -> str:
    """Quote *label* as a D2 key.

    Labels are single-quoted. A label that itself contains a single quote is
    double-quoted instead, with backslashes and double quotes escaped.
    """
    if "'" not in label:
        return f"'{label}'"
    escaped = label.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def upstream_view(
    node: Node, *, pattern: re.Pattern[str] = SHORT_LABEL_PATTERN
) -> list[EdgeDescriptor]:
    """Edges flowing into *node*, in dependency order."""
    label = short_label(node.name, pattern)
    return [
        EdgeDescriptor(short_label(dep.name, pattern), label)
        for dep in node.incoming
        if dep.id != node.id
    ]


def downstream_view(
    node: Node, *, pattern: re.Pattern[str] = SHORT_LABEL_PATTERN
) -> list[EdgeDescriptor]:
    """Edges flowing out of *node*, in dependent order."""
    label = short_label(node.name, pattern)
    return [
        EdgeDescriptor(label, short_label(dep.name, pattern))
        for dep in node.outgoing
        if dep.id != node.id
    ]


def neighbor_view(
    node: Node, *, pattern: re.Pattern[str] = SHORT_LABEL_PATTERN
) -> list[EdgeDescriptor]:
    return upstream_view(node, pattern=pattern) + downstream_view(node, pattern=pattern)


def diagram_source(node: Node, *, pattern: re.Pattern[str] = SHORT_LABEL_PATTERN) -> str:
    """Return the D2 payload for *node*."""
    return "\n".join(edge.to_line() for edge in neighbor_view(node, pattern=pattern))
