"""Serialize a DependencyGraph to Graphviz DOT or D3-style JSON.

Output is sorted by unique name so repeated runs over the same packages
produce byte-identical files.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depcheck.infrastructure.graph.engine import DependencyGraph, Node


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _sorted_nodes(graph: DependencyGraph) -> list[Node]:
    return sorted(graph.nodes(), key=lambda n: n.unique_name)


def _sorted_edges(graph: DependencyGraph) -> list[tuple[Node, Node]]:
    return sorted(graph.edges(), key=lambda e: (e[0].unique_name, e[1].unique_name))


def to_dot(graph: DependencyGraph, *, rankdir: str = "LR") -> str:
    """Generate Graphviz DOT notation."""
    lines = ["digraph deps {", f"  rankdir={rankdir};", "  node [shape=box];"]
    for node in _sorted_nodes(graph):
        lines.append(f"  {_quote(node.unique_name)} [label={_quote(node.label_name)}];")
    for src, tgt in _sorted_edges(graph):
        lines.append(f"  {_quote(src.unique_name)} -> {_quote(tgt.unique_name)};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def to_json(graph: DependencyGraph) -> str:
    """Generate ``{"nodes": [...], "links": [...]}`` JSON."""
    payload = {
        "nodes": [{"id": n.unique_name, "label": n.label_name} for n in _sorted_nodes(graph)],
        "links": [
            {"source": src.unique_name, "target": tgt.unique_name}
            for src, tgt in _sorted_edges(graph)
        ],
    }
    return json.dumps(payload, indent=2) + "\n"
