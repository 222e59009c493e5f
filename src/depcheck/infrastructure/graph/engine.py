"""DependencyGraph — NetworkX DiGraph of packages built from a PackageList.

Built once per invocation in a single pass, never mutated afterwards.
Nodes are keyed by import path; the ``node`` attribute carries the
:class:`Node` value with its display label.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

import networkx as nx

from depcheck.domain.errors import GraphBuildError
from depcheck.domain.paths import is_valid_repo_path, label_for

if TYPE_CHECKING:
    from depcheck.domain.packages import PackageList

logger = logging.getLogger(__name__)

type _Graph = nx.DiGraph


@dataclass(frozen=True)
class Node:
    """A package vertex.

    ``unique_name`` is the full import path and the graph key.
    ``label_name`` is for display only and may collide across vendor trees.
    """

    unique_name: str
    label_name: str

    @classmethod
    def for_import_path(cls, import_path: str) -> Node:
        return cls(unique_name=import_path, label_name=label_for(import_path))


class DependencyGraph:
    """Read-only view over a built package dependency graph."""

    def __init__(self, graph: _Graph) -> None:
        self._graph = graph

    def nodes(self) -> list[Node]:
        """Return all nodes."""
        return [attrs["node"] for _, attrs in self._graph.nodes(data=True)]

    def edges(self) -> list[tuple[Node, Node]]:
        """Return all edges as ``(importer, imported)`` pairs."""
        nodes = self._graph.nodes
        return [(nodes[src]["node"], nodes[tgt]["node"]) for src, tgt in self._graph.edges()]

    def node_by_name(self, unique_name: str) -> Node | None:
        """Look up a node by its unique name."""
        if unique_name not in self._graph:
            return None
        node: Node = self._graph.nodes[unique_name]["node"]
        return node

    def has(self, node: Node) -> bool:
        """Check whether *node* is a member of this graph."""
        return self.node_by_name(node.unique_name) == node

    def has_edge_from_to(self, src: Node, tgt: Node) -> bool:
        """Check whether *src* imports *tgt*."""
        return self._graph.has_edge(src.unique_name, tgt.unique_name)

    def number_of_edges(self) -> int:
        return int(self._graph.number_of_edges())

    def __contains__(self, unique_name: object) -> bool:
        return unique_name in self._graph

    def __len__(self) -> int:
        return int(self._graph.number_of_nodes())

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes())


def build_graph(
    pkg_list: PackageList,
    roots: Iterable[str] | None = None,
    excludes: Iterable[str] | None = None,
) -> DependencyGraph:
    """Build the dependency graph for *pkg_list*.

    Every package with a valid repo path that is not in *excludes* becomes a
    node. Edges follow each node's imports to other nodes; standard-library,
    malformed, excluded, and unknown imports are skipped silently.

    *roots* are only checked for existence, they never restrict which
    packages become nodes.

    Raises:
        GraphBuildError: If a name in *roots* has no node in the graph.
    """
    excluded = frozenset(excludes or ())
    lookup = pkg_list.by_import_path()
    g: _Graph = nx.DiGraph()

    for import_path in lookup:
        if not is_valid_repo_path(import_path):
            logger.debug("Skipping package with invalid path: %s", import_path)
            continue
        if import_path in excluded:
            logger.debug("Skipping excluded package: %s", import_path)
            continue
        g.add_node(import_path, node=Node.for_import_path(import_path))

    # Nodes first, so edges only ever join existing nodes.
    for import_path in list(g.nodes):
        for dep in lookup[import_path].imports:
            if not is_valid_repo_path(dep):
                continue
            if dep not in g:
                logger.debug("Unresolved import %s in %s", dep, import_path)
                continue
            g.add_edge(import_path, dep)

    for root in roots or ():
        if root not in g:
            raise GraphBuildError(root)

    logger.debug(
        "Built graph from %d packages: %d nodes, %d edges",
        len(lookup),
        g.number_of_nodes(),
        g.number_of_edges(),
    )
    return DependencyGraph(g)
