from depcheck.infrastructure.graph.engine import DependencyGraph, Node, build_graph

__all__ = ["DependencyGraph", "Node", "build_graph"]
