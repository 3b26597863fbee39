"""
Graph Module - the static node/edge structure of a session.

    from cogniflow.graph import build_graph

    graph = build_graph(node_count=30, bounds=10.0, edge_threshold=5.0)
    for edge in graph.edges:
        print(edge.id, edge.length)
"""

from cogniflow.graph.model import Node, Edge, Graph
from cogniflow.graph.builder import (
    build_graph,
    build_graph_from_config,
    graph_from_positions,
    derive_edges,
)

__all__ = [
    'Node',
    'Edge',
    'Graph',
    'build_graph',
    'build_graph_from_config',
    'graph_from_positions',
    'derive_edges',
]
