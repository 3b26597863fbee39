# cogniflow/graph/builder.py
"""
Graph builder - random node placement and proximity edges.

Edges are shortlisted from the upper triangle of the pairwise distance matrix,
so each unordered pair is considered once and self pairs never appear. The
shortlist is then confirmed with `distance`, the same metric as Edge.length
and the nearby-node search, so every edge is strictly shorter than the
threshold by the measure the rest of the engine uses. This is
O(n^2) in memory and time, fine for the few dozen nodes a session uses.
"""

from __future__ import annotations
from typing import Optional, Sequence, Tuple
import logging

import numpy as np

from cogniflow.core.config import GraphConfig
from cogniflow.core.math3d import as_position, distance, pairwise_distances
from cogniflow.graph.model import Node, Edge, Graph

logger = logging.getLogger(__name__)

# Relative margin covering ulp disagreement between the two distance forms
_SHORTLIST_SLACK = 1e-9


def build_graph(
    node_count: int = 30,
    bounds: float = 10.0,
    edge_threshold: float = 5.0,
    size_range: Tuple[float, float] = (0.2, 0.5),
    rng: Optional[np.random.Generator] = None,
) -> Graph:
    """
    Place `node_count` nodes uniformly inside a cube of side `bounds` centred
    at the origin and connect every pair closer than `edge_threshold`.

    Each call is a fresh random instance unless a seeded `rng` is passed.
    """
    rng = rng if rng is not None else np.random.default_rng()

    positions = (rng.random((node_count, 3)) - 0.5) * bounds
    size_min, size_max = size_range
    sizes = rng.random(node_count) * (size_max - size_min) + size_min

    graph = graph_from_positions(positions, sizes, edge_threshold)
    logger.debug(
        "Built graph: %d nodes, %d edges (bounds=%.2f, threshold=%.2f)",
        graph.node_count, graph.edge_count, bounds, edge_threshold,
    )
    return graph


def build_graph_from_config(config: GraphConfig, rng: Optional[np.random.Generator] = None) -> Graph:
    return build_graph(
        node_count=config.node_count,
        bounds=config.bounds,
        edge_threshold=config.edge_threshold,
        size_range=(config.size_min, config.size_max),
        rng=rng,
    )


def graph_from_positions(
    positions: Sequence[Sequence[float]],
    sizes: Optional[Sequence[float]] = None,
    edge_threshold: float = 5.0,
) -> Graph:
    """Build a graph over explicit positions; node ids follow input order."""
    points = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    n = points.shape[0]
    if sizes is None:
        sizes = np.full(n, 0.5)

    nodes = tuple(
        Node(id=i, position=as_position(points[i]), size=float(sizes[i]))
        for i in range(n)
    )
    return Graph(nodes=nodes, edges=tuple(derive_edges(nodes, edge_threshold)))


def derive_edges(nodes: Sequence[Node], edge_threshold: float) -> list:
    """Edges for every unordered pair i < j with distance < edge_threshold."""
    if len(nodes) < 2:
        return []

    points = np.array([n.position for n in nodes], dtype=np.float64)
    dist = pairwise_distances(points)
    slack = edge_threshold * _SHORTLIST_SLACK
    ii, jj = np.nonzero(np.triu(dist < edge_threshold + slack, k=1))

    edges = []
    for i, j in zip(ii.tolist(), jj.tolist()):
        a, b = nodes[i], nodes[j]
        if not distance(a.position, b.position) < edge_threshold:
            continue
        edges.append(Edge(
            id=Edge.make_id(a.id, b.id),
            start_id=a.id,
            end_id=b.id,
            start=a.position,
            end=b.position,
        ))
    return edges
