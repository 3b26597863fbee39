# cogniflow/graph/model.py
"""
Graph data model - immutable nodes and proximity edges.

Nodes and edges carry explicit ids, but position lookups go through exact
coordinate keys: two nodes built at identical coordinates resolve to the same
position entry and are treated as one entity by interaction logic.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from cogniflow.core.math3d import Position, as_position, distance


@dataclass(frozen=True)
class Node:
    id: int
    position: Position
    size: float


@dataclass(frozen=True)
class Edge:
    """
    Proximity connection between two nodes.

    start/end are copies of the endpoint positions taken at build time.
    """
    id: str
    start_id: int
    end_id: int
    start: Position
    end: Position

    @property
    def length(self) -> float:
        return distance(self.start, self.end)

    def touches(self, position: Position) -> bool:
        return self.start == position or self.end == position

    @staticmethod
    def make_id(a: int, b: int) -> str:
        lo, hi = (a, b) if a <= b else (b, a)
        return f"{lo}-{hi}"


@dataclass(frozen=True)
class Graph:
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    # Derived indexes, filled in __post_init__
    _nodes_by_id: Dict[int, Node] = field(default_factory=dict, init=False, repr=False, compare=False)
    _nodes_by_position: Dict[Position, List[Node]] = field(default_factory=dict, init=False, repr=False, compare=False)
    _edges_by_position: Dict[Position, List[Edge]] = field(default_factory=dict, init=False, repr=False, compare=False)
    _edges_by_id: Dict[str, Edge] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        assert isinstance(self.nodes, tuple)
        assert isinstance(self.edges, tuple)

        for node in self.nodes:
            self._nodes_by_id[node.id] = node
            self._nodes_by_position.setdefault(node.position, []).append(node)

        for edge in self.edges:
            self._edges_by_id[edge.id] = edge
            self._edges_by_position.setdefault(edge.start, []).append(edge)
            if edge.end != edge.start:
                self._edges_by_position.setdefault(edge.end, []).append(edge)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def node(self, node_id: int) -> Optional[Node]:
        return self._nodes_by_id.get(node_id)

    def edge(self, edge_id: str) -> Optional[Edge]:
        return self._edges_by_id.get(edge_id)

    def nodes_at(self, position) -> List[Node]:
        """All nodes whose coordinates equal `position` exactly."""
        return list(self._nodes_by_position.get(as_position(position), ()))

    def edges_touching(self, position) -> List[Edge]:
        """All edges with an endpoint exactly at `position`."""
        return list(self._edges_by_position.get(as_position(position), ()))

    def positions_array(self) -> np.ndarray:
        """(n, 3) float64 array of node positions, row i = self.nodes[i]."""
        if not self.nodes:
            return np.zeros((0, 3))
        return np.array([n.position for n in self.nodes], dtype=np.float64)

    def sizes_array(self) -> np.ndarray:
        return np.array([n.size for n in self.nodes], dtype=np.float64)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges)})"
