"""
Frame Snapshots

Immutable per-frame render stream handed to the host renderer. Created on the
frame thread by the SceneComposer; safe to hand to any other thread once
built since nothing in it is mutable.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from cogniflow.core.math3d import Position
from cogniflow.interaction.state import RevealStage

RGBA = Tuple[float, float, float, float]


@dataclass(frozen=True)
class NodeRenderItem:
    node_id: int
    position: Position
    size: float
    rotation: Tuple[float, float]   # Accumulated (x, y) angles in radians
    opacity: float
    emissive_intensity: float
    color: RGBA


@dataclass(frozen=True)
class EdgeRenderItem:
    edge_id: str
    start: Position
    end: Position
    opacity: float
    active: bool
    color: RGBA


@dataclass(frozen=True)
class ParticleRenderItem:
    edge_id: str
    index: int
    position: Position
    opacity: float


@dataclass(frozen=True)
class LabelRenderItem:
    text: str
    position: Position
    opacity: float
    font_size: float
    color: RGBA


@dataclass(frozen=True)
class FrameSnapshot:
    """Complete immutable description of one rendered frame."""
    frame_id: int
    t: float
    stage: RevealStage
    interaction_count: int
    nodes: Tuple[NodeRenderItem, ...]
    edges: Tuple[EdgeRenderItem, ...]
    particles: Tuple[ParticleRenderItem, ...]
    labels: Tuple[LabelRenderItem, ...]
    completed: bool = False
    skip_available: bool = False

    def __post_init__(self):
        assert isinstance(self.nodes, tuple)
        assert isinstance(self.edges, tuple)
        assert isinstance(self.particles, tuple)
        assert isinstance(self.labels, tuple)

    @property
    def show_keywords(self) -> bool:
        return bool(self.labels)

    def node(self, node_id: int) -> NodeRenderItem:
        for item in self.nodes:
            if item.node_id == node_id:
                return item
        raise KeyError(node_id)

    def edge(self, edge_id: str) -> EdgeRenderItem:
        for item in self.edges:
            if item.edge_id == edge_id:
                return item
        raise KeyError(edge_id)
