# cogniflow/scene/composer.py
"""
SceneComposer - wires graph, activation state and animation into a FrameSnapshot.

No decisions are made here beyond selecting which driver value goes where:
particles are emitted only for active edges and keyword labels only once the
keywords are revealed.
"""

from __future__ import annotations
from typing import List, Tuple

from cogniflow.animation.driver import AnimationDriver
from cogniflow.core.color import Color
from cogniflow.core.frame import FrameState
from cogniflow.core.math3d import Position, as_position
from cogniflow.graph.model import Graph
from cogniflow.interaction.state import ActivationState
from cogniflow.scene.snapshot import (
    FrameSnapshot,
    NodeRenderItem,
    EdgeRenderItem,
    ParticleRenderItem,
    LabelRenderItem,
)

KEYWORD_LABELS: Tuple[Tuple[str, Position], ...] = (
    ("Automate", (3.0, 2.0, 0.0)),
    ("Optimize", (-3.0, -2.0, 1.0)),
    ("Analyze", (0.0, 3.0, -2.0)),
    ("Connect", (-2.0, 0.0, 3.0)),
)

LABEL_FONT_SIZE = 0.8
LABEL_OPACITY = 0.5
LABEL_OPACITY_TRANSFORMING = 0.8


class SceneComposer:
    """Builds FrameSnapshots; holds nothing but the palette."""

    def __init__(self, color: str = "#7E3ACE"):
        self.color = Color.from_hex(color)

    def compose(
        self,
        frame: FrameState,
        graph: Graph,
        state: ActivationState,
        driver: AnimationDriver,
        completed: bool = False,
        skip_available: bool = False,
    ) -> FrameSnapshot:
        return FrameSnapshot(
            frame_id=frame.frame_id,
            t=frame.t,
            stage=state.stage,
            interaction_count=state.interaction_count,
            nodes=tuple(self._nodes(graph, driver)),
            edges=tuple(self._edges(graph, state, driver)),
            particles=tuple(self._particles(frame, graph, state, driver)),
            labels=tuple(self._labels(state)),
            completed=completed,
            skip_available=skip_available,
        )

    def _nodes(self, graph: Graph, driver: AnimationDriver) -> List[NodeRenderItem]:
        rgba = self.color.to_tuple()
        return [
            NodeRenderItem(
                node_id=node.id,
                position=node.position,
                size=node.size,
                rotation=driver.node_rotation(node.id),
                opacity=driver.node_opacity(node.id),
                emissive_intensity=driver.node_emissive(node.id),
                color=rgba,
            )
            for node in graph.nodes
        ]

    def _edges(self, graph: Graph, state: ActivationState, driver: AnimationDriver) -> List[EdgeRenderItem]:
        rgba = self.color.to_tuple()
        return [
            EdgeRenderItem(
                edge_id=edge.id,
                start=edge.start,
                end=edge.end,
                opacity=driver.edge_opacity(edge, state),
                active=state.is_edge_active(edge.id),
                color=rgba,
            )
            for edge in graph.edges
        ]

    def _particles(
        self,
        frame: FrameState,
        graph: Graph,
        state: ActivationState,
        driver: AnimationDriver,
    ) -> List[ParticleRenderItem]:
        items = []
        for edge in graph.edges:
            if not state.is_edge_active(edge.id):
                continue
            opacity = driver.particle_opacity(edge, state)
            for i, pos in enumerate(driver.particles(edge, frame.t)):
                items.append(ParticleRenderItem(
                    edge_id=edge.id,
                    index=i,
                    position=as_position(pos),
                    opacity=opacity,
                ))
        return items

    def _labels(self, state: ActivationState) -> List[LabelRenderItem]:
        if not state.show_keywords:
            return []
        opacity = LABEL_OPACITY_TRANSFORMING if state.transforming else LABEL_OPACITY
        rgba = self.color.to_tuple()
        return [
            LabelRenderItem(
                text=text,
                position=position,
                opacity=opacity,
                font_size=LABEL_FONT_SIZE,
                color=rgba,
            )
            for text, position in KEYWORD_LABELS
        ]
