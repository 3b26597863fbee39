# cogniflow/animation/driver.py
"""
AnimationDriver - per-frame animated attributes for nodes, edges, particles.

Per-node state lives in numpy arrays indexed by arena slot (one slot per
node, in graph order). Everything else is a pure function of the current
ActivationState and elapsed time.

Node look:
- lit (hovered or active): fixed opacity, boosted emissive
- idle: opacity drawn at random once per transition out of lit
- always: small constant rotation per frame on x and y
"""

from __future__ import annotations
from typing import Dict, Optional, Sequence, Tuple
import logging

import numpy as np

from cogniflow.core.config import AnimationConfig
from cogniflow.core.frame import FrameState
from cogniflow.core.math3d import fract
from cogniflow.graph.model import Edge, Graph
from cogniflow.interaction.state import ActivationState

logger = logging.getLogger(__name__)


# =============================================================================
# Pure Functions
# =============================================================================

def particle_fraction(t: float, index: int, spacing: float = 0.1) -> float:
    """Interpolation fraction of particle `index` at time `t`: (t + i*spacing) mod 1."""
    return fract(t + index * spacing)


def particle_fractions(t: float, count: int = 5, spacing: float = 0.1) -> np.ndarray:
    return np.mod(t + np.arange(count) * spacing, 1.0)


def particle_positions(
    start: Sequence[float],
    end: Sequence[float],
    t: float,
    count: int = 5,
    spacing: float = 0.1,
) -> np.ndarray:
    """(count, 3) particle positions along start->end at time `t`."""
    a = np.asarray(start, dtype=np.float64)
    b = np.asarray(end, dtype=np.float64)
    fracs = particle_fractions(t, count, spacing)
    return a[None, :] + (b - a)[None, :] * fracs[:, None]


def edge_opacity(active: bool, config: AnimationConfig = None) -> float:
    config = config or AnimationConfig()
    return config.edge_active_opacity if active else config.edge_idle_opacity


def particle_opacity(active: bool, config: AnimationConfig = None) -> float:
    config = config or AnimationConfig()
    return config.particle_opacity if active else 0.0


# =============================================================================
# Driver
# =============================================================================

class AnimationDriver:
    """Owns mutable per-node animation state for one session."""

    def __init__(
        self,
        graph: Graph,
        config: AnimationConfig = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.graph = graph
        self.config = config or AnimationConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

        n = graph.node_count
        self._slots: Dict[int, int] = {node.id: i for i, node in enumerate(graph.nodes)}
        self._positions = [node.position for node in graph.nodes]

        self.rotation = np.zeros((n, 2), dtype=np.float64)     # (x, y) angles
        self.opacity = self._idle_opacity(n)
        self.hovered = np.zeros(n, dtype=bool)
        self.lit = np.zeros(n, dtype=bool)

        self.time: float = 0.0
        self.frame_id: int = 0

    def _idle_opacity(self, n: int) -> np.ndarray:
        lo, hi = self.config.idle_opacity_min, self.config.idle_opacity_max
        return self.rng.uniform(lo, hi, size=n) if n else np.zeros(0)

    def _slot(self, node_id: int) -> Optional[int]:
        return self._slots.get(node_id)

    # -------------------------------------------------------------------------
    # Hover
    # -------------------------------------------------------------------------

    def set_hovered(self, node_id: int, hovered: bool) -> bool:
        """Set hover flag. Returns False for unknown node ids."""
        slot = self._slot(node_id)
        if slot is None:
            return False
        self.hovered[slot] = hovered
        return True

    def is_hovered(self, node_id: int) -> bool:
        slot = self._slot(node_id)
        return slot is not None and bool(self.hovered[slot])

    # -------------------------------------------------------------------------
    # Frame Update
    # -------------------------------------------------------------------------

    def active_mask(self, state: ActivationState) -> np.ndarray:
        active = state.active_positions
        return np.fromiter((p in active for p in self._positions), dtype=bool, count=len(self._positions))

    def update(self, frame: FrameState, state: ActivationState):
        """Advance rotation and settle lit/idle opacity for this frame."""
        self.time = frame.t
        self.frame_id = frame.frame_id

        self.rotation[:, 0] += self.config.rotation_step_x
        self.rotation[:, 1] += self.config.rotation_step_y

        lit = self.hovered | self.active_mask(state)
        dimmed = self.lit & ~lit
        if dimmed.any():
            n = int(dimmed.sum())
            self.opacity[dimmed] = self._idle_opacity(n)
            logger.debug("Frame %d: %d nodes dimmed to idle opacity", frame.frame_id, n)
        self.opacity[lit] = self.config.lit_opacity
        self.lit = lit

    # -------------------------------------------------------------------------
    # Attributes
    # -------------------------------------------------------------------------

    def node_opacity(self, node_id: int) -> float:
        return float(self.opacity[self._slots[node_id]])

    def node_emissive(self, node_id: int) -> float:
        lit = self.lit[self._slots[node_id]]
        return self.config.lit_emissive if lit else self.config.idle_emissive

    def node_rotation(self, node_id: int) -> Tuple[float, float]:
        rx, ry = self.rotation[self._slots[node_id]]
        return (float(rx), float(ry))

    def edge_opacity(self, edge: Edge, state: ActivationState) -> float:
        return edge_opacity(state.is_edge_active(edge.id), self.config)

    def particles(self, edge: Edge, t: float = None) -> np.ndarray:
        t = self.time if t is None else t
        return particle_positions(
            edge.start, edge.end, t,
            count=self.config.particle_count,
            spacing=self.config.particle_spacing,
        )

    def particle_opacity(self, edge: Edge, state: ActivationState) -> float:
        return particle_opacity(state.is_edge_active(edge.id), self.config)
