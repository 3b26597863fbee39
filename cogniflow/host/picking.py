# cogniflow/host/picking.py
"""
Screen-space hover picking for hosts without a GPU pick buffer.

Node centres are projected through the camera's view-projection matrix and a
pointer hits a node when it lies within the node's projected radius. When
several nodes overlap, the one nearest the camera wins.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np

from cogniflow.core.math3d import deg_to_rad, look_at, perspective, project_points
from cogniflow.graph.model import Graph


@dataclass
class CameraRig:
    """Fixed orbit-free camera looking at the origin."""
    eye: Tuple[float, float, float] = (0.0, 0.0, 15.0)
    target: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    up: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    fov_y_deg: float = 60.0
    near: float = 0.1
    far: float = 100.0

    def view(self) -> np.ndarray:
        return look_at(self.eye, self.target, self.up)

    def projection(self, aspect: float) -> np.ndarray:
        return perspective(deg_to_rad(self.fov_y_deg), aspect, self.near, self.far)

    def view_proj(self, width: float, height: float) -> np.ndarray:
        aspect = width / max(1.0, height)
        return self.projection(aspect) @ self.view()


def projected_radii(sizes: np.ndarray, clip_w: np.ndarray, proj_scale: float, height: float) -> np.ndarray:
    """World-space radii -> pixel radii for points at clip depth `clip_w`."""
    safe_w = np.where(clip_w <= 1e-9, np.inf, clip_w)
    return sizes * proj_scale * (height * 0.5) / safe_w


def pick_node(
    graph: Graph,
    view_proj: np.ndarray,
    width: float,
    height: float,
    x: float,
    y: float,
    proj_scale: float,
    min_radius_px: float = 4.0,
) -> Optional[int]:
    """Id of the frontmost node under pixel (x, y), or None."""
    if graph.node_count == 0:
        return None

    screen, clip_w = project_points(graph.positions_array(), view_proj, width, height)
    radii = np.maximum(projected_radii(graph.sizes_array(), clip_w, proj_scale, height), min_radius_px)

    d2 = (screen[:, 0] - x) ** 2 + (screen[:, 1] - y) ** 2
    hits = (clip_w > 0.0) & (d2 <= radii * radii)
    if not hits.any():
        return None

    candidates = np.nonzero(hits)[0]
    best = candidates[np.argmin(clip_w[candidates])]
    return graph.nodes[int(best)].id


class HoverTracker:
    """
    Converts per-move pick results into enter/leave transitions.

    Only one node is hovered at a time; moving straight from one node to
    another produces a leave for the old node before the enter for the new.
    """

    def __init__(self):
        self.current: Optional[int] = None

    def move(self, picked: Optional[int]) -> List[Tuple[str, int]]:
        if picked == self.current:
            return []
        transitions = []
        if self.current is not None:
            transitions.append(("leave", self.current))
        if picked is not None:
            transitions.append(("enter", picked))
        self.current = picked
        return transitions

    def apply(self, session, picked: Optional[int]) -> List[Tuple[str, int]]:
        """Forward transitions to a NetworkSession."""
        transitions = self.move(picked)
        for kind, node_id in transitions:
            if kind == "enter":
                session.pointer_enter(node_id)
            else:
                session.pointer_leave(node_id)
        return transitions
