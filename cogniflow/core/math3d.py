# cogniflow/core/math3d.py
"""
Core math helpers for the 3D network space.

Positions are plain float triples so they can be hashed and compared by exact
coordinate value. Bulk work (pairwise distances, projection) goes through
numpy; matrices are row-major float64 and transposed on GPU upload.
"""

from __future__ import annotations
import math
from typing import Iterable, Sequence, Tuple

import numpy as np

Position = Tuple[float, float, float]


# =============================================================================
# Positions
# =============================================================================

def as_position(p: Iterable[float]) -> Position:
    """Normalise any 3-sequence (list, tuple, ndarray) to a hashable float triple."""
    x, y, z = p
    return (float(x), float(y), float(z))


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance. The one metric every threshold comparison uses."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    dz = b[2] - a[2]
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def pairwise_distances(points: np.ndarray) -> np.ndarray:
    """(n, 3) points -> (n, n) Euclidean distance matrix.

    Summation order differs from `distance`, so results can disagree in the
    last ulp. Use it to shortlist pairs, not to decide a strict threshold.
    """
    diff = points[:, None, :] - points[None, :, :]
    return np.sqrt(np.einsum('ijk,ijk->ij', diff, diff))


# =============================================================================
# Scalars
# =============================================================================

def fract(x: float) -> float:
    """Fractional part in [0, 1), also for negative inputs."""
    return x % 1.0


def deg_to_rad(degrees: float) -> float:
    return degrees * (math.pi / 180.0)


# =============================================================================
# Camera Matrices
# =============================================================================

def look_at(eye: Sequence[float], target: Sequence[float], up: Sequence[float] = (0.0, 1.0, 0.0)) -> np.ndarray:
    eye = np.asarray(eye, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)
    up = np.asarray(up, dtype=np.float64)

    forward = target - eye
    forward /= np.linalg.norm(forward)
    right = np.cross(forward, up)
    right /= np.linalg.norm(right)
    up = np.cross(right, forward)

    return np.array([
        [right[0],    right[1],    right[2],    -right.dot(eye)],
        [up[0],       up[1],       up[2],       -up.dot(eye)],
        [-forward[0], -forward[1], -forward[2],  forward.dot(eye)],
        [0.0,         0.0,         0.0,          1.0],
    ])


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    f = 1.0 / math.tan(fov_y / 2.0)
    dz = near - far

    return np.array([
        [f / aspect, 0.0, 0.0,                0.0],
        [0.0,        f,   0.0,                0.0],
        [0.0,        0.0, (far + near) / dz,  2.0 * far * near / dz],
        [0.0,        0.0, -1.0,               0.0],
    ])


def project_points(points: np.ndarray, view_proj: np.ndarray, width: float, height: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Project world points to window pixels (top-left origin).

    Returns (screen_xy, clip_w). Points with clip_w <= 0 are behind the
    camera and their screen coordinates are meaningless.
    """
    n = points.shape[0]
    homo = np.ones((n, 4))
    homo[:, :3] = points
    clip = homo @ view_proj.T
    w = clip[:, 3]
    safe_w = np.where(np.abs(w) < 1e-12, 1e-12, w)
    ndc = clip[:, :2] / safe_w[:, None]

    screen = np.empty((n, 2))
    screen[:, 0] = (ndc[:, 0] * 0.5 + 0.5) * width
    screen[:, 1] = (1.0 - (ndc[:, 1] * 0.5 + 0.5)) * height
    return screen, w
