"""
Frame State

Immutable timing info handed to the driver and composer each frame.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class FrameState:
    """
    Immutable frame information.
    """
    frame_id: int   # Monotonically increasing frame counter
    dt: float       # Delta time since last frame (seconds)
    t: float        # Elapsed time since session start (seconds)

    @property
    def fps(self) -> float:
        """Estimated FPS from delta time."""
        return 1.0 / max(1e-6, self.dt)

    def advance(self, dt: float) -> FrameState:
        """Next frame after `dt` seconds."""
        dt = max(0.0, dt)
        return FrameState(frame_id=self.frame_id + 1, dt=dt, t=self.t + dt)

    @staticmethod
    def start() -> FrameState:
        return FrameState(frame_id=0, dt=0.0, t=0.0)
