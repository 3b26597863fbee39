"""Core module - math, signals, frame timing and configuration."""

from .math3d import (
    Position,
    as_position,
    distance,
    fract,
    deg_to_rad,
    pairwise_distances,
    look_at,
    perspective,
    project_points,
)

from .signal import (
    SignalBridge,
    Connection,
    SignalDebugger,
    on_signal,
    SIGNAL_DT,
    SIGNAL_INTERACT,
    SIGNAL_NODE_HOVER,
    SIGNAL_NODE_UNHOVER,
    SIGNAL_ACTIVATION_CHANGED,
    SIGNAL_KEYWORDS_REVEALED,
    SIGNAL_TRANSFORMING,
    SIGNAL_SKIP_AVAILABLE,
    SIGNAL_COMPLETE,
    SIGNAL_DISPOSED,
)

from .frame import FrameState
from .color import Color

from .config import (
    ConfigError,
    GraphConfig,
    InteractionConfig,
    AnimationConfig,
    SessionConfig,
    load_config,
    save_config,
)

__all__ = [
    'Position',
    'as_position', 'distance', 'fract',
    'deg_to_rad', 'pairwise_distances',
    'look_at', 'perspective', 'project_points',
    'SignalBridge',
    'Connection',
    'SignalDebugger',
    'on_signal',
    'FrameState',
    'Color',
    'ConfigError',
    'GraphConfig',
    'InteractionConfig',
    'AnimationConfig',
    'SessionConfig',
    'load_config',
    'save_config',
]
