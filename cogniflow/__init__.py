# cogniflow/__init__.py
"""
Cogniflow Network - interactive 3D node graph for onboarding animations.

Core components:
- build_graph: Random nodes with proximity edges
- InteractionAccumulator: Activation state machine (idle -> revealing -> transforming)
- AnimationDriver: Per-frame rotation, opacity and particle flow
- SceneComposer: Immutable FrameSnapshots for the host renderer
- NetworkSession: Top-level coordinator owning all of the above
"""

from .core import (
    # Math
    Position,
    as_position,
    distance,

    # Signals
    SignalBridge,

    # Frame / config
    FrameState,
    SessionConfig,
    GraphConfig,
    InteractionConfig,
    AnimationConfig,
    ConfigError,
    load_config,
    save_config,
)

from .graph import Node, Edge, Graph, build_graph, graph_from_positions

from .interaction import (
    ActivationState,
    RevealState,
    RevealStage,
    InteractionAccumulator,
    accumulate,
)

from .animation import AnimationDriver, particle_fraction, particle_positions

from .scene import (
    FrameSnapshot,
    SceneComposer,
    NetworkSession,
    KEYWORD_LABELS,
)

__version__ = '0.1.0'

__all__ = [
    # Core
    'Position', 'as_position', 'distance',
    'SignalBridge',
    'FrameState',
    'SessionConfig', 'GraphConfig', 'InteractionConfig', 'AnimationConfig',
    'ConfigError', 'load_config', 'save_config',

    # Graph
    'Node', 'Edge', 'Graph', 'build_graph', 'graph_from_positions',

    # Interaction
    'ActivationState', 'RevealState', 'RevealStage',
    'InteractionAccumulator', 'accumulate',

    # Animation
    'AnimationDriver', 'particle_fraction', 'particle_positions',

    # Scene
    'FrameSnapshot', 'SceneComposer', 'NetworkSession', 'KEYWORD_LABELS',
]
