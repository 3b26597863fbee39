"""Scene module - frame composition and the session coordinator."""

from cogniflow.scene.snapshot import (
    FrameSnapshot,
    NodeRenderItem,
    EdgeRenderItem,
    ParticleRenderItem,
    LabelRenderItem,
)
from cogniflow.scene.composer import (
    SceneComposer,
    KEYWORD_LABELS,
    LABEL_FONT_SIZE,
    LABEL_OPACITY,
    LABEL_OPACITY_TRANSFORMING,
)
from cogniflow.scene.session import NetworkSession, SKIP_TASK

__all__ = [
    'FrameSnapshot',
    'NodeRenderItem',
    'EdgeRenderItem',
    'ParticleRenderItem',
    'LabelRenderItem',
    'SceneComposer',
    'KEYWORD_LABELS',
    'LABEL_FONT_SIZE',
    'LABEL_OPACITY',
    'LABEL_OPACITY_TRANSFORMING',
    'NetworkSession',
    'SKIP_TASK',
]
