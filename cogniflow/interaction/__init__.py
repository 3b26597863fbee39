"""Interaction module - activation state machine, event queue and scheduler."""

from cogniflow.interaction.state import ActivationState, RevealState, RevealStage
from cogniflow.interaction.scheduler import DeferredTask, FrameScheduler
from cogniflow.interaction.queue import EventKind, PointerEvent, InteractionQueue
from cogniflow.interaction.accumulator import (
    InteractionAccumulator,
    accumulate,
    nearby_nodes,
    COMPLETION_TASK,
)

__all__ = [
    'ActivationState',
    'RevealState',
    'RevealStage',
    'DeferredTask',
    'FrameScheduler',
    'EventKind',
    'PointerEvent',
    'InteractionQueue',
    'InteractionAccumulator',
    'accumulate',
    'nearby_nodes',
    'COMPLETION_TASK',
]
