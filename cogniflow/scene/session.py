# cogniflow/scene/session.py
"""
NetworkSession - top-level coordinator for one mounted visualisation.

Owns the graph, activation state, animation arena, scheduler and input queue.
The host calls `update()` once per frame and forwards pointer events through
`interact()` / `pointer_enter()` / `pointer_leave()` / `skip()`, which may be
called from any thread. All state changes happen inside `update()`.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional
import logging
import time as time_module

import numpy as np

from cogniflow.animation.driver import AnimationDriver
from cogniflow.core.config import SessionConfig
from cogniflow.core.frame import FrameState
from cogniflow.core.math3d import as_position
from cogniflow.core.signal import (
    Connection,
    SignalBridge,
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
from cogniflow.graph.builder import build_graph_from_config
from cogniflow.graph.model import Graph
from cogniflow.interaction.accumulator import InteractionAccumulator
from cogniflow.interaction.queue import EventKind, InteractionQueue, PointerEvent
from cogniflow.interaction.scheduler import FrameScheduler
from cogniflow.interaction.state import ActivationState
from cogniflow.scene.composer import SceneComposer
from cogniflow.scene.snapshot import FrameSnapshot

logger = logging.getLogger(__name__)

SKIP_TASK = "skip_available"


class NetworkSession:
    """One interactive network, from mount to dispose."""

    def __init__(
        self,
        config: SessionConfig = None,
        graph: Graph = None,
        on_complete: Callable[[], None] = None,
        bridge: SignalBridge = None,
    ):
        self.config = (config or SessionConfig()).validate()
        rng = np.random.default_rng(self.config.seed)

        self.bridge = bridge or SignalBridge()
        self.graph = graph if graph is not None else build_graph_from_config(self.config.graph, rng)
        self.scheduler = FrameScheduler()
        self.queue = InteractionQueue()

        self.accumulator = InteractionAccumulator(
            self.graph,
            self.config.interaction,
            scheduler=self.scheduler,
            on_complete=self._complete,
        )
        self.accumulator.on_keywords_revealed = self._on_keywords_revealed
        self.accumulator.on_transforming = self._on_transforming

        self.driver = AnimationDriver(self.graph, self.config.animation, rng)
        self.composer = SceneComposer(self.config.color)

        self._connections: List[Connection] = []
        if on_complete is not None:
            self._connections.append(self.bridge.connect(SIGNAL_COMPLETE, on_complete))

        self.frame = FrameState.start()
        self._snapshot: Optional[FrameSnapshot] = None
        self._last_time: Optional[float] = None
        self._completed = False
        self._disposed = False
        self._skip_available = False

        self.scheduler.schedule(SKIP_TASK, self.config.skip_delay, self._offer_skip)

        logger.info("Session started: %d nodes, %d edges", self.graph.node_count, self.graph.edge_count)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def state(self) -> ActivationState:
        return self.accumulator.state

    @property
    def interaction_count(self) -> int:
        return self.accumulator.state.interaction_count

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def skip_available(self) -> bool:
        return self._skip_available and not self._completed

    @property
    def snapshot(self) -> Optional[FrameSnapshot]:
        """Most recently composed frame (None before the first update)."""
        return self._snapshot

    # -------------------------------------------------------------------------
    # Input (any thread)
    # -------------------------------------------------------------------------

    def interact(self, position):
        self._push(PointerEvent(EventKind.INTERACT, position=as_position(position)))

    def pointer_enter(self, node_id: int):
        self._push(PointerEvent(EventKind.POINTER_ENTER, node_id=node_id))

    def pointer_leave(self, node_id: int):
        self._push(PointerEvent(EventKind.POINTER_LEAVE, node_id=node_id))

    def skip(self):
        self._push(PointerEvent(EventKind.SKIP))

    def _push(self, event: PointerEvent):
        if self._disposed:
            logger.warning("Ignoring %s on disposed session", event.kind.name)
            return
        self.queue.push(event)

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    def update(self, dt: float = None) -> Optional[FrameSnapshot]:
        """
        Run one frame: timers, queued input, animation, composition.

        `dt` defaults to wall-clock time since the previous update.
        """
        if self._disposed:
            return self._snapshot

        now = time_module.perf_counter()
        if dt is None:
            dt = 0.0 if self._last_time is None else now - self._last_time
        self._last_time = now

        self.frame = self.frame.advance(dt)
        self.bridge.emit(SIGNAL_DT, self.frame.dt)

        self.scheduler.advance(self.frame.dt)
        self._process_events()
        if self._disposed:
            return self._snapshot

        self.driver.update(self.frame, self.state)
        self._snapshot = self.composer.compose(
            self.frame,
            self.graph,
            self.state,
            self.driver,
            completed=self._completed,
            skip_available=self.skip_available,
        )
        return self._snapshot

    def _process_events(self):
        for event in self.queue.drain():
            if self._disposed:
                return
            if event.kind is EventKind.INTERACT:
                self._apply_interact(event.position)
            elif event.kind is EventKind.POINTER_ENTER:
                self._apply_pointer_enter(event.node_id)
            elif event.kind is EventKind.POINTER_LEAVE:
                self._apply_pointer_leave(event.node_id)
            elif event.kind is EventKind.SKIP:
                self._apply_skip()

    def _apply_interact(self, position):
        state = self.accumulator.on_interact(position)
        self.bridge.emit(SIGNAL_INTERACT, position)
        self.bridge.emit(SIGNAL_ACTIVATION_CHANGED, state)

    def _apply_pointer_enter(self, node_id: int):
        node = self.graph.node(node_id)
        if node is None:
            logger.debug("pointer_enter on unknown node %r", node_id)
            return
        self.driver.set_hovered(node_id, True)
        self.bridge.emit(SIGNAL_NODE_HOVER, node_id)
        self._apply_interact(node.position)

    def _apply_pointer_leave(self, node_id: int):
        if not self.driver.set_hovered(node_id, False):
            logger.debug("pointer_leave on unknown node %r", node_id)
            return
        self.bridge.emit(SIGNAL_NODE_UNHOVER, node_id)

    def _apply_skip(self):
        if not self.skip_available:
            logger.debug("Skip requested before it was offered; ignored")
            return
        logger.info("Animation skipped after %d interactions", self.interaction_count)
        self.accumulator.cancel()
        self._complete()

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _on_keywords_revealed(self, state: ActivationState):
        self.bridge.emit(SIGNAL_KEYWORDS_REVEALED, state)

    def _on_transforming(self, state: ActivationState):
        self.bridge.emit(SIGNAL_TRANSFORMING, state)

    def _offer_skip(self):
        if self._disposed or self._completed:
            return
        self._skip_available = True
        self.bridge.emit(SIGNAL_SKIP_AVAILABLE)

    def _complete(self):
        if self._disposed:
            logger.warning("Completion fired on a disposed session; ignored")
            return
        if self._completed:
            return
        self._completed = True
        logger.info("Session complete at t=%.2fs", self.frame.t)
        self.bridge.emit(SIGNAL_COMPLETE)

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def dispose(self):
        """Cancel pending timers, drop queued input and detach callbacks."""
        if self._disposed:
            return
        self._disposed = True
        cancelled = self.scheduler.close()
        dropped = self.queue.clear()
        self.bridge.emit(SIGNAL_DISPOSED)
        for conn in self._connections:
            conn.disconnect()
        self._connections.clear()
        logger.info("Session disposed (%d tasks cancelled, %d events dropped)", cancelled, dropped)

    def __enter__(self) -> NetworkSession:
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()

    # -------------------------------------------------------------------------
    # Debug
    # -------------------------------------------------------------------------

    def get_stats(self) -> Dict[str, Any]:
        state = self.state
        return {
            'frame_id': self.frame.frame_id,
            't': self.frame.t,
            'node_count': self.graph.node_count,
            'edge_count': self.graph.edge_count,
            'interaction_count': state.interaction_count,
            'active_nodes': len(state.active_positions),
            'active_edges': len(state.active_edge_ids),
            'stage': state.stage.name,
            'completed': self._completed,
            'disposed': self._disposed,
            'pending_tasks': [t.name for t in self.scheduler.pending()],
        }
