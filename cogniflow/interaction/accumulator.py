# cogniflow/interaction/accumulator.py
"""
InteractionAccumulator - turns pointer interactions into activation state.

Stages are strictly ordered and never revisited within a session:

    IDLE (count < 5) -> REVEALING (5..14) -> TRANSFORMING (>= 15)

`accumulate()` is the pure transition. `InteractionAccumulator` wraps it with
the session-owned state and the one-shot completion task that entering
TRANSFORMING schedules.
"""

from __future__ import annotations
from typing import Callable, List, Optional
import logging

from cogniflow.core.config import InteractionConfig
from cogniflow.core.math3d import as_position, distance
from cogniflow.graph.model import Graph, Node
from cogniflow.interaction.scheduler import DeferredTask, FrameScheduler
from cogniflow.interaction.state import ActivationState

logger = logging.getLogger(__name__)

COMPLETION_TASK = "completion"


def nearby_nodes(graph: Graph, position, radius: float) -> List[Node]:
    """Nodes strictly within `radius` of `position`, excluding nodes located exactly there."""
    position = as_position(position)
    return [
        node for node in graph.nodes
        if node.position != position and distance(node.position, position) < radius
    ]


def accumulate(
    graph: Graph,
    state: ActivationState,
    position,
    config: Optional[InteractionConfig] = None,
) -> ActivationState:
    """
    Apply one interaction at `position` and return the next state.

    Total over any position: unknown coordinates activate nothing but still
    count as an interaction.
    """
    config = config or InteractionConfig()
    position = as_position(position)

    nearby = nearby_nodes(graph, position, config.nearby_radius)
    positions = state.active_positions | {position} | {n.position for n in nearby}
    edge_ids = state.active_edge_ids | {e.id for e in graph.edges_touching(position)}

    count = state.interaction_count + 1
    reveal = state.reveal.advance(count, config.keyword_threshold, config.transform_threshold)

    return ActivationState(
        active_positions=frozenset(positions),
        active_edge_ids=frozenset(edge_ids),
        interaction_count=count,
        reveal=reveal,
    )


class InteractionAccumulator:
    """
    Owns the ActivationState of one session.

    Not thread-safe: `on_interact` must only be called from the frame thread
    (the session drains its InteractionQueue there).
    """

    def __init__(
        self,
        graph: Graph,
        config: InteractionConfig = None,
        scheduler: FrameScheduler = None,
        on_complete: Callable[[], None] = None,
    ):
        self.graph = graph
        self.config = config or InteractionConfig()
        self.scheduler = scheduler
        self.on_complete = on_complete

        self.state = ActivationState()
        self.completion_task: Optional[DeferredTask] = None

        # Stage transition hooks, called with the new state
        self.on_keywords_revealed: Optional[Callable[[ActivationState], None]] = None
        self.on_transforming: Optional[Callable[[ActivationState], None]] = None

    @property
    def interaction_count(self) -> int:
        return self.state.interaction_count

    def on_interact(self, position) -> ActivationState:
        previous = self.state
        self.state = accumulate(self.graph, previous, position, self.config)
        logger.debug("Interaction at %s -> %s", as_position(position), self.state.summary())

        if self.state.show_keywords and not previous.show_keywords:
            logger.info("Keywords revealed after %d interactions", self.state.interaction_count)
            if self.on_keywords_revealed:
                self.on_keywords_revealed(self.state)

        if self.state.transforming and not previous.transforming:
            logger.info(
                "Transforming after %d interactions; completion in %.1fs",
                self.state.interaction_count, self.config.completion_delay,
            )
            self._schedule_completion()
            if self.on_transforming:
                self.on_transforming(self.state)

        return self.state

    def _schedule_completion(self):
        if self.completion_task is not None:
            return
        if self.scheduler is None:
            logger.warning("Transforming without a scheduler; completion will not fire")
            return
        self.completion_task = self.scheduler.schedule(
            COMPLETION_TASK, self.config.completion_delay, self._fire_completion
        )

    def _fire_completion(self):
        if self.on_complete:
            self.on_complete()

    def cancel(self) -> bool:
        """Cancel a pending completion. Returns True if one was pending."""
        if self.completion_task is None:
            return False
        return self.completion_task.cancel()
