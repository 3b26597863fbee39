# cogniflow/interaction/queue.py
"""
InteractionQueue - serialises pointer events onto the frame thread.

Input sources may push from any thread; the session drains the queue once per
frame and applies events one at a time in arrival order.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, List, Optional
import threading

from cogniflow.core.math3d import Position


class EventKind(Enum):
    INTERACT = auto()       # Raw interaction at a position
    POINTER_ENTER = auto()  # Pointer entered a node's hit region
    POINTER_LEAVE = auto()  # Pointer left a node's hit region
    SKIP = auto()           # User asked to skip the animation


@dataclass(frozen=True)
class PointerEvent:
    kind: EventKind
    node_id: Optional[int] = None
    position: Optional[Position] = None


class InteractionQueue:
    """Lock-protected FIFO of PointerEvents."""

    def __init__(self):
        self._queue: Deque[PointerEvent] = deque()
        self._lock = threading.Lock()

    def push(self, event: PointerEvent) -> None:
        with self._lock:
            self._queue.append(event)

    def drain(self) -> List[PointerEvent]:
        """Pop everything queued so far, oldest first."""
        with self._lock:
            items = list(self._queue)
            self._queue.clear()
        return items

    def clear(self) -> int:
        with self._lock:
            n = len(self._queue)
            self._queue.clear()
        return n

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)
