# cogniflow/interaction/scheduler.py
"""
FrameScheduler - one-shot deferred tasks advanced by frame time.

Runs entirely on the frame thread: `advance(dt)` is called once per frame and
fires every task whose delay has elapsed. Tasks are cancellable and fire at
most once.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List
import logging

logger = logging.getLogger(__name__)


@dataclass
class DeferredTask:
    """Handle to a scheduled callback."""
    name: str
    delay: float
    callback: Callable[[], None]
    elapsed: float = 0.0
    fired: bool = False
    cancelled: bool = False

    @property
    def pending(self) -> bool:
        return not (self.fired or self.cancelled)

    @property
    def remaining(self) -> float:
        return max(0.0, self.delay - self.elapsed)

    def cancel(self) -> bool:
        """Cancel if still pending. Returns True when this call cancelled it."""
        if not self.pending:
            return False
        self.cancelled = True
        logger.debug("Cancelled task %r with %.3fs remaining", self.name, self.remaining)
        return True


class FrameScheduler:
    """Single-threaded scheduler for delayed one-shot callbacks."""

    def __init__(self):
        self._tasks: List[DeferredTask] = []
        self._time: float = 0.0
        self._closed = False

    @property
    def time(self) -> float:
        return self._time

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(self, name: str, delay: float, callback: Callable[[], None]) -> DeferredTask:
        task = DeferredTask(name=name, delay=max(0.0, delay), callback=callback)
        if self._closed:
            task.cancelled = True
            logger.warning("Scheduler closed; task %r dropped", name)
            return task
        self._tasks.append(task)
        logger.debug("Scheduled task %r in %.3fs", name, task.delay)
        return task

    def advance(self, dt: float) -> int:
        """Advance time by `dt` seconds and fire due tasks. Returns the number fired."""
        if self._closed:
            return 0

        dt = max(0.0, dt)
        self._time += dt
        fired = 0

        for task in list(self._tasks):
            if not task.pending:
                continue
            task.elapsed += dt
            if task.elapsed >= task.delay:
                task.fired = True
                fired += 1
                task.callback()

        self._tasks = [t for t in self._tasks if t.pending]
        return fired

    def pending(self) -> List[DeferredTask]:
        return [t for t in self._tasks if t.pending]

    def cancel_all(self) -> int:
        count = sum(1 for t in self._tasks if t.cancel())
        self._tasks.clear()
        return count

    def close(self) -> int:
        """Cancel everything and refuse new work. Returns the number cancelled."""
        count = self.cancel_all()
        self._closed = True
        return count
