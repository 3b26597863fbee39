import threading

from cogniflow.interaction.queue import EventKind, InteractionQueue, PointerEvent
from cogniflow.interaction.scheduler import FrameScheduler


def test_task_fires_once_after_delay():
    scheduler = FrameScheduler()
    calls = []
    task = scheduler.schedule("t", 0.5, lambda: calls.append(scheduler.time))

    assert scheduler.advance(0.25) == 0
    assert task.pending
    assert task.remaining == 0.25

    assert scheduler.advance(0.25) == 1
    assert calls == [0.5]
    assert task.fired and not task.pending

    assert scheduler.advance(1.0) == 0
    assert calls == [0.5]
    assert scheduler.pending() == []


def test_cancelled_task_never_fires():
    scheduler = FrameScheduler()
    calls = []
    task = scheduler.schedule("t", 0.1, lambda: calls.append(1))

    assert task.cancel() is True
    assert task.cancel() is False
    scheduler.advance(1.0)
    assert calls == []


def test_zero_delay_fires_on_next_advance():
    scheduler = FrameScheduler()
    calls = []
    scheduler.schedule("now", 0.0, lambda: calls.append(1))
    assert calls == []
    scheduler.advance(0.0)
    assert calls == [1]


def test_negative_dt_does_not_rewind():
    scheduler = FrameScheduler()
    scheduler.advance(1.0)
    scheduler.advance(-5.0)
    assert scheduler.time == 1.0


def test_close_cancels_and_refuses_new_tasks():
    scheduler = FrameScheduler()
    calls = []
    scheduler.schedule("a", 1.0, lambda: calls.append("a"))
    scheduler.schedule("b", 2.0, lambda: calls.append("b"))

    assert scheduler.close() == 2
    late = scheduler.schedule("c", 0.0, lambda: calls.append("c"))
    assert late.cancelled

    assert scheduler.advance(10.0) == 0
    assert calls == []


def test_task_scheduled_from_callback_runs_later():
    scheduler = FrameScheduler()
    calls = []

    def first():
        calls.append("first")
        scheduler.schedule("second", 1.0, lambda: calls.append("second"))

    scheduler.schedule("first", 0.0, first)
    scheduler.advance(0.0)
    assert calls == ["first"]
    scheduler.advance(1.0)
    assert calls == ["first", "second"]


def test_queue_drains_in_arrival_order():
    queue = InteractionQueue()
    queue.push(PointerEvent(EventKind.POINTER_ENTER, node_id=3))
    queue.push(PointerEvent(EventKind.INTERACT, position=(1.0, 2.0, 3.0)))
    queue.push(PointerEvent(EventKind.POINTER_LEAVE, node_id=3))

    assert len(queue) == 3
    kinds = [e.kind for e in queue.drain()]
    assert kinds == [EventKind.POINTER_ENTER, EventKind.INTERACT, EventKind.POINTER_LEAVE]
    assert len(queue) == 0
    assert queue.drain() == []


def _push_from_threads(push, threads=4, per_thread=250):
    workers = [
        threading.Thread(target=lambda i=i: [push(i, k) for k in range(per_thread)])
        for i in range(threads)
    ]
    for w in workers:
        w.start()
    for w in workers:
        w.join()


def test_queue_serialises_pushes_from_many_threads():
    queue = InteractionQueue()
    _push_from_threads(
        lambda i, k: queue.push(PointerEvent(EventKind.INTERACT, node_id=i, position=(float(k), 0.0, 0.0))),
    )

    events = queue.drain()
    assert len(events) == 4 * 250
    for i in range(4):
        seen = [e.position[0] for e in events if e.node_id == i]
        assert seen == [float(k) for k in range(250)]
    assert len(queue) == 0
