"""Deferred tasks — the host's "run this after the current turn" primitive.

Effects batch their re-runs by handing a drain callback to this module.
Where that callback runs is up to the host:

- set_scheduler(fn) installs any callable that takes a zero-argument
  callback and runs it later (asyncio's loop.call_soon, Textual's
  App.call_next, ...).
- Without one, a running asyncio loop in this thread gets the task via
  call_soon. Otherwise it waits in a module-level TaskQueue until flush().
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable

logger = logging.getLogger("signalbox.tasks")

Task = Callable[[], None]


class TaskQueue:
    """FIFO of deferred callbacks, drained cooperatively."""

    __slots__ = ("_tasks",)

    def __init__(self) -> None:
        self._tasks: deque[Task] = deque()

    def enqueue(self, task: Task) -> None:
        self._tasks.append(task)

    def run_pending(self) -> int:
        """Run tasks until the queue is empty, including ones enqueued meanwhile.

        A task that raises stops the run; the rest stay queued.
        """
        count = 0
        while self._tasks:
            task = self._tasks.popleft()
            task()
            count += 1
        return count

    def clear(self) -> None:
        self._tasks.clear()

    def __len__(self) -> int:
        return len(self._tasks)


_queue = TaskQueue()
_scheduler: Callable[[Task], object] | None = None


def set_scheduler(scheduler: Callable[[Task], object] | None) -> None:
    """Set the host primitive used to defer tasks. None restores the default.

    Usage:
        signalbox.set_scheduler(asyncio.get_running_loop().call_soon)
    """
    global _scheduler
    _scheduler = scheduler
    logger.debug("Deferred-task scheduler set to %r", scheduler)


def defer(task: Task) -> None:
    """Run task after the current synchronous turn. Fire-and-forget."""
    if _scheduler is not None:
        _scheduler(task)
        return
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        _queue.enqueue(task)
    else:
        loop.call_soon(task)


def flush() -> int:
    """Run every task waiting in the default queue. Returns how many ran."""
    count = _queue.run_pending()
    if count:
        logger.debug("Flushed %d deferred task(s)", count)
    return count


def get_pending_count() -> int:
    """Number of tasks waiting in the default queue. Useful for testing."""
    return len(_queue)
