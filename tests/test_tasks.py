"""Tests for the deferred-task seam."""

import asyncio
import logging

import pytest

from signalbox import tasks
from signalbox.tasks import TaskQueue, defer, flush, get_pending_count, set_scheduler


class TestTaskQueue:
    def test_fifo(self):
        q = TaskQueue()
        log = []
        q.enqueue(lambda: log.append(1))
        q.enqueue(lambda: log.append(2))
        assert len(q) == 2
        assert q.run_pending() == 2
        assert log == [1, 2]
        assert len(q) == 0

    def test_runs_tasks_enqueued_while_running(self):
        q = TaskQueue()
        log = []

        def first():
            log.append("first")
            q.enqueue(lambda: log.append("second"))

        q.enqueue(first)
        assert q.run_pending() == 2
        assert log == ["first", "second"]

    def test_error_keeps_remaining_tasks(self):
        q = TaskQueue()
        log = []

        def bad():
            raise RuntimeError("task failed")

        q.enqueue(bad)
        q.enqueue(lambda: log.append("later"))
        with pytest.raises(RuntimeError):
            q.run_pending()
        assert len(q) == 1
        q.run_pending()
        assert log == ["later"]


class TestDefer:
    def test_default_queue(self):
        log = []
        defer(lambda: log.append(1))
        assert log == []
        assert get_pending_count() == 1
        assert flush() == 1
        assert log == [1]
        assert get_pending_count() == 0

    def test_flush_empty(self):
        assert flush() == 0

    def test_custom_scheduler(self):
        captured = []
        set_scheduler(captured.append)
        task = lambda: None  # noqa: E731
        defer(task)
        assert captured == [task]
        assert get_pending_count() == 0

    def test_reset_scheduler(self):
        set_scheduler(lambda t: t())
        set_scheduler(None)
        defer(lambda: None)
        assert get_pending_count() == 1

    def test_running_loop_uses_call_soon(self):
        log = []

        async def main():
            defer(lambda: log.append("deferred"))
            log.append("sync")
            await asyncio.sleep(0)
            return list(log)

        assert asyncio.run(main()) == ["sync", "deferred"]
        assert get_pending_count() == 0

    def test_set_scheduler_logs(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="signalbox.tasks"):
            set_scheduler(tasks._queue.enqueue)
        assert "Deferred-task scheduler set" in caplog.text
