"""Effects — side effects re-run after their dependencies change.

An effect runs its function immediately, then again once after any burst of
changes to the cells it read. It is built from the public pieces only: each
effect is a Computed watched by an EffectScheduler's Watcher. A notification
defers one drain (see signalbox.tasks); the drain pulls every pending
Computed, which re-runs exactly the effects that went stale.

Several set() calls in the same synchronous turn therefore cost one re-run.
"""

from __future__ import annotations

import functools
import logging
from typing import Callable, Union

from signalbox._cell import Cell
from signalbox._tracking import untrack
from signalbox.computed import Computed
from signalbox.tasks import defer
from signalbox.watcher import Watcher

logger = logging.getLogger("signalbox.effect")

Disposer = Callable[[], None]
EffectFn = Callable[[], Union[Disposer, None]]


class EffectScheduler:
    """One Watcher plus a "drain already scheduled" flag.

    The watched computeds are never unwatched while their effect is live, so
    each drain leaves them ready to notify again.
    """

    __slots__ = ("_watcher", "_scheduled")

    def __init__(self) -> None:
        self._watcher = Watcher(self._on_notify)
        self._scheduled = False

    @property
    def scheduled(self) -> bool:
        return self._scheduled

    @property
    def watcher(self) -> Watcher:
        return self._watcher

    def watch(self, cell: Cell) -> None:
        self._watcher.watch(cell)

    def unwatch(self, cell: Cell) -> None:
        self._watcher.unwatch(cell)

    def _on_notify(self) -> None:
        if self._scheduled:
            return
        self._scheduled = True
        logger.debug("Scheduling effect drain")
        defer(self._drain)

    def _drain(self) -> None:
        """Pull every pending cell. Errors are raised after all cells ran."""
        self._scheduled = False
        pending = self._watcher.get_pending()
        logger.debug("Draining %d pending effect(s)", len(pending))

        errors: list[Exception] = []
        for cell in pending:
            try:
                cell.get()
            except Exception as exc:
                errors.append(exc)

        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise ExceptionGroup(f"{len(errors)} effects failed", errors)


class _EffectRunner(Computed[None]):
    """Computed whose function returns the error its effect raised, if any.

    A failed run still finishes fresh, holding the sources read before the
    failure, so the next change to them triggers a retry. get() re-raises.
    """

    __slots__ = ()

    def get(self) -> None:
        error = super().get()
        if error is not None:
            raise error


_default_scheduler = EffectScheduler()


def get_default_scheduler() -> EffectScheduler:
    return _default_scheduler


def effect(fn: EffectFn, *, scheduler: EffectScheduler | None = None) -> Disposer:
    """Run fn now, and again (once per turn) whenever a cell it read changes.

    fn may return a cleanup function; it runs before the next run of fn, or
    on disposal, whichever comes first. Returns the disposer.

    Usage:
        count = State(0)
        log = []

        stop = effect(lambda: log.append(count.get()))
        # log == [0] — ran immediately

        count.set(1)
        count.set(2)
        flush()
        # log == [0, 2] — one re-run for the whole turn

        stop()
    """
    if scheduler is None:
        scheduler = _default_scheduler
    cleanup: Disposer | None = None
    disposed = False

    def _run_cleanup() -> None:
        nonlocal cleanup
        if cleanup is not None:
            previous, cleanup = cleanup, None
            previous()

    @functools.wraps(fn)
    def _body() -> Exception | None:
        nonlocal cleanup
        if disposed:
            return None
        # fn still runs after a failed cleanup so its sources stay tracked.
        cleanup_error = None
        try:
            _run_cleanup()
        except Exception as exc:
            cleanup_error = exc
        try:
            result = fn()
        except Exception as exc:
            return exc
        cleanup = result if callable(result) else None
        return cleanup_error

    runner = _EffectRunner(_body)
    scheduler.watch(runner)
    try:
        # Untracked: an effect created inside a computation is not its source.
        untrack(runner.get)
    except BaseException:
        scheduler.unwatch(runner)
        raise

    def dispose() -> None:
        nonlocal disposed
        if disposed:
            return
        disposed = True
        scheduler.unwatch(runner)
        _run_cleanup()

    return dispose
