"""Shared graph plumbing for State and Computed.

Both cell kinds hold a set of dependent computeds and a set of watchers,
register edges the same way on read, and expose the same detach operation,
so the graph never has to ask which kind of cell it is holding.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from signalbox._tracking import current_computation

if TYPE_CHECKING:
    from signalbox.computed import Computed
    from signalbox.watcher import Watcher

T = TypeVar("T")


class Cell(Generic[T]):
    """Base for reactive cells. Edge sets are keyed by identity."""

    __slots__ = ("_dependents", "_watchers")

    def __init__(self) -> None:
        self._dependents: set[Computed] = set()
        self._watchers: set[Watcher] = set()

    def get(self) -> T:
        raise NotImplementedError

    def _track(self) -> None:
        """Register the edge cell -> current computation, if one is running."""
        computation = current_computation.get()
        if computation is not None:
            self._dependents.add(computation)
            computation._add_source(self)

    def _remove_dependent(self, computed: Computed) -> None:
        """Drop a dependent. Called during dependency cleanup."""
        self._dependents.discard(computed)

    def _add_watcher(self, watcher: Watcher) -> None:
        self._watchers.add(watcher)

    def _remove_watcher(self, watcher: Watcher) -> None:
        self._watchers.discard(watcher)

    def _notify_watchers(self) -> None:
        # Snapshot: a callback may watch/unwatch while we iterate.
        for watcher in list(self._watchers):
            watcher._notify(self)
