"""Watcher — low-level notification hook for State and Computed cells.

A Watcher is told, synchronously, whenever a watched State changes value or
a watched Computed goes from fresh to stale. It records which cells notified
so the owner can pull them later; the callback itself should only schedule
work. Effects (signalbox.effect) are built on top of this.
"""

from __future__ import annotations

from typing import Callable

from signalbox._cell import Cell


class Watcher:
    """Observer attached to any number of cells."""

    __slots__ = ("_callback", "_watched", "_pending")

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._watched: set[Cell] = set()
        # dict as an ordered set: drain order is first-notified order.
        self._pending: dict[Cell, None] = {}

    @property
    def watched(self) -> tuple[Cell, ...]:
        return tuple(self._watched)

    def watch(self, *cells: Cell) -> None:
        """Start watching cells. Non-cells are ignored."""
        for cell in cells:
            if isinstance(cell, Cell):
                self._watched.add(cell)
                cell._add_watcher(self)

    def unwatch(self, *cells: Cell) -> None:
        """Stop watching cells. Safe for cells that were never watched."""
        for cell in cells:
            if isinstance(cell, Cell):
                self._watched.discard(cell)
                cell._remove_watcher(self)

    def get_pending(self) -> list[Cell]:
        """Return and clear the cells that notified since the last call."""
        pending = list(self._pending)
        self._pending.clear()
        return pending

    def _notify(self, cell: Cell) -> None:
        """Called by a cell. Errors from the callback propagate to the setter."""
        self._pending[cell] = None
        self._callback()

    def __repr__(self) -> str:
        return f"Watcher(watching={len(self._watched)}, pending={len(self._pending)})"
