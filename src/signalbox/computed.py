"""Computed cells — cached functions of other cells.

The cells a Computed depends on are whatever its function happened to read
on its last run, so a branch not taken is not a dependency. A change to any
of them only flips the stale flag here and in everything downstream; the
function runs again on the next get(), never earlier. Marking stale
walks each reachable node once, and nothing is recomputed until someone
reads it, so a reader never sees a mix of old and new inputs.

Sources from the previous evaluation are released at the start of the next
one. An abandoned Computed keeps its back-edges until then.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from signalbox._cell import Cell
from signalbox._tracking import current_computation
from signalbox.errors import CycleError

T = TypeVar("T")

_UNSET = object()


class Computed(Cell[T]):
    """A derived value that auto-tracks dependencies and caches the result."""

    __slots__ = ("_fn", "_value", "_stale", "_sources", "_computing")

    def __init__(self, fn: Callable[[], T]) -> None:
        super().__init__()
        self._fn = fn
        self._value = _UNSET
        self._stale = True
        self._sources: set[Cell] = set()
        self._computing = False

    @property
    def stale(self) -> bool:
        return self._stale

    def get(self) -> T:
        """Read the computed value. Recomputes first if stale."""
        if self._computing:
            raise CycleError(self)
        if self._stale:
            self._recompute()
        self._track()
        return self._value

    def _recompute(self) -> None:
        """Re-evaluate the function, rebuilding the source set from scratch.

        On error the cached value and the stale flag are left as they were.
        """
        for source in self._sources:
            source._remove_dependent(self)
        self._sources.clear()

        self._computing = True
        token = current_computation.set(self)
        try:
            value = self._fn()
        finally:
            current_computation.reset(token)
            self._computing = False

        self._value = value
        self._stale = False

    def _add_source(self, source: Cell) -> None:
        self._sources.add(source)

    def _mark_stale(self) -> None:
        """Called when a source changed. Spreads once per batch of changes."""
        if self._stale:
            return
        self._stale = True
        for dependent in list(self._dependents):
            dependent._mark_stale()
        self._notify_watchers()

    def __repr__(self) -> str:
        name = getattr(self._fn, "__name__", repr(self._fn))
        state = "stale" if self._stale else f"cached={self._value!r}"
        return f"Computed({name}, {state})"


def computed(fn: Callable[[], T]) -> Computed[T]:
    """Wrap a zero-argument function as a Computed.

    Usage:
        first = State("Ada")
        last = State("Lovelace")

        @computed
        def full_name():
            return f"{first.get()} {last.get()}"

        full_name.get()  # "Ada Lovelace"
        last.set("Byron")
        full_name.get()  # "Ada Byron", recomputed on this read
    """
    return Computed(fn)
