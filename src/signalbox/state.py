"""State cells — mutable values that track their readers.

When a State is read inside a Computed evaluation, the dependency is
registered automatically. When the State changes, every dependent Computed
is marked stale and every attached Watcher is notified, synchronously,
before set() returns.
"""

from __future__ import annotations

import math
from typing import Callable, TypeVar

from signalbox._cell import Cell

T = TypeVar("T")

# Compared by value; everything else is compared by identity.
_SCALAR_TYPES = (bool, int, float, complex, str, bytes, type(None))


def same_value(old: object, new: object) -> bool:
    """Default change check for State.set().

    Identity, or equal immutable scalars of the same type. Not deep
    equality: a list mutated in place and set back is not a change.
    Floats follow same-value rules: any nan equals nan, 0.0 differs from -0.0.
    """
    if old is new:
        return True
    if type(old) is float and type(new) is float:
        if math.isnan(old) or math.isnan(new):
            return math.isnan(old) and math.isnan(new)
        return old == new and math.copysign(1.0, old) == math.copysign(1.0, new)
    return type(old) is type(new) and isinstance(old, _SCALAR_TYPES) and old == new


class State(Cell[T]):
    """A single mutable value with automatic dependency tracking."""

    __slots__ = ("_value", "_equals")

    def __init__(
        self, value: T, *, equals: Callable[[T, T], bool] | None = None
    ) -> None:
        super().__init__()
        self._value = value
        self._equals = equals or same_value

    def get(self) -> T:
        """Read the value. If inside a computation, registers the dependency."""
        self._track()
        return self._value

    def set(self, value: T) -> None:
        """Write a new value, then mark dependents stale and notify watchers."""
        if self._equals(self._value, value):
            return
        self._value = value
        for dependent in list(self._dependents):
            dependent._mark_stale()
        self._notify_watchers()

    def __repr__(self) -> str:
        return f"State({self._value!r})"
