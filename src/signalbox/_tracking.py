"""Dependency tracking context — the heart of signalbox.

Uses a contextvar to hold the computation currently being evaluated. Any
State.get() or Computed.get() made while it is set registers itself as a
source of that computation, building the dependency graph automatically.

untrack()/untracked() clear the slot for a scope so reads inside it register
nothing.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, TypeVar

if TYPE_CHECKING:
    from signalbox.computed import Computed

T = TypeVar("T")

# The currently-evaluating computation, or None outside any recomputation.
current_computation: contextvars.ContextVar[Computed | None] = contextvars.ContextVar(
    "current_computation", default=None
)


def current_computed() -> Computed | None:
    """The Computed whose function is running right now, if any."""
    return current_computation.get()


def untrack(fn: Callable[[], T]) -> T:
    """Call fn with tracking suspended. Reads inside fn register no dependencies.

    Usage:
        total = Computed(lambda: a.get() + untrack(b.get))
        # total depends on a only
    """
    token = current_computation.set(None)
    try:
        return fn()
    finally:
        current_computation.reset(token)


@contextmanager
def untracked():
    """Context manager form of untrack().

    Usage:
        with untracked():
            snapshot = b.get()  # no dependency on b
    """
    token = current_computation.set(None)
    try:
        yield
    finally:
        current_computation.reset(token)
