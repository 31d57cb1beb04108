"""Exceptions raised by signalbox itself.

Errors raised by user computations are never wrapped: they reach the
caller of get() unchanged.
"""


class SignalError(Exception):
    """Base class for signalbox errors."""


class CycleError(SignalError):
    """A Computed was read while its own function was still running."""

    def __init__(self, computed) -> None:
        super().__init__(f"Cycle detected: {computed!r} depends on itself")
        self.computed = computed
