"""Low-level API for framework authors, mirroring the Signals proposal's
``Signal.subtle`` namespace.

Usage:
    from signalbox import subtle

    w = subtle.Watcher(lambda: print("something went stale"))
    w.watch(total)
"""

from signalbox._tracking import current_computed, untrack, untracked
from signalbox.watcher import Watcher

__all__ = ["Watcher", "current_computed", "untrack", "untracked"]
