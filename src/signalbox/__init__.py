"""signalbox: lazy, glitch-free reactive cells for Python."""

from importlib.metadata import version as _version

__version__ = _version("signalbox")

from signalbox._tracking import current_computed, untrack, untracked
from signalbox.errors import SignalError, CycleError
from signalbox.state import State
from signalbox.computed import Computed, computed
from signalbox.watcher import Watcher
from signalbox.tasks import set_scheduler, flush, get_pending_count
from signalbox.effect import EffectScheduler, effect
from signalbox import subtle
# textual NOT auto-imported — opt-in only

__all__ = [
    "State",
    "Computed",
    "computed",
    "Watcher",
    "untrack",
    "untracked",
    "current_computed",
    "effect",
    "EffectScheduler",
    "set_scheduler",
    "flush",
    "get_pending_count",
    "SignalError",
    "CycleError",
    "subtle",
]
