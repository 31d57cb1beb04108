"""Textual integration for signalbox. Opt-in — requires textual.

install(app) routes effect drains through App.call_next, so effects re-run
right after the message that changed their inputs. effect(app, fn) guards an
effect against firing while the widget tree is being replaced.

Pause state is one State per app, owned by this module and keyed by
id(app). Guarded effects read only their own app's State, so an effect
skipped during a pause runs again when that pause ends, and pausing one app
leaves the others alone.
"""

from contextlib import contextmanager

from textual.css.query import NoMatches

from signalbox.effect import effect as _effect
from signalbox.state import State
from signalbox.tasks import set_scheduler

_paused_apps: dict[int, State[bool]] = {}


def _pause_state(app) -> State[bool]:
    key = id(app)
    state = _paused_apps.get(key)
    if state is None:
        state = _paused_apps[key] = State(False)
    return state


def install(app) -> None:
    """Use app.call_next as the deferred-task primitive."""
    set_scheduler(app.call_next)


@contextmanager
def pause(app):
    """Suspend guarded effects during widget replacement."""
    state = _pause_state(app)
    state.set(True)
    try:
        yield
    finally:
        state.set(False)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    paused = _pause_state(app).get()
    return app.is_running and not paused


def effect(app, fn):
    """effect() that safely bridges to Textual widgets.

    Skips fn while the app is paused or not running, and swallows NoMatches
    from widget queries. Any other error propagates.
    """

    def _guarded():
        if not is_safe(app):
            return None
        try:
            return fn()
        except NoMatches:
            return None

    return _effect(_guarded)
