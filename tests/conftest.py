import importlib

import pytest

from signalbox import EffectScheduler, tasks

# The package re-exports effect() under the submodule's name.
_effect_mod = importlib.import_module("signalbox.effect")


@pytest.fixture(autouse=True)
def _fresh_scheduling(monkeypatch):
    """Each test gets an empty task queue, the default primitive and its own effect scheduler."""
    tasks._queue.clear()
    tasks.set_scheduler(None)
    monkeypatch.setattr(_effect_mod, "_default_scheduler", EffectScheduler())
    yield
    tasks._queue.clear()
    tasks.set_scheduler(None)
