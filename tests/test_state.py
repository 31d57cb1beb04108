"""Tests for State."""

from signalbox import State, Computed, Watcher
from signalbox.state import same_value


class TestState:
    def test_get_set(self):
        s = State(42)
        assert s.get() == 42
        s.set(100)
        assert s.get() == 100

    def test_dedup(self):
        """Setting the same value should not mark dependents stale."""
        s = State(42)
        calls = []
        c = Computed(lambda: calls.append(s.get()))
        c.get()
        s.set(42)
        c.get()
        assert calls == [42]

    def test_equal_scalars_are_same_value(self):
        s = State(10**20)
        w_log = []
        w = Watcher(lambda: w_log.append(1))
        w.watch(s)
        s.set(int("1" + "0" * 20))  # equal but a different object
        assert w_log == []

    def test_in_place_mutation_does_not_propagate(self):
        items = [1, 2]
        s = State(items)
        c = Computed(lambda: len(s.get()))
        assert c.get() == 2
        items.append(3)
        s.set(items)
        assert c.get() == 2  # identity unchanged, no propagation

    def test_equal_containers_are_a_change(self):
        s = State([1, 2])
        c = Computed(lambda: s.get())
        first = c.get()
        replacement = [1, 2]
        s.set(replacement)
        assert c.get() is replacement
        assert c.get() is not first

    def test_custom_equals(self):
        s = State("abc", equals=lambda a, b: a.lower() == b.lower())
        log = []
        w = Watcher(lambda: log.append(1))
        w.watch(s)
        s.set("ABC")
        assert log == []
        assert s.get() == "abc"
        s.set("abd")
        assert log == [1]

    def test_dependents_stale_before_watchers_notified(self):
        s = State(1)
        c = Computed(lambda: s.get() * 2)
        c.get()
        seen = []
        w = Watcher(lambda: seen.append(c.stale))
        w.watch(s)
        s.set(2)
        assert seen == [True]

    def test_repr(self):
        s = State(5)
        assert "State(5)" in repr(s)


class TestSameValue:
    def test_identity(self):
        obj = object()
        assert same_value(obj, obj)

    def test_scalars(self):
        assert same_value("a" * 3, "".join(["a", "a", "a"]))
        assert same_value(None, None)

    def test_mixed_types_differ(self):
        assert not same_value(1, 1.0)
        assert not same_value(1, True)

    def test_objects_by_identity(self):
        assert not same_value({"a": 1}, {"a": 1})

    def test_nan_is_same_value(self):
        assert same_value(float("nan"), float("nan"))
        assert not same_value(float("nan"), 1.0)

    def test_signed_zeros_differ(self):
        assert not same_value(0.0, -0.0)
        assert same_value(-0.0, float("-0"))

    def test_nan_set_does_not_notify(self):
        s = State(float("nan"))
        log = []
        w = Watcher(lambda: log.append(1))
        w.watch(s)
        s.set(float("nan"))
        assert log == []
        s.set(-0.0)
        s.set(0.0)
        assert log == [1, 1]
