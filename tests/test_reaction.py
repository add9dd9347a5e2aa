"""Tests for autorun and reaction."""

from firestate import Observable, autorun, reaction


class TestAutorun:
    def test_runs_immediately(self):
        o = Observable(10)
        log = []
        autorun(lambda: log.append(o.get()))
        assert log == [10]

    def test_reruns_on_change(self):
        o = Observable(10)
        log = []
        autorun(lambda: log.append(o.get()))
        o.set(20)
        assert log == [10, 20]

    def test_dispose_stops(self):
        o = Observable(10)
        log = []
        r = autorun(lambda: log.append(o.get()))
        r.dispose()
        o.set(20)
        assert log == [10]
        assert r.disposed


class TestReaction:
    def test_no_initial_effect(self):
        o = Observable("a")
        effects = []
        reaction(lambda: o.get(), effects.append)
        assert effects == []

    def test_fires_on_change(self):
        o = Observable("a")
        effects = []
        reaction(lambda: o.get(), effects.append)
        o.set("b")
        assert effects == ["b"]

    def test_fire_immediately(self):
        o = Observable("a")
        effects = []
        reaction(lambda: o.get(), effects.append, fire_immediately=True)
        assert effects == ["a"]

    def test_dedup_effect(self):
        o = Observable(1)
        effects = []
        reaction(lambda: "even" if o.get() % 2 == 0 else "odd", effects.append)
        o.set(3)
        assert effects == []
        o.set(4)
        assert effects == ["even"]

    def test_dispose(self):
        o = Observable(1)
        effects = []
        r = reaction(lambda: o.get(), effects.append)
        o.set(2)
        r.dispose()
        o.set(3)
        assert effects == [2]
