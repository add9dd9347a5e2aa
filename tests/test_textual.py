"""Tests for firestate.textual: binding stores and actions to a Textual app."""

import threading

import pytest
from textual.css.query import NoMatches

from firestate import ById, Observable, RemoteError
from firestate import textual as ftx
from firestate.actions import DeleteEventAction
from firestate.services import EventApiService
from firestate.stores import EventStore


class _MockApp:
    """Minimal stand-in for the Textual App interface the bindings need."""

    def __init__(self, *, is_running=True):
        self.is_running = is_running
        self._call_from_thread_log = []

    def call_from_thread(self, fn, *args):
        self._call_from_thread_log.append((fn, args))
        fn(*args)


class TestReaction:
    def test_skips_when_not_running(self):
        app = _MockApp(is_running=False)
        o = Observable(1)
        effects = []
        ftx.reaction(app, o.get, effects.append)
        o.set(2)
        assert effects == []

    def test_skips_during_pause(self):
        app = _MockApp()
        o = Observable(1)
        effects = []
        ftx.reaction(app, o.get, effects.append)
        with ftx.pause(app):
            o.set(2)
        assert effects == []

    def test_fires_when_safe(self):
        app = _MockApp()
        o = Observable(1)
        effects = []
        ftx.reaction(app, o.get, effects.append)
        o.set(2)
        assert effects == [2]

    def test_catches_nomatch(self):
        app = _MockApp()
        o = Observable(1)

        def _raise_nomatch(v):
            raise NoMatches("#event-title")

        r = ftx.reaction(app, o.get, _raise_nomatch)
        o.set(2)
        r.dispose()

    def test_propagates_real_errors(self):
        app = _MockApp()
        o = Observable(1)

        def _raise_value_error(v):
            raise ValueError("boom")

        ftx.reaction(app, o.get, _raise_value_error)
        with pytest.raises(ValueError, match="boom"):
            o.set(2)

    def test_thread_marshal(self):
        app = _MockApp()
        o = Observable(1)
        effects = []
        ftx.reaction(app, o.get, effects.append)

        t = threading.Thread(target=lambda: o.set(2))
        t.start()
        t.join()

        assert effects == [2]
        assert len(app._call_from_thread_log) >= 1


class TestAutorun:
    def test_skips_during_pause(self):
        app = _MockApp()
        o = Observable(1)
        log = []
        ftx.autorun(app, lambda: log.append(o.get()))
        assert log == [1]
        with ftx.pause(app):
            o.set(2)
        assert log == [1]

    def test_fires_when_safe(self):
        app = _MockApp()
        o = Observable(1)
        log = []
        ftx.autorun(app, lambda: log.append(o.get()))
        o.set(2)
        assert log == [1, 2]


class TestPause:
    def test_pause_restores_on_exception(self):
        app = _MockApp()
        with pytest.raises(RuntimeError):
            with ftx.pause(app):
                assert not ftx.is_safe(app)
                raise RuntimeError("oops")
        assert ftx.is_safe(app)

    def test_pause_does_not_mutate_app(self):
        app = _MockApp()
        before = set(vars(app))
        with ftx.pause(app):
            assert set(vars(app)) == before
        assert set(vars(app)) == before

    def test_multiple_apps_independent(self):
        app_a = _MockApp()
        app_b = _MockApp()
        with ftx.pause(app_a):
            assert not ftx.is_safe(app_a)
            assert ftx.is_safe(app_b)


class TestBindStore:
    def test_renders_current_then_changes(self, db):
        app = _MockApp()
        store = EventStore(EventApiService(db))
        titles = []
        ftx.bind_store(app, store, lambda s: s.get("entity") and s.get("entity").title, titles.append)
        assert titles == [None]
        store.set_filters(ById("ev1"))
        assert titles == [None, "Launch party"]

    def test_unchanged_projection_does_not_render(self, db):
        app = _MockApp()
        store = EventStore(EventApiService(db))
        renders = []
        ftx.bind_store(app, store, lambda s: s.get("error"), renders.append)
        store.set_filters(ById("ev1"))
        store.set_filters(ById("ev2"))
        assert renders == [None]

    def test_dispose(self, db):
        app = _MockApp()
        store = EventStore(EventApiService(db))
        renders = []
        binding = ftx.bind_store(app, store, lambda s: s.get("filters"), renders.append)
        binding.dispose()
        store.set_filters(ById("ev1"))
        assert renders == [None]


class TestBindAction:
    @pytest.mark.asyncio
    async def test_handlers_in_order(self, db):
        app = _MockApp()
        delete = DeleteEventAction(EventApiService(db))
        log = []
        ftx.bind_action(
            app,
            delete,
            on_starts=lambda: log.append("starts"),
            on_success=lambda: log.append("success"),
            on_error=lambda message: log.append(message),
            on_ends=lambda: log.append("ends"),
        )
        await delete.run("ev1")
        db.fail_next(RemoteError("permission-denied"))
        await delete.run("ev2")
        assert log == ["starts", "success", "ends", "starts", "Permission denied.", "ends"]

    @pytest.mark.asyncio
    async def test_dispose(self, db):
        app = _MockApp()
        delete = DeleteEventAction(EventApiService(db))
        log = []
        binding = ftx.bind_action(app, delete, on_ends=lambda: log.append("ends"))
        binding.dispose()
        await delete.run("ev1")
        assert log == []

    @pytest.mark.asyncio
    async def test_paused_app_misses_signals(self, db):
        app = _MockApp()
        delete = DeleteEventAction(EventApiService(db))
        log = []
        ftx.bind_action(app, delete, on_success=lambda: log.append("success"))
        with ftx.pause(app):
            await delete.run("ev1")
        assert log == []
