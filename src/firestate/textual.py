"""Textual bindings for stores and actions. Opt-in, requires textual.

Effects registered here only run while the app is running and not paused for
widget replacement, swallow NoMatches from widget queries, and hop onto the
app thread when triggered from elsewhere.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

from firestate.reaction import autorun as _autorun
from firestate.reaction import reaction as _reaction

# id(app) present <=> inside pause(app)
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend bound effects while widgets are being replaced."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _guard(app, fn):
    main = threading.get_ident()

    def _safe(*args):
        try:
            fn(*args)
        except NoMatches:
            pass

    def _guarded(*args):
        if not is_safe(app):
            return
        if threading.get_ident() != main:
            app.call_from_thread(_safe, *args)
        else:
            _safe(*args)

    return _guarded


def reaction(app, data_fn, effect_fn, *, fire_immediately=False):
    """firestate.reaction() whose effect is guarded for the app."""
    return _reaction(data_fn, _guard(app, effect_fn), fire_immediately=fire_immediately)


def autorun(app, fn):
    """firestate.autorun() whose body is guarded for the app."""
    return _autorun(_guard(app, fn))


def bind_store(app, store, projector, effect_fn, *, fire_immediately=True):
    """Render a projection of a store's state whenever it changes.

    Usage:
        bind_store(app, event_store, lambda s: s.entity, show_event)
    """
    selector = store.select(projector)
    return reaction(app, selector.get, effect_fn, fire_immediately=fire_immediately)


class ActionBinding:
    """Subscriptions of widget handlers to an action's signals."""

    def __init__(self, disposers) -> None:
        self._disposers = list(disposers)

    def dispose(self) -> None:
        for dispose in self._disposers:
            dispose()
        self._disposers.clear()


def bind_action(app, runner, *, on_starts=None, on_success=None, on_error=None, on_ends=None):
    """Wire a mutation runner's signals to widget handlers.

    on_error receives the display message; the other handlers take no argument.
    """
    disposers = []
    for signal, handler in (
        (runner.starts, on_starts),
        (runner.success, on_success),
        (runner.ends, on_ends),
    ):
        if handler is not None:
            guarded = _guard(app, handler)
            disposers.append(signal.subscribe(lambda _value, g=guarded: g()))
    if on_error is not None:
        disposers.append(runner.error.subscribe(_guard(app, on_error)))
    return ActionBinding(disposers)
