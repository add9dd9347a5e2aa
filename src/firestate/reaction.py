"""Reactions: listeners that UI layers register against store state.

- autorun(fn): run fn now and again whenever anything it read changes.
- reaction(data_fn, effect_fn): track data_fn, call effect_fn with its result
  only when the result changes.

Both return a handle with dispose(); a disposed reaction never runs again.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from firestate._tracking import current_derivation

T = TypeVar("T")


class Reaction:
    """An eager derivation that re-runs its side effect on change."""

    __slots__ = ("_fn", "_dependencies", "_disposed")

    def __init__(self, fn: Callable[[], None]) -> None:
        self._fn = fn
        self._dependencies: set = set()
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _release(self) -> None:
        for dep in self._dependencies:
            dep._remove_observer(self)
        self._dependencies.clear()

    def _evaluate(self, fn: Callable[[], T]) -> T:
        self._release()
        token = current_derivation.set(self)
        try:
            return fn()
        finally:
            current_derivation.reset(token)

    def _run(self) -> None:
        if self._disposed:
            return
        self._evaluate(self._fn)

    def dispose(self) -> None:
        self._disposed = True
        self._release()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"{type(self).__name__}({getattr(self._fn, '__name__', 'fn')}, {state})"


class _DataReaction(Reaction):
    """reaction(data_fn, effect_fn): effect fires only when data_fn's value changes."""

    __slots__ = ("_effect_fn", "_last_value", "_initialized")

    def __init__(self, data_fn: Callable[[], T], effect_fn: Callable[[T], None]) -> None:
        super().__init__(data_fn)
        self._effect_fn = effect_fn
        self._last_value = None
        self._initialized = False

    def _run(self) -> None:
        if self._disposed:
            return
        new_value = self._evaluate(self._fn)
        if not self._initialized or new_value != self._last_value:
            self._last_value = new_value
            self._initialized = True
            self._effect_fn(new_value)


def autorun(fn: Callable[[], None]) -> Reaction:
    """Run fn immediately, then re-run it whenever an observable it read changes.

    Usage:
        log = []
        handle = autorun(lambda: log.append(store.is_loading))
        ...
        handle.dispose()
    """
    r = Reaction(fn)
    r._run()
    return r


def reaction(
    data_fn: Callable[[], T],
    effect_fn: Callable[[T], None],
    *,
    fire_immediately: bool = False,
) -> Reaction:
    """Track data_fn; call effect_fn with its result each time the result changes.

    Usage:
        r = reaction(lambda: store.entity, render)
        store.set_filters(ById("abc"))   # render(...) once the entity arrives
        r.dispose()
    """
    r = _DataReaction(data_fn, effect_fn)
    if fire_immediately:
        r._run()
    else:
        r._last_value = r._evaluate(data_fn)
        r._initialized = True
    return r
