"""Computed selectors: read-only derived views over store state.

A Computed caches the result of its function and tracks the observables the
function read. It is marked dirty when one of them changes and recomputes on
the next read.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from firestate._tracking import current_derivation, schedule, track

T = TypeVar("T")

_UNSET = object()


class Computed(Generic[T]):
    """A lazily evaluated, cached derivation."""

    __slots__ = ("_fn", "_value", "_dirty", "_dependencies", "_observers")

    def __init__(self, fn: Callable[[], T]) -> None:
        self._fn = fn
        self._value: object = _UNSET
        self._dirty = True
        self._dependencies: set = set()
        self._observers: set = set()

    def get(self) -> T:
        track(self)
        if self._dirty:
            self._recompute()
        return self._value  # type: ignore[return-value]

    def _recompute(self) -> None:
        self._release()
        token = current_derivation.set(self)
        try:
            self._value = self._fn()
        finally:
            current_derivation.reset(token)
        self._dirty = False

    def _release(self) -> None:
        for dep in self._dependencies:
            dep._remove_observer(self)
        self._dependencies.clear()

    def _run(self) -> None:
        # Invalidate only; recomputation waits for the next read.
        if not self._dirty:
            self._dirty = True
            for observer in list(self._observers):
                schedule(observer)

    def _remove_observer(self, observer) -> None:
        self._observers.discard(observer)

    def dispose(self) -> None:
        self._release()
        self._observers.clear()
        self._dirty = True
        self._value = _UNSET

    def __repr__(self) -> str:
        state = "dirty" if self._dirty else f"cached={self._value!r}"
        return f"Computed({getattr(self._fn, '__name__', 'fn')}, {state})"
