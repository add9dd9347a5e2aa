"""Observable values: the cells a store's view state is made of.

Reading an Observable inside a Computed or Reaction registers the dependency;
writing a different value schedules every dependent.

Thread safety: remote listeners (Firestore's ``on_snapshot``) call back on
their own thread. Call set_scheduler() once from the owning thread; after
that, writes from any other thread are marshaled through the scheduler, and
writes from the owning thread stay synchronous.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from firestate._tracking import schedule, track

T = TypeVar("T")

_scheduler: Callable[[Callable[[], None]], object] | None = None
_scheduler_thread: threading.Thread | None = None


def set_scheduler(scheduler) -> None:
    """Install the cross-thread scheduler. Call from the owning thread.

    For asyncio: ``set_scheduler(loop.call_soon_threadsafe)``.
    For Textual: ``set_scheduler(app.call_from_thread)``.
    Pass ``None`` to remove it.
    """
    global _scheduler, _scheduler_thread
    _scheduler = scheduler
    _scheduler_thread = threading.current_thread() if scheduler is not None else None


def call_on_owner(fn: Callable[[], None]) -> None:
    """Run fn on the scheduler's thread (directly if already there)."""
    if _scheduler is not None and threading.current_thread() is not _scheduler_thread:
        _scheduler(fn)
    else:
        fn()


class Observable(Generic[T]):
    """A single value whose readers are tracked."""

    __slots__ = ("_value", "_observers")

    def __init__(self, value: T) -> None:
        self._value = value
        self._observers: set = set()

    def get(self) -> T:
        track(self)
        return self._value

    def peek(self) -> T:
        """Read without registering a dependency."""
        return self._value

    def set(self, value: T) -> None:
        call_on_owner(lambda v=value: self._set_direct(v))

    def _set_direct(self, value: T) -> None:
        old = self._value
        if old is not value and old != value:
            self._value = value
            for observer in list(self._observers):
                schedule(observer)

    def _remove_observer(self, observer) -> None:
        self._observers.discard(observer)

    def __repr__(self) -> str:
        return f"Observable({self._value!r})"
