"""Push-based event streams.

Mutation runners announce starts/success/error/ends through EventStreams. A
subscriber that raises is logged and skipped; the emitter and the remaining
subscribers carry on.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger("firestate.stream")

T = TypeVar("T")

Disposer = Callable[[], None]


class EventStream(Generic[T]):
    """Fan-out of emitted values to subscribers, in subscription order."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._subscribers: list[Callable[[T], None]] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def emit(self, value: T = None) -> None:  # type: ignore[assignment]
        if self._disposed:
            return
        for cb in list(self._subscribers):
            try:
                cb(value)
            except Exception:
                logger.exception("subscriber of %s failed", self.name or "stream")

    def subscribe(self, callback: Callable[[T], None]) -> Disposer:
        """Register callback. Returns a disposer that removes it (idempotent)."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        return _unsubscribe

    def dispose(self) -> None:
        self._disposed = True
        self._subscribers.clear()

    def __repr__(self) -> str:
        return f"EventStream({self.name or ''!s}, subscribers={len(self._subscribers)})"
