"""Switching subscription: at most one live query at a time.

Every switch() first releases the current subscription, then opens the new
one. Callbacks carry the generation they were opened under; a callback from
an older generation is dropped even if the remote side delivers it late
(e.g. from a listener thread that had already queued it). A live query that
fails while opening is reported through on_error like any later failure.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from firestate.client import Disposer
from firestate.live import LiveQuery

logger = logging.getLogger("firestate.switch")

T = TypeVar("T")


class SwitchSubscription(Generic[T]):
    """Owns one LiveQuery subscription and replaces it on demand."""

    __slots__ = ("name", "_generation", "_release")

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._generation = 0
        self._release: Disposer | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def active(self) -> bool:
        return self._release is not None

    def cancel(self) -> None:
        """Release the current subscription and invalidate its callbacks."""
        self._generation += 1
        release, self._release = self._release, None
        if release is not None:
            logger.debug("%s: released subscription", self.name)
            release()

    def switch(
        self,
        live: LiveQuery[T] | None,
        on_next: Callable[[T], None],
        on_error: Callable[[BaseException], None],
    ) -> int:
        """Cancel the current subscription and subscribe to live (if any).

        Returns the generation of the new subscription.
        """
        self.cancel()
        generation = self._generation
        if live is None:
            return generation

        terminated = False

        def _next(value: T) -> None:
            if generation == self._generation:
                on_next(value)

        def _error(error: BaseException) -> None:
            nonlocal terminated
            if terminated or generation != self._generation:
                return
            terminated = True
            self._release = None
            on_error(error)

        logger.debug("%s: subscribing to %r (generation %d)", self.name, live, generation)
        try:
            release = live.subscribe(_next, _error)
        except Exception as error:
            logger.warning("%s: could not subscribe to %r: %s", self.name, live, error)
            _error(error)
            return generation
        if terminated:
            release()
        elif generation != self._generation:
            # A callback switched again while we were subscribing.
            release()
        else:
            self._release = release
        return generation
