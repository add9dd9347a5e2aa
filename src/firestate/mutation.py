"""Mutation runners: one remote write per run, tracked for the UI.

A runner owns ``{is_running, error}`` and four signals. Every run goes:

    is_running=True -> starts -> one write -> success | error(message)
    -> is_running=False -> ends

The last two steps happen whatever the write did. A failed write never
raises out of run(); it becomes the ``error`` field and the error signal.
Signal subscribers that raise are logged by the stream and do not affect
the run.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Mapping

from firestate.config import get_settings
from firestate.errors import classify_error
from firestate.store import Store
from firestate.stream import EventStream

logger = logging.getLogger("firestate.mutation")


class MutationRunner:
    """Base class for UI actions. Subclasses implement _perform().

    Class attributes:
        name: signal prefix, e.g. ``"delete_event"``.
        error_messages: service error code -> display sentence.
        fallback_error: sentence for codes missing from error_messages.
    """

    name: ClassVar[str] = "mutation"
    error_messages: ClassVar[Mapping[str, str]] = {}
    fallback_error: ClassVar[str] = "Unknown error."

    def __init__(self, *, clear_error_on_run: bool | None = None) -> None:
        self._state = Store({"is_running": False, "error": None})
        self.starts: EventStream[None] = EventStream(f"{self.name}.starts")
        self.success: EventStream[None] = EventStream(f"{self.name}.success")
        self.error: EventStream[str] = EventStream(f"{self.name}.error")
        self.ends: EventStream[None] = EventStream(f"{self.name}.ends")
        if clear_error_on_run is None:
            clear_error_on_run = get_settings().clear_error_on_run
        self.clear_error_on_run = clear_error_on_run

    @property
    def is_running(self) -> bool:
        return self._state.get("is_running")

    @property
    def last_error(self) -> str | None:
        return self._state.get("error")

    @property
    def state(self) -> Store:
        return self._state

    async def _perform(self, *args: Any, **kwargs: Any) -> None:
        raise NotImplementedError

    async def run(self, *args: Any, **kwargs: Any) -> None:
        if self.clear_error_on_run:
            self._state.set("error", None)
        self._state.set("is_running", True)
        logger.info("%s: started", self.name)
        self.starts.emit()

        try:
            await self._perform(*args, **kwargs)
        except Exception as err:
            message = classify_error(err, self.error_messages, self.fallback_error)
            logger.warning("%s: failed: %s", self.name, message)
            self._state.set("error", message)
            self.error.emit(message)
        else:
            self.success.emit()
        finally:
            self._state.set("is_running", False)
            logger.info("%s: ended", self.name)
            self.ends.emit()

    def dispose(self) -> None:
        for signal in (self.starts, self.success, self.error, self.ends):
            signal.dispose()
        self._state.dispose()

    def __repr__(self) -> str:
        state = self._state.snapshot()
        return f"{type(self).__name__}(is_running={state['is_running']}, error={state['error']!r})"
