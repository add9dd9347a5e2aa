"""Stores: observable view state, and the filter-driven stores built on it.

Store is a key-based container of Observables. EntityStore and
CollectionStore hold the view state of one UI scope:

    {entity | entities, filters, is_loading, error}

The only external mutator is set_filters(). Everything else changes in
response to the live query that the current filter resolves to, and a new
filter always releases the previous query before the next one is opened.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Generic, Optional, TypeVar

from firestate.action import action
from firestate.computed import Computed
from firestate.filters import ByFields, Filter
from firestate.live import LiveQuery
from firestate.observable import Observable
from firestate.switch import SwitchSubscription

logger = logging.getLogger("firestate.store")

T = TypeVar("T")
S = TypeVar("S")


class Store:
    """Key-based Observable container."""

    def __init__(self, schema: dict[str, object], initial: dict | None = None) -> None:
        self._observables: dict[str, Observable] = {}
        self._selectors: list[Computed] = []
        for key, default in schema.items():
            value = initial.get(key, default) if initial else default
            self._observables[key] = Observable(value)

    def get(self, key: str) -> Any:
        """Read key; tracked when called inside a reaction or selector."""
        obs = self._observables.get(key)
        return obs.get() if obs is not None else None

    def peek(self, key: str) -> Any:
        obs = self._observables.get(key)
        return obs.peek() if obs is not None else None

    def set(self, key: str, value: object) -> None:
        obs = self._observables.get(key)
        if obs is None:
            raise KeyError(f"{type(self).__name__} has no state field {key!r}")
        obs.set(value)

    @action
    def patch(self, **values: object) -> None:
        """Set several fields at once; listeners see one change."""
        for key, value in values.items():
            self.set(key, value)

    def snapshot(self) -> dict[str, Any]:
        return {key: obs.peek() for key, obs in self._observables.items()}

    def select(self, projector: Callable[[Store], S]) -> Computed[S]:
        """A cached, read-only view derived from this store's state."""
        selector = Computed(lambda: projector(self))
        self._selectors.append(selector)
        return selector

    def dispose(self) -> None:
        for selector in self._selectors:
            selector.dispose()
        self._selectors.clear()


class _FilteredStore(Store, Generic[T, S]):
    """Shared switch logic. Subclasses set data_key and empty()."""

    data_key: ClassVar[str]

    def __init__(self, *, name: str | None = None) -> None:
        super().__init__(
            {
                self.data_key: self.empty(),
                "filters": None,
                "is_loading": False,
                "error": None,
            }
        )
        self.name = name or type(self).__name__
        self._subscription: SwitchSubscription[S] = SwitchSubscription(self.name)
        self._disposed = False

    @staticmethod
    def empty() -> Any:
        raise NotImplementedError

    def _resolve(self, filters: Filter) -> LiveQuery[S]:
        """Turn a non-null filter into the live query that serves it."""
        raise NotImplementedError

    # --- read-only views ---

    @property
    def filters(self) -> Filter | None:
        return self.get("filters")

    @property
    def is_loading(self) -> bool:
        return self.get("is_loading")

    @property
    def error(self) -> Any:
        return self.get("error")

    @property
    def subscribed(self) -> bool:
        return self._subscription.active

    # --- mutator ---

    def set_filters(self, filters: Filter | None) -> None:
        """Point the store at filters, replacing whatever it was watching.

        Setting the filter it already watches is a no-op; setting it again
        after the query failed opens a fresh one.
        """
        if self._disposed:
            raise RuntimeError(f"{self.name} has been disposed")
        if filters == self.peek("filters") and (filters is None or self._subscription.active):
            return
        self._load(filters)

    @action
    def _load(self, filters: Filter | None) -> None:
        live = self._resolve(filters) if filters is not None else None
        self._subscription.cancel()
        self.set("filters", filters)

        if live is None:
            self.patch(**{self.data_key: self.empty(), "is_loading": False})
            return

        self._on_switch()
        self.set("is_loading", True)
        first = True

        def _on_next(value: S) -> None:
            nonlocal first
            if first:
                first = False
                self.patch(**{self.data_key: value, "is_loading": False})
            else:
                self.set(self.data_key, value)

        def _on_error(error: BaseException) -> None:
            logger.warning("%s: live query for %r failed: %s", self.name, filters, error)
            self.patch(error=error, is_loading=False)

        logger.debug("%s: filters set to %r", self.name, filters)
        self._subscription.switch(live, _on_next, _on_error)

    def _on_switch(self) -> None:
        """Hook run after the old query is released and before the new one opens."""

    def dispose(self) -> None:
        """Release the live query. Call when the owning UI scope ends."""
        self._disposed = True
        self._subscription.cancel()
        super().dispose()

    def __repr__(self) -> str:
        state = self.snapshot()
        return (
            f"{self.name}(filters={state['filters']!r}, "
            f"is_loading={state['is_loading']}, error={state['error']!r})"
        )


class EntityStore(_FilteredStore[T, Optional[T]]):
    """View state for a single entity: ``{entity, filters, is_loading, error}``.

    The entity is cleared on every filter change, so the previous entity is
    never shown under a new filter.
    """

    data_key = "entity"

    @staticmethod
    def empty() -> None:
        return None

    @property
    def entity(self) -> T | None:
        return self.get("entity")

    def _on_switch(self) -> None:
        self.set("entity", None)


class CollectionStore(_FilteredStore[T, list[T]]):
    """View state for a list of entities: ``{entities, filters, is_loading, error}``.

    The previous list stays visible until the new query's first emission.
    """

    data_key = "entities"

    @staticmethod
    def empty() -> list:
        return []

    @property
    def entities(self) -> list[T]:
        return self.get("entities")

    def load(self) -> None:
        """Watch the whole collection."""
        self.set_filters(ByFields())
