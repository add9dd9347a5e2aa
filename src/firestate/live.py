"""Live queries: push-based handles on a remote read.

A LiveQuery does nothing until subscribed. Each subscription opens one remote
watch and maps every snapshot to domain values. The first error ends the
subscription: the remote watch is released and nothing further is delivered.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Mapping, TypeVar, Union

from firestate.client import Disposer, DocumentClient, DocumentSnapshot, QuerySnapshot
from firestate.filters import Query

logger = logging.getLogger("firestate.live")

T = TypeVar("T")

Mapper = Callable[[str, Mapping[str, Any]], T]
Source = Callable[[Callable[[Any], None], Callable[[BaseException], None]], Disposer]


def _raise(error: BaseException) -> None:
    raise error


class LiveQuery(Generic[T]):
    """A cold, cancellable stream of values from one remote watch."""

    def __init__(self, source: Source, target: Union[str, Query], transform: Callable[[Any], T]) -> None:
        self._source = source
        self.target = target
        self._transform = transform

    def subscribe(
        self,
        on_next: Callable[[T], None],
        on_error: Callable[[BaseException], None] = _raise,
    ) -> Disposer:
        """Open the watch. The returned disposer releases it (idempotent)."""
        closed = False
        release: Disposer | None = None

        def _close() -> None:
            nonlocal closed, release
            closed = True
            if release is not None:
                release()
                release = None

        def _next(raw: Any) -> None:
            if closed:
                return
            try:
                value = self._transform(raw)
            except Exception as error:
                logger.warning("could not map snapshot from %r: %s", self.target, error)
                _fail(error)
                return
            on_next(value)

        def _fail(error: BaseException) -> None:
            if closed:
                return
            _close()
            on_error(error)

        remote_release = self._source(_next, _fail)
        if closed:
            remote_release()
        else:
            release = remote_release
        return _close

    def __repr__(self) -> str:
        return f"LiveQuery({self.target!r})"


def watch_document(client: DocumentClient, path: str, mapper: Mapper[T]) -> LiveQuery[T | None]:
    """Watch one document. A missing document is ``None``, not an error."""

    def _to_entity(snapshot: DocumentSnapshot) -> T | None:
        if not snapshot.exists:
            return None
        return mapper(snapshot.id, snapshot.data)

    return LiveQuery(
        lambda on_next, on_error: client.watch_document(path, on_next, on_error),
        path,
        _to_entity,
    )


def watch_first(client: DocumentClient, query: Query, mapper: Mapper[T]) -> LiveQuery[T | None]:
    """Watch a query and keep only its first match, or ``None`` if it has none."""

    def _to_entity(snapshot: QuerySnapshot) -> T | None:
        if snapshot.empty:
            return None
        first = snapshot.docs[0]
        return mapper(first.id, first.data)

    return LiveQuery(
        lambda on_next, on_error: client.watch_query(query, on_next, on_error),
        query,
        _to_entity,
    )


def watch_all(client: DocumentClient, query: Query, mapper: Mapper[T]) -> LiveQuery[list[T]]:
    """Watch a query and map every match, in the order the store returns them."""

    def _to_entities(snapshot: QuerySnapshot) -> list[T]:
        return [mapper(doc.id, doc.data) for doc in snapshot.docs]

    return LiveQuery(
        lambda on_next, on_error: client.watch_query(query, on_next, on_error),
        query,
        _to_entities,
    )
