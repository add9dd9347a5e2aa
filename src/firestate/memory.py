"""In-process document client.

Behaves like the remote service from a store's point of view: watches emit a
snapshot as soon as they are registered and again after every write that
touches them, writes are atomic, and documents keep insertion order (the
"store order" that decides which match a limit-1 query returns).

Used by the test suite and for local development (``FIRESTATE_USE_IN_MEMORY``).
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from firestate.client import (
    SERVER_TIMESTAMP,
    Disposer,
    DocumentSnapshot,
    QuerySnapshot,
    RemoteError,
    split_path,
)
from firestate.filters import Query

logger = logging.getLogger("firestate.memory")


class _Watch:
    __slots__ = ("target", "on_next", "on_error")

    def __init__(self, target, on_next, on_error) -> None:
        self.target = target
        self.on_next = on_next
        self.on_error = on_error


class InMemoryDocumentClient:
    """Dictionary-backed DocumentClient with live watches."""

    def __init__(self, data: Mapping[str, Mapping[str, Mapping[str, Any]]] | None = None) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._watches: list[_Watch] = []
        self._write_failures: list[BaseException] = []
        self._watch_failures: dict[str, BaseException] = {}
        self.writes: list[tuple[str, str, dict[str, Any] | None]] = []
        for collection, docs in (data or {}).items():
            for doc_id, fields in docs.items():
                self._collections.setdefault(collection, {})[doc_id] = dict(fields)

    # --- test hooks ---

    def fail_next(self, error: BaseException) -> None:
        """Make the next write raise error instead of applying."""
        self._write_failures.append(error)

    def fail_watch(self, target: str, error: BaseException) -> None:
        """Make watches on target (a document path or collection) report error."""
        self._watch_failures[target] = error

    @property
    def active_watches(self) -> int:
        return len(self._watches)

    def document(self, path: str) -> dict[str, Any] | None:
        collection, doc_id = split_path(path)
        doc = self._collections.get(collection, {}).get(doc_id)
        return dict(doc) if doc is not None else None

    # --- reads ---

    def watch_document(
        self,
        path: str,
        on_next: Callable[[DocumentSnapshot], None],
        on_error: Callable[[BaseException], None],
    ) -> Disposer:
        split_path(path)
        return self._register(_Watch(path, on_next, on_error))

    def watch_query(
        self,
        query: Query,
        on_next: Callable[[QuerySnapshot], None],
        on_error: Callable[[BaseException], None],
    ) -> Disposer:
        return self._register(_Watch(query, on_next, on_error))

    def _register(self, watch: _Watch) -> Disposer:
        self._watches.append(watch)
        logger.debug("watch registered on %r (%d active)", watch.target, len(self._watches))

        def _dispose() -> None:
            try:
                self._watches.remove(watch)
            except ValueError:
                return
            logger.debug("watch released on %r (%d active)", watch.target, len(self._watches))

        try:
            self._deliver(watch)
        except Exception:
            _dispose()
            raise
        return _dispose

    def _deliver(self, watch: _Watch) -> None:
        target = watch.target
        key = target if isinstance(target, str) else target.collection
        error = self._watch_failures.get(key)
        if error is not None:
            # A failed listener is terminated by the service.
            if watch in self._watches:
                self._watches.remove(watch)
            watch.on_error(error)
            return
        if isinstance(target, str):
            watch.on_next(self._document_snapshot(target))
        else:
            watch.on_next(self._query_snapshot(target))

    def _document_snapshot(self, path: str) -> DocumentSnapshot:
        collection, doc_id = split_path(path)
        doc = self._collections.get(collection, {}).get(doc_id)
        return DocumentSnapshot(doc_id, dict(doc) if doc is not None else None)

    def _query_snapshot(self, query: Query) -> QuerySnapshot:
        docs = []
        for doc_id, fields in self._collections.get(query.collection, {}).items():
            if all(
                name in fields and fields[name] == value
                for name, _, value in query.constraints
            ):
                docs.append(DocumentSnapshot(doc_id, dict(fields)))
                if query.limit is not None and len(docs) >= query.limit:
                    break
        return QuerySnapshot(tuple(docs))

    # --- writes ---

    async def add(self, collection: str, fields: Mapping[str, Any]) -> str:
        self._check_failure()
        doc_id = uuid.uuid4().hex[:20]
        self._collections.setdefault(collection, {})[doc_id] = _resolve_timestamps(fields)
        self._record("add", f"{collection}/{doc_id}", fields)
        return doc_id

    async def set(self, path: str, fields: Mapping[str, Any]) -> None:
        self._check_failure()
        collection, doc_id = split_path(path)
        self._collections.setdefault(collection, {})[doc_id] = _resolve_timestamps(fields)
        self._record("set", path, fields)

    async def update(self, path: str, fields: Mapping[str, Any]) -> None:
        self._check_failure()
        collection, doc_id = split_path(path)
        doc = self._collections.get(collection, {}).get(doc_id)
        if doc is None:
            raise RemoteError("not-found", f"No document to update: {path}")
        doc.update(_resolve_timestamps(fields))
        self._record("update", path, fields)

    async def delete(self, path: str) -> None:
        self._check_failure()
        collection, doc_id = split_path(path)
        self._collections.get(collection, {}).pop(doc_id, None)
        self._record("delete", path, None)

    def _check_failure(self) -> None:
        if self._write_failures:
            raise self._write_failures.pop(0)

    def _record(self, kind: str, path: str, fields: Mapping[str, Any] | None) -> None:
        self.writes.append((kind, path, dict(fields) if fields is not None else None))
        collection, _ = split_path(path)
        for watch in list(self._watches):
            target = watch.target
            touched = target == path if isinstance(target, str) else target.collection == collection
            if touched and watch in self._watches:
                self._deliver(watch)


def _resolve_timestamps(fields: Mapping[str, Any]) -> dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        key: now if value is SERVER_TIMESTAMP else value
        for key, value in fields.items()
    }
