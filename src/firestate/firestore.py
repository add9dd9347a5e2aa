"""Google Cloud Firestore implementation of DocumentClient.

Reads use the synchronous client's ``on_snapshot`` listeners; writes use the
AsyncClient. Listener callbacks arrive on the library's background thread and
are handed to the owning thread through the scheduler installed with
firestate.set_scheduler().
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Mapping

from google.api_core import exceptions as api_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from firestate.client import (
    SERVER_TIMESTAMP,
    Disposer,
    DocumentClient,
    DocumentSnapshot,
    QuerySnapshot,
    split_path,
)
from firestate.config import Settings, get_settings
from firestate.errors import RemoteError
from firestate.filters import Query
from firestate.observable import call_on_owner

logger = logging.getLogger("firestate.firestore")

_ERROR_CODES: tuple[tuple[type[Exception], str], ...] = (
    (api_exceptions.PermissionDenied, "permission-denied"),
    (api_exceptions.Unauthenticated, "unauthenticated"),
    (api_exceptions.NotFound, "not-found"),
    (api_exceptions.AlreadyExists, "already-exists"),
    (api_exceptions.FailedPrecondition, "failed-precondition"),
    (api_exceptions.InvalidArgument, "invalid-argument"),
    (api_exceptions.ResourceExhausted, "resource-exhausted"),
    (api_exceptions.Aborted, "aborted"),
    (api_exceptions.DeadlineExceeded, "deadline-exceeded"),
    (api_exceptions.ServiceUnavailable, "unavailable"),
    (api_exceptions.Cancelled, "cancelled"),
)


def to_remote_error(error: Exception) -> Exception:
    """Translate a google.api_core error into a RemoteError; pass others through."""
    if isinstance(error, api_exceptions.GoogleAPICallError):
        for cls, code in _ERROR_CODES:
            if isinstance(error, cls):
                return RemoteError(code, error.message or str(error))
        return RemoteError("unknown", error.message or str(error))
    return error


def _to_firestore(fields: Mapping[str, Any]) -> dict[str, Any]:
    def convert(value: Any) -> Any:
        if value is SERVER_TIMESTAMP:
            return firestore.SERVER_TIMESTAMP
        if isinstance(value, Mapping):
            return {k: convert(v) for k, v in value.items()}
        if isinstance(value, list):
            return [convert(v) for v in value]
        return value

    return {key: convert(value) for key, value in fields.items()}


def _snapshot(doc) -> DocumentSnapshot:
    return DocumentSnapshot(doc.id, doc.to_dict() if doc.exists else None)


class FirestoreDocumentClient:
    """DocumentClient over google-cloud-firestore."""

    def __init__(self, client: firestore.Client, async_client: firestore.AsyncClient) -> None:
        self._client = client
        self._async_client = async_client

    # --- reads ---

    def watch_document(
        self,
        path: str,
        on_next: Callable[[DocumentSnapshot], None],
        on_error: Callable[[BaseException], None],
    ) -> Disposer:
        _, doc_id = split_path(path)

        def _callback(docs, changes, read_time) -> None:
            snapshot = _snapshot(docs[0]) if docs else DocumentSnapshot(doc_id, None)
            call_on_owner(lambda: on_next(snapshot))

        return self._listen(self._client.document(path), _callback, on_error, path)

    def watch_query(
        self,
        query: Query,
        on_next: Callable[[QuerySnapshot], None],
        on_error: Callable[[BaseException], None],
    ) -> Disposer:
        ref = self._client.collection(query.collection)
        for name, op, value in query.constraints:
            ref = ref.where(filter=FieldFilter(name, op, value))
        if query.limit is not None:
            ref = ref.limit(query.limit)

        def _callback(docs, changes, read_time) -> None:
            snapshot = QuerySnapshot(tuple(_snapshot(doc) for doc in docs))
            call_on_owner(lambda: on_next(snapshot))

        return self._listen(ref, _callback, on_error, query)

    def _listen(self, ref, callback, on_error, target) -> Disposer:
        try:
            watch = ref.on_snapshot(callback)
        except api_exceptions.GoogleAPICallError as error:
            logger.warning("could not open listener on %r: %s", target, error)
            on_error(to_remote_error(error))
            return lambda: None
        logger.debug("listening on %r", target)

        def _dispose() -> None:
            watch.unsubscribe()
            logger.debug("stopped listening on %r", target)

        return _dispose

    # --- writes ---

    async def add(self, collection: str, fields: Mapping[str, Any]) -> str:
        try:
            _, ref = await self._async_client.collection(collection).add(_to_firestore(fields))
        except api_exceptions.GoogleAPICallError as error:
            raise to_remote_error(error) from error
        return ref.id

    async def set(self, path: str, fields: Mapping[str, Any]) -> None:
        try:
            await self._async_client.document(path).set(_to_firestore(fields))
        except api_exceptions.GoogleAPICallError as error:
            raise to_remote_error(error) from error

    async def update(self, path: str, fields: Mapping[str, Any]) -> None:
        try:
            await self._async_client.document(path).update(_to_firestore(fields))
        except api_exceptions.GoogleAPICallError as error:
            raise to_remote_error(error) from error

    async def delete(self, path: str) -> None:
        try:
            await self._async_client.document(path).delete()
        except api_exceptions.GoogleAPICallError as error:
            raise to_remote_error(error) from error


def connect(settings: Settings | None = None) -> DocumentClient:
    """Build the DocumentClient the settings ask for."""
    settings = settings or get_settings()
    if settings.use_in_memory:
        from firestate.memory import InMemoryDocumentClient

        logger.info("using the in-memory document client")
        return InMemoryDocumentClient()

    if settings.emulator_host:
        os.environ["FIRESTORE_EMULATOR_HOST"] = settings.emulator_host
        logger.info("using the Firestore emulator at %s", settings.emulator_host)

    kwargs: dict[str, Any] = {}
    if settings.project_id:
        kwargs["project"] = settings.project_id
    if settings.database:
        kwargs["database"] = settings.database
    return FirestoreDocumentClient(firestore.Client(**kwargs), firestore.AsyncClient(**kwargs))
