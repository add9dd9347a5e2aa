"""The remote document client contract.

Services and stores talk to the document database only through this
interface. A client handle is passed to every service constructor; there is
no process-wide instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol

from firestate.errors import RemoteError
from firestate.filters import Query

__all__ = [
    "SERVER_TIMESTAMP",
    "Disposer",
    "DocumentClient",
    "DocumentSnapshot",
    "QuerySnapshot",
    "RemoteError",
    "document_path",
    "split_path",
]

Disposer = Callable[[], None]


class _ServerTimestamp:
    """Placeholder the server replaces with its commit time."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class DocumentSnapshot:
    id: str
    data: Mapping[str, Any] | None = None

    @property
    def exists(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class QuerySnapshot:
    docs: tuple[DocumentSnapshot, ...] = field(default_factory=tuple)

    @property
    def empty(self) -> bool:
        return not self.docs


class DocumentClient(Protocol):
    """Reads are live watches; writes are single atomic remote operations."""

    def watch_document(
        self,
        path: str,
        on_next: Callable[[DocumentSnapshot], None],
        on_error: Callable[[BaseException], None],
    ) -> Disposer: ...

    def watch_query(
        self,
        query: Query,
        on_next: Callable[[QuerySnapshot], None],
        on_error: Callable[[BaseException], None],
    ) -> Disposer: ...

    async def add(self, collection: str, fields: Mapping[str, Any]) -> str: ...

    async def set(self, path: str, fields: Mapping[str, Any]) -> None: ...

    async def update(self, path: str, fields: Mapping[str, Any]) -> None: ...

    async def delete(self, path: str) -> None: ...


def document_path(collection: str, doc_id: str) -> str:
    """Path of one document. Rejects ids the service could not address."""
    if not collection or not doc_id or "/" in doc_id:
        raise ValueError(f"not a document id in {collection!r}: {doc_id!r}")
    return f"{collection}/{doc_id}"


def split_path(path: str) -> tuple[str, str]:
    """``"events/abc"`` -> ``("events", "abc")``."""
    collection, _, doc_id = path.rpartition("/")
    if not collection or not doc_id:
        raise ValueError(f"not a document path: {path!r}")
    return collection, doc_id
