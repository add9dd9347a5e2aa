"""Filter resolution: from a filter value to the live query that serves it.

    one(None)              -> None (nothing to watch)
    one(ById(id))          -> watch of collection/id; missing document -> None
    one(ByFields(...))     -> equality query, limit 1; no match -> None
    many(ByFields(...))    -> equality query; every match, in store order

Filter field names are the Python names from ``fields``; they are translated
to document field names before the query is built.
"""

from __future__ import annotations

from typing import Generic, Mapping, Optional, TypeVar

from firestate.client import DocumentClient, document_path
from firestate.filters import ByFields, ById, Filter, field_query
from firestate.live import LiveQuery, Mapper, watch_all, watch_document, watch_first

T = TypeVar("T")


class Resolver(Generic[T]):
    """Resolves filters against one collection."""

    def __init__(
        self,
        client: DocumentClient,
        collection: str,
        mapper: Mapper[T],
        fields: Mapping[str, str] | None = None,
    ) -> None:
        self.client = client
        self.collection = collection
        self.mapper = mapper
        self.fields = dict(fields or {})

    def one(self, filters: Filter | None) -> Optional[LiveQuery[Optional[T]]]:
        match filters:
            case None:
                return None
            case ById(id=doc_id):
                return watch_document(self.client, document_path(self.collection, doc_id), self.mapper)
            case ByFields():
                query = field_query(self.collection, self._translate(filters), single=True)
                return watch_first(self.client, query, self.mapper)
            case _:
                raise TypeError(f"unsupported filter: {filters!r}")

    def many(self, filters: Filter | None) -> Optional[LiveQuery[list[T]]]:
        match filters:
            case None:
                return None
            case ByFields():
                query = field_query(self.collection, self._translate(filters), single=False)
                return watch_all(self.client, query, self.mapper)
            case ById():
                raise TypeError(f"{self.collection} lists cannot be filtered by id")
            case _:
                raise TypeError(f"unsupported filter: {filters!r}")

    def _translate(self, filters: ByFields) -> ByFields:
        unknown = set(filters.fields) - set(self.fields)
        if unknown:
            raise ValueError(
                f"{self.collection} cannot be filtered by {', '.join(sorted(unknown))}"
            )
        return ByFields({self.fields[name]: value for name, value in filters.fields.items()})
