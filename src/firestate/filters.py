"""Filter values and the remote queries they describe.

A filter says what a store should fetch:

- ``ById(id)``: one document, by id.
- ``ByFields({...})``: documents whose fields equal the given values. A field
  set to ``None`` is not a constraint, so ``ByFields({})`` is unconstrained.
- ``None``: fetch nothing.

Filters are frozen and hashable so a store can tell a repeated filter from a
new one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple, Union

EQUALS = "=="


@dataclass(frozen=True)
class ById:
    id: str


@dataclass(frozen=True)
class ByFields:
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def of(cls, **fields: Any) -> ByFields:
        return cls(fields)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.fields.items())))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByFields):
            return NotImplemented
        return dict(self.fields) == dict(other.fields)

    def __repr__(self) -> str:
        return f"ByFields({dict(self.fields)!r})"


Filter = Union[ById, ByFields]


class Constraint(NamedTuple):
    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class Query:
    """A collection query: equality constraints plus an optional result limit."""

    collection: str
    constraints: tuple[Constraint, ...] = ()
    limit: int | None = None


def constraints_for(fields: Mapping[str, Any]) -> tuple[Constraint, ...]:
    """One equality constraint per field that has a value, in field order."""
    return tuple(
        Constraint(name, EQUALS, value)
        for name, value in fields.items()
        if value is not None
    )


def field_query(collection: str, filters: Filter, *, single: bool) -> Query:
    """Build the query for a ByFields filter.

    Single-entity reads always carry limit 1; the first document in the
    store's order wins.
    """
    match filters:
        case ByFields(fields=fields):
            return Query(collection, constraints_for(fields), 1 if single else None)
        case ById():
            raise TypeError(f"{filters!r} cannot be turned into a collection query")
        case _:
            raise TypeError(f"unsupported filter: {filters!r}")
