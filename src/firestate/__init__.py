"""firestate: live, filter-driven view-state stores over a document database."""

from importlib.metadata import version as _version

__version__ = _version("firestate")

from firestate.action import action, transaction
from firestate.client import SERVER_TIMESTAMP, DocumentClient, DocumentSnapshot, QuerySnapshot
from firestate.computed import Computed
from firestate.errors import ActionError, RemoteError, classify_error
from firestate.filters import ById, ByFields, Filter, Query
from firestate.live import LiveQuery
from firestate.memory import InMemoryDocumentClient
from firestate.mutation import MutationRunner
from firestate.observable import Observable, set_scheduler
from firestate.reaction import Reaction, autorun, reaction
from firestate.resolver import Resolver
from firestate.store import CollectionStore, EntityStore, Store
from firestate.stream import EventStream
from firestate.switch import SwitchSubscription
# firestore and textual are not auto-imported (opt-in)

__all__ = [
    "ActionError",
    "ById",
    "ByFields",
    "CollectionStore",
    "Computed",
    "DocumentClient",
    "DocumentSnapshot",
    "EntityStore",
    "EventStream",
    "Filter",
    "InMemoryDocumentClient",
    "LiveQuery",
    "MutationRunner",
    "Observable",
    "Query",
    "QuerySnapshot",
    "Reaction",
    "RemoteError",
    "Resolver",
    "SERVER_TIMESTAMP",
    "Store",
    "SwitchSubscription",
    "action",
    "autorun",
    "classify_error",
    "reaction",
    "set_scheduler",
    "transaction",
]
