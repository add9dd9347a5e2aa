"""Shared fixtures: seeded in-memory database and a hand-driven client."""

import pytest

from firestate import InMemoryDocumentClient, set_scheduler
from firestate.client import DocumentSnapshot, QuerySnapshot
from firestate.config import get_settings


@pytest.fixture(autouse=True)
def _isolated(monkeypatch):
    """No scheduler and fresh settings for every test."""
    for var in ("FIRESTATE_CLEAR_ERROR_ON_RUN", "FIRESTATE_USE_IN_MEMORY"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    set_scheduler(None)
    yield
    set_scheduler(None)
    get_settings.cache_clear()


@pytest.fixture
def db():
    return InMemoryDocumentClient(
        {
            "events": {
                "ev1": {"name": "launch", "title": "Launch party", "type": "meetup"},
                "ev2": {"name": "hack", "title": "Hack night", "type": "hackathon"},
            },
            "coding-challenges": {
                "cc1": {"name": "fizz", "title": "FizzBuzz", "status": "done"},
                "cc2": {"name": "buzz", "title": "BuzzFizz", "status": "done"},
                "cc3": {"name": "sort", "title": "Sorting", "status": "draft"},
            },
            "event-participants": {
                "p1": {"eventId": "ev1", "userId": "alice"},
                "p2": {"eventId": "ev1", "userId": "bob"},
                "p3": {"eventId": "ev2", "userId": "alice"},
            },
            "seasons": {
                "s1": {"name": "spring", "title": "Spring", "isActive": True},
            },
        }
    )


class ManualClient:
    """DocumentClient whose watches only emit when the test says so.

    Released watches stay reachable through ``watches`` so tests can deliver
    late snapshots to them, as a listener thread could.
    """

    def __init__(self):
        self.watches = []

    def _watch(self, target, on_next, on_error):
        watch = {"target": target, "on_next": on_next, "on_error": on_error, "released": False}
        self.watches.append(watch)

        def _release():
            watch["released"] = True

        return _release

    def watch_document(self, path, on_next, on_error):
        return self._watch(path, on_next, on_error)

    def watch_query(self, query, on_next, on_error):
        return self._watch(query, on_next, on_error)

    @property
    def live(self):
        return [w for w in self.watches if not w["released"]]

    def emit_docs(self, watch, *docs):
        watch["on_next"](QuerySnapshot(tuple(DocumentSnapshot(i, d) for i, d in docs)))

    def emit_doc(self, watch, doc_id, data):
        watch["on_next"](DocumentSnapshot(doc_id, data))

    async def add(self, collection, fields):
        raise NotImplementedError

    async def set(self, path, fields):
        raise NotImplementedError

    async def update(self, path, fields):
        raise NotImplementedError

    async def delete(self, path):
        raise NotImplementedError


@pytest.fixture
def manual():
    return ManualClient()
