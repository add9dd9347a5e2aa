"""Dependency tracking and batching for store state.

A store's view state is several Observables (``entity``, ``filters``,
``is_loading``, ``error``). Reads inside a Computed selector or a Reaction
register the reader on each field it touched; contextvars holds the
derivation being evaluated, so tracking follows the task that is evaluating.

A filter switch writes several of those fields in one go (release the old
query, set ``filters``, reset the entity, raise ``is_loading``, and for a
synchronous client the first result too). Those writes run inside a batch, so
a listener sees the switch once, after it is complete, and never sees
``is_loading=False`` next to the previous filter's entity.
"""

from __future__ import annotations

import contextvars
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from firestate.computed import Computed
    from firestate.reaction import Reaction

    Derivation = Computed | Reaction

current_derivation: contextvars.ContextVar[Derivation | None] = contextvars.ContextVar(
    "firestate_current_derivation", default=None
)

_batch_depth: int = 0
# Listeners run in the order their first field changed, each once per batch.
_pending: dict[Derivation, None] = {}


def track(source) -> None:
    """Register the evaluating selector or reaction as a reader of source."""
    derivation = current_derivation.get()
    if derivation is not None:
        source._observers.add(derivation)
        derivation._dependencies.add(source)


def begin_batch() -> None:
    global _batch_depth
    _batch_depth += 1


def end_batch() -> None:
    """Leave a batch. Leaving the outermost one notifies the deferred listeners.

    Stores nest batches (``patch`` inside ``set_filters``), so only the
    outermost exit may flush.
    """
    global _batch_depth
    _batch_depth -= 1
    if _batch_depth == 0:
        _flush_pending()


def schedule(derivation: Derivation) -> None:
    """Notify derivation now, or once at the end of the current batch."""
    if _batch_depth > 0:
        _pending[derivation] = None
    else:
        derivation._run()


def _flush_pending() -> None:
    # A listener may write state again; keep draining until nothing is queued.
    while _pending:
        batch = list(_pending)
        _pending.clear()
        for derivation in batch:
            derivation._run()
