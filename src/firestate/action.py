"""Batched state changes.

Patches made inside @action or ``with transaction()`` notify listeners once,
when the outermost scope exits, so no listener observes a half-applied patch.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import Callable, ParamSpec, TypeVar

from firestate._tracking import begin_batch, end_batch

P = ParamSpec("P")
R = TypeVar("R")


def action(fn: Callable[P, R]) -> Callable[P, R]:
    """Decorator: run fn as a single batch."""

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        with transaction():
            return fn(*args, **kwargs)

    return wrapper


@contextmanager
def transaction():
    """Context manager form of @action."""
    begin_batch()
    try:
        yield
    finally:
        end_batch()
