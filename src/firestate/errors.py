"""Error types and their conversion to user-displayable messages."""

from __future__ import annotations

import json
from typing import Any, Mapping

PERMISSION_DENIED = "permission-denied"


class RemoteError(Exception):
    """An error reported by the document service, tagged with its status code.

    Codes follow the service's canonical names, e.g. ``permission-denied``,
    ``not-found``, ``unavailable``.
    """

    def __init__(self, code: str, message: str = "") -> None:
        super().__init__(message or code)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"RemoteError({self.code!r}, {self.message!r})"


class ActionError(Exception):
    """An error whose message is already fit for display. Shown verbatim."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def classify_error(err: Any, messages: Mapping[str, str], fallback: str) -> str:
    """Turn anything a write can fail with into a display string.

    In order: a plain string (or ActionError) is used as is; a RemoteError
    maps its code through ``messages``, falling back to ``fallback``;
    anything else is serialized as JSON, best-effort.
    """
    if isinstance(err, str):
        return err
    if isinstance(err, ActionError):
        return err.message
    if isinstance(err, RemoteError):
        return messages.get(err.code, fallback)
    return _describe(err)


def _describe(err: Any) -> str:
    if isinstance(err, BaseException):
        payload: Any = {"type": type(err).__name__, "args": list(err.args)}
        payload.update({k: v for k, v in vars(err).items() if not k.startswith("_")})
    else:
        payload = err
    try:
        return json.dumps(payload, default=repr, sort_keys=True)
    except (TypeError, ValueError):
        return repr(err)
