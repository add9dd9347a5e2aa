"""Tests for error classification."""

import json

from firestate.errors import ActionError, RemoteError, classify_error

MESSAGES = {"permission-denied": "Permission denied."}
FALLBACK = "Unknown error deleting event."


class TestClassifyError:
    def test_string_verbatim(self):
        assert classify_error("boom", MESSAGES, FALLBACK) == "boom"

    def test_action_error_verbatim(self):
        assert classify_error(ActionError("boom"), MESSAGES, FALLBACK) == "boom"

    def test_known_code(self):
        err = RemoteError("permission-denied", "Missing or insufficient permissions.")
        assert classify_error(err, MESSAGES, FALLBACK) == "Permission denied."

    def test_unknown_code_falls_back(self):
        assert classify_error(RemoteError("unavailable"), MESSAGES, FALLBACK) == FALLBACK

    def test_action_without_permission_sentence(self):
        err = RemoteError("permission-denied")
        assert classify_error(err, {}, "Unknown error updating reward.") == "Unknown error updating reward."

    def test_other_exception_serialized(self):
        message = classify_error(ValueError("bad", 3), MESSAGES, FALLBACK)
        assert json.loads(message) == {"type": "ValueError", "args": ["bad", 3]}

    def test_plain_value_serialized(self):
        assert json.loads(classify_error({"reason": 1}, MESSAGES, FALLBACK)) == {"reason": 1}

    def test_unserializable_is_best_effort(self):
        message = classify_error(object(), MESSAGES, FALLBACK)
        assert "object" in message


class TestRemoteError:
    def test_carries_code(self):
        err = RemoteError("not-found", "No document")
        assert err.code == "not-found"
        assert str(err) == "No document"

    def test_message_defaults_to_code(self):
        assert str(RemoteError("aborted")) == "aborted"
