"""Tests for EventStream: the signal channel of mutation runners."""

from firestate import EventStream


class TestEmitSubscribe:
    def test_subscribe_receives_emitted_values(self):
        errors = EventStream("delete_event.error")
        received = []
        errors.subscribe(received.append)
        errors.emit("Permission denied.")
        assert received == ["Permission denied."]

    def test_emit_without_payload(self):
        starts = EventStream()
        received = []
        starts.subscribe(received.append)
        starts.emit()
        assert received == [None]

    def test_subscribers_run_in_order(self):
        stream = EventStream()
        order = []
        stream.subscribe(lambda v: order.append("a"))
        stream.subscribe(lambda v: order.append("b"))
        stream.emit(1)
        assert order == ["a", "b"]

    def test_unsubscribe_idempotent(self):
        stream = EventStream()
        received = []
        unsub = stream.subscribe(received.append)
        stream.emit(1)
        unsub()
        unsub()
        stream.emit(2)
        assert received == [1]

    def test_unsubscribe_during_emit(self):
        stream = EventStream()
        received = []
        unsub = None

        def once(v):
            received.append(v)
            unsub()

        unsub = stream.subscribe(once)
        stream.emit(1)
        stream.emit(2)
        assert received == [1]


class TestFailingSubscriber:
    def test_other_subscribers_still_run(self):
        stream = EventStream("create_event.success")
        received = []

        def broken(v):
            raise RuntimeError("ui handler")

        stream.subscribe(broken)
        stream.subscribe(received.append)
        stream.emit(1)
        assert received == [1]

    def test_failure_is_logged(self, caplog):
        stream = EventStream("create_event.starts")
        stream.subscribe(lambda v: 1 / 0)
        stream.emit()
        assert "create_event.starts" in caplog.text
        assert "ZeroDivisionError" in caplog.text


class TestDispose:
    def test_emit_after_dispose_is_noop(self):
        stream = EventStream()
        received = []
        stream.subscribe(received.append)
        stream.dispose()
        stream.emit(1)
        assert received == []
        assert stream.disposed

