import pytest

from opensheet.events import Signal


def test_emit_passes_arguments_to_callback():
    signal = Signal()
    received = []
    signal.connect(lambda *args: received.append(args))
    signal.emit(3, 4)
    assert received == [(3, 4)]


def test_callbacks_called_in_connection_order():
    signal = Signal()
    calls = []
    signal.connect(lambda: calls.append("first"))
    signal.connect(lambda: calls.append("second"))
    signal.emit()
    assert calls == ["first", "second"]


def test_disconnect_stops_delivery():
    signal = Signal()
    calls = []

    def callback(value):
        calls.append(value)

    signal.connect(callback)
    signal.emit("a")
    signal.disconnect(callback)
    signal.emit("b")
    assert calls == ["a"]
    assert len(signal) == 0


def test_disconnect_unknown_callback_raises():
    signal = Signal()
    with pytest.raises(ValueError):
        signal.disconnect(print)


def test_callback_may_disconnect_itself_during_emit():
    signal = Signal()
    calls = []

    def once():
        calls.append("once")
        signal.disconnect(once)

    signal.connect(once)
    assert len(signal) == 1
    signal.emit()
    assert len(signal) == 0
    signal.emit()
    assert calls == ["once"]
    with pytest.raises(ValueError):
        signal.disconnect(once)