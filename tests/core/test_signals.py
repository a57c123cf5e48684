from unittest.mock import MagicMock

from panesync.core.events import Signal


def test_signal_event():
    sig = Signal("test_signal")
    mock_handler = MagicMock()

    sig.connect(mock_handler)
    sig.emit("data", 123)

    mock_handler.assert_called_once_with("data", 123)

    sig.disconnect(mock_handler)
    sig.emit("data2")
    assert mock_handler.call_count == 1


def test_signal_duplicate_connect():
    sig = Signal()
    handler = MagicMock()

    sig.connect(handler)
    sig.connect(handler)
    sig.emit()

    assert len(sig) == 1
    handler.assert_called_once_with()


def test_signal_error_safety():
    """An error in one subscriber doesn't block the others."""
    sig = Signal("err_evt")
    results = []

    def buggy_callback():
        raise ValueError("Bug")

    sig.connect(buggy_callback)
    sig.connect(lambda: results.append("ok"))

    sig.emit()

    assert results == ["ok"]


def test_signal_blocked():
    sig = Signal()
    handler = MagicMock()
    sig.connect(handler)

    with sig.blocked():
        sig.emit("ignored")
    sig.emit("delivered")

    handler.assert_called_once_with("delivered")


def test_handler_may_disconnect_during_emit():
    sig = Signal()
    calls = []

    def once():
        calls.append("once")
        sig.disconnect(once)

    sig.connect(once)
    sig.connect(lambda: calls.append("always"))

    sig.emit()
    sig.emit()

    assert calls == ["once", "always", "always"]
