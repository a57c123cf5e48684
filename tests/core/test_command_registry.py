import pytest
from unittest.mock import MagicMock

from panesync.core.commands import CommandRegistry


def test_register_and_execute():
    registry = CommandRegistry()
    callback = MagicMock()
    registered = MagicMock()
    registry.on_registered.connect(registered)

    command = registry.register_command("link-pane-for-sync", "Link this pane for file sync", callback)

    assert "link-pane-for-sync" in registry
    assert registry.get_command("link-pane-for-sync") is command
    registered.assert_called_once_with(command)
    assert registry.execute("link-pane-for-sync") is True
    callback.assert_called_once_with()


def test_duplicate_id_rejected():
    registry = CommandRegistry()
    registry.register_command("cmd", "Command", MagicMock())

    with pytest.raises(ValueError):
        registry.register_command("cmd", "Other", MagicMock())


def test_unknown_command():
    registry = CommandRegistry()

    with pytest.raises(KeyError):
        registry.execute("missing")
    assert registry.unregister_command("missing") is False


def test_failing_callback_reports_false():
    registry = CommandRegistry()
    registry.register_command("cmd", "Command", MagicMock(side_effect=RuntimeError("boom")))

    assert registry.execute("cmd") is False


def test_unregister():
    registry = CommandRegistry()
    removed = MagicMock()
    registry.on_unregistered.connect(removed)
    command = registry.register_command("cmd", "Command", MagicMock())

    assert registry.unregister_command("cmd") is True
    assert registry.commands() == []
    removed.assert_called_once_with(command)
