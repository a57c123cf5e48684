import json

import pytest

from panesync.core.config import ConfigManager


def test_config_read_default(tmp_path):
    config = ConfigManager(str(tmp_path / "panesync.json"))

    assert config.data.sync.enabled is True
    assert config.data.sync.show_indicators is True
    assert (tmp_path / "panesync.json").exists()


def test_config_update_event_and_persistence(tmp_path):
    path = tmp_path / "panesync.json"
    config = ConfigManager(str(path))
    received = []
    config.on_changed.connect(lambda section, key, val: received.append((section, key, val)))

    config.update("sync", "enabled", False)

    assert config.get("sync", "enabled") is False
    assert received[-1] == ("sync", "enabled", False)
    assert json.loads(path.read_text())["sync"]["enabled"] is False
    assert ConfigManager(str(path)).data.sync.enabled is False


def test_config_rejects_unknown_keys(tmp_path):
    config = ConfigManager(str(tmp_path / "panesync.json"))

    with pytest.raises(ValueError):
        config.update("nope", "enabled", True)
    with pytest.raises(ValueError):
        config.update("sync", "nope", True)


def test_config_validates_values(tmp_path):
    config = ConfigManager(str(tmp_path / "panesync.json"))

    with pytest.raises(ValueError):
        config.update("sync", "enabled", "not-a-bool")
    assert config.data.sync.enabled is True


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "panesync.json"
    path.write_text("{not json")

    config = ConfigManager(str(path))

    assert config.data.sync.enabled is True
    assert json.loads(path.read_text())["sync"]["enabled"] is True


def test_toml_config(tmp_path):
    path = tmp_path / "panesync.toml"
    path.write_text("[sync]\nenabled = false\n")

    config = ConfigManager(str(path))

    assert config.data.sync.enabled is False
    assert config.data.general.debug_mode is False


def test_reset(tmp_path):
    config = ConfigManager(str(tmp_path / "panesync.json"))
    config.update("sync", "show_indicators", False)
    received = []
    config.on_changed.connect(lambda *args: received.append(args))

    config.reset()

    assert config.data.sync.show_indicators is True
    assert received == [(None, None, None)]
