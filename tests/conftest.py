import os

import pytest

from panesync.core.config import ConfigManager
from panesync.sync import PaneSyncEngine
from panesync.workspace import Workspace

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class DeferredScheduler:
    """Queues workspace loads until flush(), like a host with async file opens."""

    def __init__(self):
        self.tasks = []

    def __call__(self, task):
        self.tasks.append(task)

    def flush(self):
        ran = 0
        while self.tasks:
            self.tasks.pop(0)()
            ran += 1
        return ran


@pytest.fixture
def config(tmp_path):
    return ConfigManager(str(tmp_path / "panesync.json"))


@pytest.fixture
def workspace():
    return Workspace()


@pytest.fixture
def deferred():
    return DeferredScheduler()


@pytest.fixture
def deferred_workspace(deferred):
    return Workspace(scheduler=deferred)


@pytest.fixture
def engine(workspace, config):
    engine = PaneSyncEngine(workspace, config)
    engine.attach()
    yield engine
    engine.teardown()


@pytest.fixture(scope="module")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app
