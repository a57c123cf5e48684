import asyncio
import sys

from PySide6.QtWidgets import QApplication
from loguru import logger

from panesync.core.commands import CommandRegistry
from panesync.core.config import ConfigManager
from panesync.core.events import EventBus
from panesync.core.locator import ServiceLocator
from panesync.core.logging import setup_logging
from panesync.plugin import PaneSyncPlugin
from panesync.ui import MainWindow, qt_scheduler
from panesync.workspace import Workspace


def build_app(config_path: str = "panesync.json"):
    config = ConfigManager(config_path)
    setup_logging(config.data.general.debug_mode, config.data.general.log_dir)

    locator = ServiceLocator(config)
    bus = locator.register_system(EventBus, EventBus(locator, config))
    asyncio.run(bus.initialize())

    workspace = Workspace(scheduler=qt_scheduler)
    commands = CommandRegistry()

    plugin = PaneSyncPlugin(workspace, commands, config=config)
    plugin.load(locator)
    plugin.enable()

    return workspace, commands, config, plugin


def main():
    app = QApplication(sys.argv)
    workspace, commands, config, plugin = build_app()

    paths = sys.argv[1:]
    if paths:
        workspace.active_leaf.open_document(paths[0])
    for path in paths[1:]:
        workspace.add_leaf(document=path)

    window = MainWindow(workspace, commands, config)
    window.show()
    exit_code = app.exec()

    plugin.unload()
    logger.info("PaneSync demo closed")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
