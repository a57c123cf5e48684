"""
PaneSyncPlugin - exposes the engine through the plugin lifecycle.
"""
from typing import Optional

from loguru import logger

from panesync.core.commands import CommandRegistry
from panesync.core.config import ConfigManager
from panesync.core.plugins import Plugin
from panesync.sync import PaneSyncEngine
from panesync.sync.engine import LINK_TITLE, UNLINK_TITLE
from panesync.workspace import Workspace

LINK_COMMAND_ID = "link-pane-for-sync"
UNLINK_COMMAND_ID = "unlink-pane-for-sync"


class PaneSyncPlugin(Plugin):
    """
    Registers the link commands and attaches the engine to the workspace.

    load: read settings, build the engine
    enable: register commands, subscribe to workspace events
    disable: unregister commands, unsubscribe
    unload: drop every link
    """

    def __init__(self, workspace: Workspace, commands: CommandRegistry,
                 config_path: str = "panesync.json", config: Optional[ConfigManager] = None):
        super().__init__("PaneSync")
        self.description = "Link two panes so they open the same file"
        self.workspace = workspace
        self.commands = commands
        self.config_path = config_path
        self.config = config
        self.engine: Optional[PaneSyncEngine] = None

    def on_load(self) -> None:
        if self.config is None:
            self.config = ConfigManager(self.config_path)
        self.engine = PaneSyncEngine(self.workspace, self.config, locator=self.locator)
        if self.locator is not None:
            self.locator.register_system(PaneSyncEngine, self.engine)

    def on_enable(self) -> None:
        self.commands.register_command(LINK_COMMAND_ID, LINK_TITLE,
                                       self.engine.link_active_pane, icon="link")
        self.commands.register_command(UNLINK_COMMAND_ID, UNLINK_TITLE,
                                       self.engine.unlink_active_pane, icon="unlink")
        self.engine.attach()

    def on_disable(self) -> None:
        self.engine.detach()
        self.commands.unregister_command(LINK_COMMAND_ID)
        self.commands.unregister_command(UNLINK_COMMAND_ID)

    def on_unload(self) -> None:
        if self.engine is not None:
            self.engine.teardown()
            logger.debug("PaneSync links cleared")
        self.engine = None
