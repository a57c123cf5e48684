from PySide6.QtWidgets import QFileDialog, QMainWindow
from PySide6.QtCore import QSettings
from loguru import logger

from panesync.core.commands import CommandRegistry
from panesync.core.config import ConfigManager
from panesync.workspace import Workspace
from .settings_dialog import SyncSettingsDialog
from .workspace_view import WorkspaceView


class MainWindow(QMainWindow):
    """
    Demo editor window: a workspace view, layout actions, plugin commands
    and notices in the status bar.
    """

    def __init__(self, workspace: Workspace, commands: CommandRegistry, config: ConfigManager):
        super().__init__()
        self.setWindowTitle("PaneSync")
        self.resize(1200, 800)

        self.workspace = workspace
        self.commands = commands
        self.config = config

        self.view = WorkspaceView(workspace)
        self.setCentralWidget(self.view)

        self.settings_dialog = None
        self._command_actions = {}

        workspace.notices.on_notice.connect(
            lambda notice: self.statusBar().showMessage(notice.message, notice.timeout_ms))

        self.create_menu()
        commands.on_registered.connect(self._add_command_action)
        commands.on_unregistered.connect(self._remove_command_action)
        for command in commands.commands():
            self._add_command_action(command)

        self.read_settings()

    def closeEvent(self, event):
        self.write_settings()
        super().closeEvent(event)

    def read_settings(self):
        settings = QSettings("PaneSync", "Demo")
        geometry = settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)

    def write_settings(self):
        settings = QSettings("PaneSync", "Demo")
        settings.setValue("geometry", self.saveGeometry())

    def create_menu(self):
        menubar = self.menuBar()

        # File Menu
        file_menu = menubar.addMenu("&File")
        open_action = file_menu.addAction("Open File...")
        open_action.triggered.connect(self.open_file_dialog)
        file_menu.addSeparator()
        settings_action = file_menu.addAction("Settings")
        settings_action.triggered.connect(self.show_settings)
        exit_action = file_menu.addAction("Exit")
        exit_action.triggered.connect(self.close)

        # Pane Menu
        pane_menu = menubar.addMenu("&Pane")
        split_action = pane_menu.addAction("Split Right")
        split_action.triggered.connect(self.split_active)
        sidebar_action = pane_menu.addAction("Open in Sidebar")
        sidebar_action.triggered.connect(self.open_in_sidebar)
        close_action = pane_menu.addAction("Close Pane")
        close_action.triggered.connect(self.close_active)

        self.commands_menu = menubar.addMenu("&Commands")

    def _add_command_action(self, command):
        action = self.commands_menu.addAction(command.name)
        action.triggered.connect(lambda checked=False, cid=command.command_id: self.commands.execute(cid))
        self._command_actions[command.command_id] = action

    def _remove_command_action(self, command):
        action = self._command_actions.pop(command.command_id, None)
        if action is not None:
            self.commands_menu.removeAction(action)

    def open_file_dialog(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open File")
        if path and self.workspace.active_leaf is not None:
            self.workspace.active_leaf.open_document(path)

    def split_active(self):
        leaf = self.workspace.active_leaf
        if leaf is not None:
            new_leaf = self.workspace.create_leaf_by_split(leaf)
            self.workspace.set_active_leaf(new_leaf)

    def open_in_sidebar(self):
        leaf = self.workspace.active_leaf
        document = leaf.document if leaf is not None else None
        self.workspace.add_sidebar_leaf("right", document)

    def close_active(self):
        leaf = self.workspace.active_leaf
        if leaf is not None:
            self.workspace.detach_leaf(leaf)
            logger.debug(f"Closed {leaf}")

    def show_settings(self):
        self.settings_dialog = SyncSettingsDialog(self.config, self)
        self.settings_dialog.show()
