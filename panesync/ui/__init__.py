"""
PySide6 front end for the in-memory workspace.
"""
from .workspace_view import PaneWidget, WorkspaceView, qt_scheduler
from .settings_dialog import SyncSettingsDialog
from .main_window import MainWindow

__all__ = ["PaneWidget", "WorkspaceView", "qt_scheduler", "SyncSettingsDialog", "MainWindow"]
