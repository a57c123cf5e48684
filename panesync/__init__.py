"""
PaneSync - linked panes for split document workspaces.

Pairs two panes of a workspace so that opening a document in one pane
opens the same document in its partner.
"""

from panesync.core.base_system import BaseSystem
from panesync.core.locator import ServiceLocator
from panesync.core.config import ConfigManager, AppConfig, GeneralSettings, SyncSettings
from panesync.core.events import Signal, EventBus, Events
from panesync.core.exceptions import (
    PaneSyncError,
    NoActiveDocument,
    NoPartnerAvailable,
    StalePaneReference,
)
from panesync.core.logging import setup_logging
from panesync.workspace import Workspace, WorkspaceLeaf, WorkspaceSplit, NoticeCenter
from panesync.sync import PaneSyncEngine, PaneRegistry
from panesync.plugin import PaneSyncPlugin

__version__ = "0.1.0"

__all__ = [
    "BaseSystem",
    "ServiceLocator",
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "SyncSettings",
    "Signal",
    "EventBus",
    "Events",
    "PaneSyncError",
    "NoActiveDocument",
    "NoPartnerAvailable",
    "StalePaneReference",
    "setup_logging",
    "Workspace",
    "WorkspaceLeaf",
    "WorkspaceSplit",
    "NoticeCenter",
    "PaneSyncEngine",
    "PaneRegistry",
    "PaneSyncPlugin",
]
