"""
In-memory host workspace.

Provides:
- Workspace: split trees, focus, fire-and-forget loads and event signals
- WorkspaceLeaf / WorkspaceSplit: tree nodes (panes and containers)
- Menu / MenuItem: context menu model
- NoticeCenter: transient user notices
"""
from .nodes import Badge, SplitOrientation, TabHeader, WorkspaceItem, WorkspaceLeaf, WorkspaceSplit
from .menu import Menu, MenuItem
from .notices import Notice, NoticeCenter
from .workspace import Workspace

__all__ = [
    "Badge",
    "SplitOrientation",
    "TabHeader",
    "WorkspaceItem",
    "WorkspaceLeaf",
    "WorkspaceSplit",
    "Menu",
    "MenuItem",
    "Notice",
    "NoticeCenter",
    "Workspace",
]
