"""
Workspace tree nodes.

A workspace is a tree of splits whose leaves are panes. Each leaf shows at
most one document and carries a tab header that plugins can decorate with
small badges.
"""
import os
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from panesync.core.events import Signal

if TYPE_CHECKING:
    from .workspace import Workspace


class SplitOrientation(Enum):
    # "vertical" places children side by side, "horizontal" stacks them
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class Badge:
    """Small marker shown in a tab header."""
    badge_id: str
    icon: str
    label: str


class TabHeader:
    """Tab header of a leaf: title plus a set of badges keyed by id."""

    def __init__(self):
        self._badges: Dict[str, Badge] = {}
        self.on_changed = Signal("TabHeaderChanged")

    @property
    def badges(self) -> List[Badge]:
        return list(self._badges.values())

    def add_badge(self, badge_id: str, icon: str, label: str) -> Badge:
        """Add a badge, replacing one with the same id."""
        badge = Badge(badge_id, icon, label)
        if self._badges.get(badge_id) != badge:
            self._badges[badge_id] = badge
            self.on_changed.emit()
        return badge

    def remove_badge(self, badge_id: str) -> bool:
        if self._badges.pop(badge_id, None) is None:
            return False
        self.on_changed.emit()
        return True

    def has_badge(self, badge_id: str) -> bool:
        return badge_id in self._badges


class WorkspaceItem:
    """Common part of splits and leaves: identity and parent link."""

    def __init__(self, item_id: Optional[str] = None):
        self.id = item_id or str(uuid.uuid4())
        self.parent: Optional['WorkspaceSplit'] = None

    def ancestors(self):
        """Yield parents from the nearest up to the tree root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def get_root(self) -> 'WorkspaceItem':
        root = self
        for ancestor in self.ancestors():
            root = ancestor
        return root


class WorkspaceLeaf(WorkspaceItem):
    """
    A pane. Identity is stable for its whole lifetime; the document it shows
    changes through Workspace.open_document.
    """

    def __init__(self, workspace: 'Workspace', item_id: Optional[str] = None):
        super().__init__(item_id)
        self.workspace = workspace
        self.document: Optional[str] = None
        self.header = TabHeader()
        self._closed = False

    @property
    def title(self) -> str:
        if self.document is None:
            return "New tab"
        return os.path.basename(self.document) or self.document

    @property
    def is_viewable(self) -> bool:
        """True while the leaf is attached to the workspace and not closed."""
        return not self._closed and self.workspace.is_live(self)

    def open_document(self, document: str) -> None:
        """Request a document load; returns before the load happens."""
        self.workspace.open_document(self, document)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "leaf", "id": self.id, "document": self.document}

    def __repr__(self) -> str:
        return f"WorkspaceLeaf({self.id[:8]}, {self.document!r})"


class WorkspaceSplit(WorkspaceItem):
    """Container node holding leaves and nested splits in order."""

    def __init__(self, orientation: SplitOrientation = SplitOrientation.VERTICAL,
                 item_id: Optional[str] = None, role: Optional[str] = None):
        super().__init__(item_id)
        self.orientation = orientation
        self.role = role
        self.children: List[WorkspaceItem] = []

    def insert_child(self, index: int, child: WorkspaceItem) -> None:
        child.parent = self
        self.children.insert(index, child)

    def append_child(self, child: WorkspaceItem) -> None:
        self.insert_child(len(self.children), child)

    def remove_child(self, child: WorkspaceItem) -> None:
        self.children.remove(child)
        child.parent = None

    def replace_child(self, old: WorkspaceItem, new: WorkspaceItem) -> None:
        index = self.children.index(old)
        self.children[index] = new
        new.parent = self
        old.parent = None

    def leaves(self) -> List[WorkspaceLeaf]:
        """All leaves below this split, depth-first in child order."""
        collected: List[WorkspaceLeaf] = []
        self._collect_leaves(self, collected)
        return collected

    def _collect_leaves(self, node: WorkspaceItem, collected: List[WorkspaceLeaf]):
        if isinstance(node, WorkspaceLeaf):
            collected.append(node)
        elif isinstance(node, WorkspaceSplit):
            for child in node.children:
                self._collect_leaves(child, collected)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "type": "split",
            "id": self.id,
            "role": self.role,
            "orientation": self.orientation.value,
            "children": [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        return f"WorkspaceSplit({self.role or self.id[:8]}, {self.orientation.value}, {len(self.children)} children)"
