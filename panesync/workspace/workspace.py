"""
Workspace - in-memory model of an editor's pane layout.

Three split trees make up the workspace: the main area (root_split) and
the two sidebars. Leaves are panes showing one document each. The
workspace announces navigation, focus and layout changes through signals
and performs document loads through a scheduler so that loads behave as
fire-and-forget requests.
"""
from typing import Callable, Dict, List, Optional, Union

from loguru import logger

from panesync.core.events import Signal
from panesync.core.exceptions import StalePaneReference
from .menu import Menu
from .nodes import SplitOrientation, WorkspaceItem, WorkspaceLeaf, WorkspaceSplit
from .notices import NoticeCenter

Scheduler = Callable[[Callable[[], None]], None]


def _run_now(task: Callable[[], None]) -> None:
    task()


class Workspace:
    """
    Layout of panes plus the event surface plugins subscribe to.

    Signals:
        file_open(leaf, document): a document finished loading into a leaf
        active_leaf_change(leaf): focus moved to another leaf
        layout_change(): leaves were added, split, moved or closed
        file_menu(menu, document, source, leaf): a context menu is being built

    Leaf enumeration order is depth-first in child order: main area first,
    then the left sidebar, then the right sidebar.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None):
        self.root_split = WorkspaceSplit(SplitOrientation.VERTICAL, role="root")
        self.left_split = WorkspaceSplit(SplitOrientation.HORIZONTAL, role="left")
        self.right_split = WorkspaceSplit(SplitOrientation.HORIZONTAL, role="right")
        self.scheduler: Scheduler = scheduler or _run_now
        self.notices = NoticeCenter()

        self.file_open = Signal("file-open")
        self.active_leaf_change = Signal("active-leaf-change")
        self.layout_change = Signal("layout-change")
        self.file_menu = Signal("file-menu")

        first = WorkspaceLeaf(self)
        self.root_split.append_child(first)
        self._active_leaf: Optional[WorkspaceLeaf] = first

    # === Enumeration ===

    @property
    def roots(self) -> List[WorkspaceSplit]:
        return [self.root_split, self.left_split, self.right_split]

    def all_leaves(self) -> List[WorkspaceLeaf]:
        leaves: List[WorkspaceLeaf] = []
        for root in self.roots:
            leaves.extend(root.leaves())
        return leaves

    def iterate_all_leaves(self, callback: Callable[[WorkspaceLeaf], None]) -> None:
        for leaf in self.all_leaves():
            callback(leaf)

    def root_leaves(self) -> List[WorkspaceLeaf]:
        """Leaves of the main area only."""
        return self.root_split.leaves()

    def get_leaf(self, leaf_id: str) -> Optional[WorkspaceLeaf]:
        for leaf in self.all_leaves():
            if leaf.id == leaf_id:
                return leaf
        return None

    def is_live(self, item: WorkspaceItem) -> bool:
        """True if the item hangs below one of the workspace roots."""
        if item in self.roots:
            return True
        return any(ancestor in self.roots for ancestor in item.ancestors())

    def is_in_main_area(self, leaf: WorkspaceLeaf) -> bool:
        """Walk the parent chain; only leaves under root_split qualify."""
        for ancestor in leaf.ancestors():
            if ancestor is self.root_split:
                return True
        return False

    # === Focus ===

    @property
    def active_leaf(self) -> Optional[WorkspaceLeaf]:
        return self._active_leaf

    def set_active_leaf(self, leaf: WorkspaceLeaf) -> None:
        if not self.is_live(leaf):
            raise StalePaneReference(leaf.id)
        if leaf is self._active_leaf:
            return
        self._active_leaf = leaf
        logger.debug(f"Active leaf: {leaf}")
        self.active_leaf_change.emit(leaf)

    # === Layout ===

    def add_leaf(self, split: Optional[WorkspaceSplit] = None,
                 document: Optional[str] = None) -> WorkspaceLeaf:
        """Append a new leaf to a split (main area by default)."""
        target = split or self.root_split
        if not self.is_live(target):
            raise StalePaneReference(target.id)
        leaf = WorkspaceLeaf(self)
        target.append_child(leaf)
        self.layout_change.emit()
        if document is not None:
            self.open_document(leaf, document)
        return leaf

    def add_sidebar_leaf(self, side: str = "left", document: Optional[str] = None) -> WorkspaceLeaf:
        split = self.left_split if side == "left" else self.right_split
        return self.add_leaf(split, document)

    def create_leaf_by_split(self, leaf: WorkspaceLeaf,
                             orientation: Union[SplitOrientation, str] = SplitOrientation.VERTICAL,
                             before: bool = False) -> WorkspaceLeaf:
        """
        Create a new empty leaf next to an existing one.

        If the leaf's parent already splits in the requested orientation the
        new leaf becomes a sibling; otherwise the leaf is wrapped in a new
        split holding both.

        Raises:
            StalePaneReference: If the leaf is not part of the workspace
        """
        orientation = SplitOrientation(orientation)
        parent = leaf.parent
        if parent is None or not self.is_live(leaf):
            raise StalePaneReference(leaf.id)

        new_leaf = WorkspaceLeaf(self)
        if parent.orientation == orientation:
            index = parent.children.index(leaf)
            parent.insert_child(index if before else index + 1, new_leaf)
        else:
            split = WorkspaceSplit(orientation)
            parent.replace_child(leaf, split)
            if before:
                split.append_child(new_leaf)
                split.append_child(leaf)
            else:
                split.append_child(leaf)
                split.append_child(new_leaf)

        logger.info(f"Split {leaf} {orientation.value}, new leaf {new_leaf.id[:8]}")
        self.layout_change.emit()
        return new_leaf

    def detach_leaf(self, leaf: WorkspaceLeaf) -> bool:
        """
        Close a leaf and collapse splits left with a single child.

        Returns:
            False if the leaf was already detached
        """
        parent = leaf.parent
        if parent is None or not self.is_live(leaf):
            return False

        parent.remove_child(leaf)
        leaf._closed = True
        self._collapse(parent)

        if not self.root_split.children:
            self.root_split.append_child(WorkspaceLeaf(self))

        if self._active_leaf is leaf:
            remaining = self.root_leaves()
            self._active_leaf = remaining[0] if remaining else None
            if self._active_leaf is not None:
                self.active_leaf_change.emit(self._active_leaf)

        logger.info(f"Detached {leaf}")
        self.layout_change.emit()
        return True

    def _collapse(self, split: WorkspaceSplit) -> None:
        if split in self.roots:
            return
        grandparent = split.parent
        if grandparent is None:
            return
        if not split.children:
            grandparent.remove_child(split)
            self._collapse(grandparent)
        elif len(split.children) == 1:
            grandparent.replace_child(split, split.children[0])

    # === Documents ===

    def open_document(self, leaf: WorkspaceLeaf, document: str) -> None:
        """
        Request that a leaf show a document.

        The load runs through the scheduler; loads that reach a leaf which
        has been closed in the meantime are discarded.
        """
        self.scheduler(lambda: self._apply_load(leaf, document))

    def _apply_load(self, leaf: WorkspaceLeaf, document: str) -> None:
        if not self.is_live(leaf):
            logger.debug(f"Discarding load of {document} into closed leaf {leaf.id[:8]}")
            return
        leaf.document = document
        self.file_open.emit(leaf, document)

    def open_file_menu(self, leaf: WorkspaceLeaf, source: str = "tab-header") -> Menu:
        """Build the context menu for a leaf, letting subscribers add items."""
        menu = Menu()
        self.file_menu.emit(menu, leaf.document, source, leaf)
        return menu

    # === Serialization ===

    def to_dict(self) -> Dict[str, object]:
        return {
            "main": self.root_split.to_dict(),
            "left": self.left_split.to_dict(),
            "right": self.right_split.to_dict(),
            "active": self._active_leaf.id if self._active_leaf else None,
        }
