"""
Qt rendering of a Workspace.

The split trees are mirrored as nested QSplitters and rebuilt on every
layout change. Each leaf is drawn by a PaneWidget with a tab header
showing the document title and any badges plugins have attached.
"""
import os
from typing import Callable, Dict, Optional

from PySide6.QtCore import QEvent, Qt, QTimer, Signal
from PySide6.QtWidgets import (QFrame, QHBoxLayout, QLabel, QMenu, QPlainTextEdit,
                               QSplitter, QVBoxLayout, QWidget)
from loguru import logger

from panesync.workspace import (SplitOrientation, Workspace, WorkspaceItem,
                                WorkspaceLeaf, WorkspaceSplit)

BADGE_GLYPHS = {"link": "\U0001F517"}

# Workspace "vertical" splits lay children out side by side
QT_ORIENTATION = {
    SplitOrientation.VERTICAL: Qt.Horizontal,
    SplitOrientation.HORIZONTAL: Qt.Vertical,
}


def qt_scheduler(task: Callable[[], None]) -> None:
    """Run a workspace load on the next event loop iteration."""
    QTimer.singleShot(0, task)


def read_preview(path: str, limit: int = 200_000) -> str:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read(limit)
    except OSError as e:
        logger.debug(f"Cannot read {path}: {e}")
        return ""


class PaneHeader(QWidget):
    """Tab header: title plus badge labels."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("PaneHeader")
        self.setContextMenuPolicy(Qt.CustomContextMenu)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(6, 2, 6, 2)
        self.title_label = QLabel()
        layout.addWidget(self.title_label)
        self.badge_layout = QHBoxLayout()
        self.badge_layout.setSpacing(2)
        layout.addLayout(self.badge_layout)
        layout.addStretch()
        self.badge_labels: Dict[str, QLabel] = {}


class PaneWidget(QFrame):
    """View of one WorkspaceLeaf."""

    focused = Signal(str)  # leaf id

    def __init__(self, leaf: WorkspaceLeaf, parent=None):
        super().__init__(parent)
        self.leaf = leaf
        self.setFrameShape(QFrame.StyledPanel)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.header = PaneHeader(self)
        self.header.customContextMenuRequested.connect(self._show_context_menu)
        layout.addWidget(self.header)

        self.body = QPlainTextEdit(self)
        self.body.setReadOnly(True)
        self.body.installEventFilter(self)
        layout.addWidget(self.body)

        leaf.header.on_changed.connect(self.update_badges)
        self.update_document()
        self.update_badges()

    def release(self) -> None:
        """Stop listening to the leaf before the widget is dropped."""
        self.leaf.header.on_changed.disconnect(self.update_badges)

    def update_document(self) -> None:
        self.header.title_label.setText(self.leaf.title)
        self.header.title_label.setToolTip(self.leaf.document or "")
        if self.leaf.document and os.path.isfile(self.leaf.document):
            self.body.setPlainText(read_preview(self.leaf.document))
        else:
            self.body.setPlainText(self.leaf.document or "")

    def update_badges(self) -> None:
        current = {badge.badge_id: badge for badge in self.leaf.header.badges}
        for badge_id in list(self.header.badge_labels):
            if badge_id not in current:
                label = self.header.badge_labels.pop(badge_id)
                self.header.badge_layout.removeWidget(label)
                label.deleteLater()
        for badge_id, badge in current.items():
            if badge_id in self.header.badge_labels:
                continue
            label = QLabel(BADGE_GLYPHS.get(badge.icon, badge.icon))
            label.setAccessibleName(badge.label)
            label.setToolTip(badge.label)
            self.header.badge_layout.addWidget(label)
            self.header.badge_labels[badge_id] = label

    def build_context_menu(self) -> QMenu:
        menu_model = self.leaf.workspace.open_file_menu(self.leaf, source="tab-header")
        menu = QMenu(self)
        for item in menu_model.items:
            action = menu.addAction(item.title)
            action.triggered.connect(lambda checked=False, it=item: it.click())
        return menu

    def _show_context_menu(self, pos) -> None:
        menu = self.build_context_menu()
        if menu.actions():
            menu.exec(self.header.mapToGlobal(pos))

    def eventFilter(self, watched, event):
        if watched is self.body and event.type() == QEvent.FocusIn:
            self.focused.emit(self.leaf.id)
        return super().eventFilter(watched, event)

    def mousePressEvent(self, event):
        self.focused.emit(self.leaf.id)
        super().mousePressEvent(event)


class WorkspaceView(QWidget):
    """
    Widget tree for the whole workspace: left sidebar | main area | right sidebar.
    """

    def __init__(self, workspace: Workspace, parent=None):
        super().__init__(parent)
        self.workspace = workspace
        self._panes: Dict[str, PaneWidget] = {}
        self._outer: Optional[QSplitter] = None

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)

        workspace.layout_change.connect(self.rebuild)
        workspace.file_open.connect(self._on_file_open)
        workspace.active_leaf_change.connect(self._on_active_changed)
        self.rebuild()

    def pane_widget(self, leaf_id: str) -> Optional[PaneWidget]:
        return self._panes.get(leaf_id)

    def rebuild(self) -> None:
        live_ids = {leaf.id for leaf in self.workspace.all_leaves()}
        for leaf_id in [i for i in self._panes if i not in live_ids]:
            pane = self._panes.pop(leaf_id)
            pane.release()
            pane.setParent(None)
            pane.deleteLater()

        if self._outer is not None:
            self._layout.removeWidget(self._outer)
            # Keep surviving pane widgets alive while their old splitters go away
            for pane in self._panes.values():
                pane.setParent(None)
            self._outer.deleteLater()

        outer = QSplitter(Qt.Horizontal)
        for split in (self.workspace.left_split, self.workspace.root_split, self.workspace.right_split):
            if split.children:
                outer.addWidget(self._build(split))

        self._outer = outer
        self._layout.addWidget(outer)
        self._on_active_changed(self.workspace.active_leaf)
        logger.debug(f"WorkspaceView rebuilt with {len(self._panes)} panes")

    def _build(self, item: WorkspaceItem) -> QWidget:
        if isinstance(item, WorkspaceLeaf):
            pane = self._panes.get(item.id)
            if pane is None:
                pane = PaneWidget(item)
                pane.focused.connect(self._on_pane_focused)
                self._panes[item.id] = pane
            return pane

        assert isinstance(item, WorkspaceSplit)
        splitter = QSplitter(QT_ORIENTATION[item.orientation])
        for child in item.children:
            splitter.addWidget(self._build(child))
        return splitter

    def _on_pane_focused(self, leaf_id: str) -> None:
        leaf = self.workspace.get_leaf(leaf_id)
        if leaf is not None:
            self.workspace.set_active_leaf(leaf)

    def _on_file_open(self, leaf: WorkspaceLeaf, document: str) -> None:
        pane = self._panes.get(leaf.id)
        if pane is not None:
            pane.update_document()

    def _on_active_changed(self, leaf: Optional[WorkspaceLeaf]) -> None:
        for leaf_id, pane in self._panes.items():
            active = leaf is not None and leaf.id == leaf_id
            pane.header.setStyleSheet("#PaneHeader { font-weight: bold; }" if active else "")
