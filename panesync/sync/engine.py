"""
PaneSyncEngine - wires the linking components to a workspace.

One engine instance owns one registry. Construct a fresh engine per
workspace (and per test); shutdown clears every link.
"""
from typing import Any, Optional

from loguru import logger

from panesync.core.base_system import BaseSystem
from panesync.core.config import ConfigManager
from panesync.core.events import EventBus, Events
from panesync.core.exceptions import NoActiveDocument, NoPartnerAvailable, StalePaneReference
from panesync.workspace import Menu, NoticeCenter, Workspace, WorkspaceLeaf
from .indicators import IndicatorPresenter
from .propagator import SyncPropagator
from .reconciler import LivenessReconciler
from .registry import PaneRegistry
from .resolver import PartnerResolver

TAB_HEADER_SOURCE = "tab-header"

LINK_TITLE = "Link this pane for file sync"
UNLINK_TITLE = "Unlink this pane"

NOTICE_LINKED = "Linked with one pane for sync"
NOTICE_NO_DOCUMENT = "No file open in this pane"
NOTICE_NO_PARTNER = "No pane found or created to link"
NOTICE_UNLINKED = "Pane unlinked"


class PaneSyncEngine(BaseSystem):
    """
    Pane-linking engine.

    Responsibilities:
    - Link panes on user request (command or tab-header menu)
    - Mirror document loads across linked panes
    - Drop links of closed panes on every layout change
    - Keep the "linked" badge in sync with the registry

    Usage:
        engine = PaneSyncEngine(workspace, config)
        await engine.initialize()
        engine.link_active_pane()
    """

    def __init__(self, workspace: Workspace, config: ConfigManager,
                 notices: Optional[NoticeCenter] = None, locator=None):
        super().__init__(locator, config)
        self.workspace = workspace
        self.notices = notices or workspace.notices

        self.registry = PaneRegistry()
        self.propagator = SyncPropagator(self.registry, config)
        self.resolver = PartnerResolver(workspace, self.registry, tracker=self.propagator)
        self.reconciler = LivenessReconciler(workspace, self.registry, self.propagator)
        self.presenter = IndicatorPresenter(workspace, self.registry,
                                            enabled=config.data.sync.show_indicators)

        self._attached = False
        self.registry.link_created.connect(self._on_link_created)
        self.registry.link_removed.connect(self._on_link_removed)
        self.config.on_changed.connect(self._on_config_changed)

    # === Lifecycle ===

    async def initialize(self):
        self.attach()
        await super().initialize()
        self._publish(Events.ENGINE_STARTED, None)
        logger.info("PaneSyncEngine initialized")

    async def shutdown(self):
        self.teardown()
        await super().shutdown()
        self._publish(Events.ENGINE_STOPPED, None)
        logger.info("PaneSyncEngine shut down")

    def teardown(self) -> None:
        """Synchronous part of shutdown: detach, drop links and badges."""
        self.detach()
        self.registry.clear()
        self.presenter.clear()
        for pane_id in list(self.propagator.pending_loads):
            self.propagator.discard_pending(pane_id)

    def attach(self) -> None:
        """Subscribe to workspace events."""
        if self._attached:
            return
        self.workspace.file_open.connect(self.on_file_open)
        self.workspace.layout_change.connect(self.on_layout_change)
        self.workspace.file_menu.connect(self.on_file_menu)
        self._attached = True
        logger.debug("PaneSyncEngine attached to workspace")

    def detach(self) -> None:
        if not self._attached:
            return
        self.workspace.file_open.disconnect(self.on_file_open)
        self.workspace.layout_change.disconnect(self.on_layout_change)
        self.workspace.file_menu.disconnect(self.on_file_menu)
        self._attached = False
        logger.debug("PaneSyncEngine detached from workspace")

    @property
    def is_attached(self) -> bool:
        return self._attached

    # === User actions ===

    def link_pane(self, leaf: WorkspaceLeaf, create_if_absent: bool = True) -> Optional[WorkspaceLeaf]:
        """
        Link a pane with a partner and tell the user how it went.

        Never raises: failures become notices, stale panes are ignored.

        Returns:
            The partner pane, or None if nothing was linked
        """
        try:
            partner = self.resolver.resolve(leaf, create_if_absent=create_if_absent)
        except StalePaneReference as e:
            logger.debug(f"Ignoring link request: {e}")
            return None
        except NoActiveDocument as e:
            logger.info(f"Link request rejected: {e}")
            self.notices.show(NOTICE_NO_DOCUMENT)
            return None
        except NoPartnerAvailable as e:
            logger.info(f"Link request rejected: {e}")
            self.notices.show(NOTICE_NO_PARTNER)
            return None

        self.presenter.refresh()
        self.notices.show(NOTICE_LINKED)
        return partner

    def link_active_pane(self) -> Optional[WorkspaceLeaf]:
        """Command action: link the focused pane."""
        leaf = self.workspace.active_leaf
        if leaf is None:
            return None
        return self.link_pane(leaf, create_if_absent=True)

    def unlink_pane(self, leaf: WorkspaceLeaf) -> bool:
        if not self.registry.is_linked(leaf):
            return False
        self.registry.unregister(leaf)
        self.presenter.refresh()
        self.notices.show(NOTICE_UNLINKED)
        return True

    def unlink_active_pane(self) -> bool:
        leaf = self.workspace.active_leaf
        if leaf is None:
            return False
        return self.unlink_pane(leaf)

    # === Workspace events ===

    def on_file_open(self, leaf: WorkspaceLeaf, document: Optional[str]) -> None:
        partner = self.propagator.on_document_changed(leaf, document)
        if partner is not None:
            self._publish(Events.SYNC_PROPAGATED, {
                "source": leaf.id,
                "target": partner.id,
                "document": document,
            })

    def on_layout_change(self) -> None:
        removed = self.reconciler.reconcile()
        self.presenter.refresh()
        if removed:
            self._publish(Events.PANES_RECONCILED, {"removed": removed})

    def on_file_menu(self, menu: Menu, document: Optional[str], source: str,
                     leaf: Optional[WorkspaceLeaf] = None) -> None:
        if source != TAB_HEADER_SOURCE or leaf is None:
            return
        menu.add_item(
            lambda item: item.set_title(LINK_TITLE)
            .set_icon("link")
            .on_click(lambda: self.link_pane(leaf, create_if_absent=True))
        )
        if self.registry.is_linked(leaf):
            menu.add_item(
                lambda item: item.set_title(UNLINK_TITLE)
                .set_icon("unlink")
                .on_click(lambda: self.unlink_pane(leaf))
            )

    # === Internal ===

    def _on_config_changed(self, section: Optional[str], key: Optional[str], value: Any) -> None:
        if section not in ("sync", None):
            return
        self.presenter.enabled = self.config.data.sync.show_indicators
        self.presenter.refresh()
        if key == "enabled":
            logger.info(f"File sync {'enabled' if value else 'disabled'}")

    def _on_link_created(self, a: WorkspaceLeaf, b: WorkspaceLeaf) -> None:
        self._publish(Events.LINK_CREATED, {"panes": (a.id, b.id)})

    def _on_link_removed(self, a_id: str, b_id: str) -> None:
        self._publish(Events.LINK_REMOVED, {"panes": (a_id, b_id)})

    def _publish(self, event: str, data: Any) -> None:
        if self.locator is None or not self.locator.has_system(EventBus):
            return
        self.locator.get_system(EventBus).publish_sync(event, data)
