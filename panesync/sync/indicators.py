"""
Indicator Presenter - show which panes are linked.
"""
from loguru import logger

from panesync.workspace import Workspace
from .registry import PaneRegistry

LINKED_BADGE_ID = "pane-sync-linked"
LINKED_BADGE_ICON = "link"
LINKED_BADGE_LABEL = "Linked pane"


class IndicatorPresenter:
    """
    Projects the registry onto tab headers.

    Holds no state of its own: every refresh clears the badge from all live
    leaves and re-applies it to the linked ones, so repeated calls never
    stack badges.
    """

    def __init__(self, workspace: Workspace, registry: PaneRegistry, enabled: bool = True):
        self.workspace = workspace
        self.registry = registry
        self.enabled = enabled

    def refresh(self) -> None:
        self.clear()
        if not self.enabled:
            return
        count = 0
        for pane in self.registry.all_linked_panes():
            if not self.workspace.is_live(pane):
                continue
            pane.header.add_badge(LINKED_BADGE_ID, LINKED_BADGE_ICON, LINKED_BADGE_LABEL)
            count += 1
        logger.debug(f"Linked indicator on {count} pane(s)")

    def clear(self) -> None:
        self.workspace.iterate_all_leaves(lambda leaf: leaf.header.remove_badge(LINKED_BADGE_ID))

    def marked_panes(self):
        """Live leaves currently carrying the linked badge."""
        return [leaf for leaf in self.workspace.all_leaves() if leaf.header.has_badge(LINKED_BADGE_ID)]
