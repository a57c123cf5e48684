"""
Partner Resolver - find or create the pane to link with.
"""
from typing import Optional, Protocol

from loguru import logger

from panesync.core.exceptions import NoActiveDocument, NoPartnerAvailable, StalePaneReference
from panesync.workspace import SplitOrientation, Workspace, WorkspaceLeaf
from .registry import PaneRegistry


class LoadTracker(Protocol):
    """Bookkeeping of loads that were requested but may not have landed yet."""

    def tag_load(self, leaf: WorkspaceLeaf, document: str) -> None: ...

    def pending_document(self, leaf: WorkspaceLeaf) -> Optional[str]: ...


class PartnerResolver:
    """
    Chooses a partner for a pane and records the link.

    Only main-area leaves are candidates. Among them the first leaf, in
    workspace enumeration order, that shows the source's document wins.
    Enumeration order is depth-first over the main split tree and changes
    when the layout is rearranged, so "first" is only stable for a fixed
    layout.
    """

    def __init__(self, workspace: Workspace, registry: PaneRegistry,
                 tracker: Optional[LoadTracker] = None):
        self.workspace = workspace
        self.registry = registry
        self.tracker = tracker

    def resolve(self, source: WorkspaceLeaf, create_if_absent: bool = False) -> WorkspaceLeaf:
        """
        Link a pane with a partner showing the same document.

        Args:
            source: Pane the user asked to link
            create_if_absent: Split the source when no other pane shows its document

        Returns:
            The partner pane, already linked to source

        Raises:
            StalePaneReference: source is no longer part of the workspace
            NoActiveDocument: source shows no document
            NoPartnerAvailable: no candidate found or created
        """
        if not self.workspace.is_live(source):
            raise StalePaneReference(source.id)

        document = source.document
        if document is None:
            raise NoActiveDocument(source.id)

        partner = self._pending_partner(source, document)
        if partner is None:
            partner = self._find_candidate(source, document)

        if partner is None and create_if_absent:
            partner = self._create_partner(source, document)

        if partner is None:
            logger.debug(f"No partner for {source} and creation not allowed")
            raise NoPartnerAvailable(source.id, document)

        self.registry.set_linked_pair(source, partner)
        return partner

    def _pending_partner(self, source: WorkspaceLeaf, document: str) -> Optional[WorkspaceLeaf]:
        """Current partner whose load of document was requested but has not landed."""
        if self.tracker is None:
            return None
        partner = self.registry.get_partner(source)
        if partner is None or not self.workspace.is_in_main_area(partner):
            return None
        if partner.document == document or self.tracker.pending_document(partner) != document:
            return None
        logger.debug(f"{source} already linked to {partner}, load pending")
        return partner

    def _find_candidate(self, source: WorkspaceLeaf, document: str) -> Optional[WorkspaceLeaf]:
        count = 0
        for leaf in self.workspace.all_leaves():
            if not self.workspace.is_in_main_area(leaf):
                continue
            count += 1
            if leaf is source:
                continue
            if leaf.document == document:
                logger.debug(f"Found partner with same file: {document} (main-area leaf {count})")
                return leaf
        logger.debug(f"Scanned {count} main-area leaves, no partner for {document}")
        return None

    def _create_partner(self, source: WorkspaceLeaf, document: str) -> Optional[WorkspaceLeaf]:
        logger.debug(f"Creating new split for file: {document}")
        try:
            new_leaf = self.workspace.create_leaf_by_split(source, SplitOrientation.VERTICAL)
        except StalePaneReference:
            raise
        except Exception as e:
            logger.error(f"Failed to create split: {e}")
            return None
        if self.tracker is not None:
            self.tracker.tag_load(new_leaf, document)
        # Not awaited: the link exists before the document arrives
        new_leaf.open_document(document)
        return new_leaf
