"""
Sync Propagator - push a pane's new document into its partner.
"""
from typing import Dict, List, Optional

from loguru import logger

from panesync.core.config import ConfigManager
from panesync.workspace import WorkspaceLeaf
from .registry import PaneRegistry


class SyncPropagator:
    """
    Mirrors document changes across linked panes without feedback loops.

    Loading a document into the partner raises a change event for the
    partner. Two guards keep that event from bouncing back:

    - a re-entrancy flag, set while propagating, covers hosts that deliver
      the partner's event synchronously from inside the load request;
    - a load tag per pane, recorded before the load is requested and
      consumed by the first matching event, covers hosts that deliver the
      event later, after the flag is already cleared.
    """

    def __init__(self, registry: PaneRegistry, config: ConfigManager):
        self.registry = registry
        self.config = config
        self._syncing = False
        self._pending: Dict[str, List[str]] = {}

    @property
    def is_syncing(self) -> bool:
        return self._syncing

    @property
    def pending_loads(self) -> Dict[str, List[str]]:
        return {pane_id: list(documents) for pane_id, documents in self._pending.items()}

    def tag_load(self, leaf: WorkspaceLeaf, document: str) -> None:
        """Mark the next change event for leaf carrying document as ours."""
        self._pending.setdefault(leaf.id, []).append(document)

    def pending_document(self, leaf: WorkspaceLeaf) -> Optional[str]:
        """Document of the most recent load requested for leaf, if not landed yet."""
        documents = self._pending.get(leaf.id)
        return documents[-1] if documents else None

    def discard_pending(self, pane_id: str) -> None:
        self._pending.pop(pane_id, None)

    def _consume_tag(self, pane: WorkspaceLeaf, document: str) -> bool:
        documents = self._pending.get(pane.id)
        if not documents or document not in documents:
            return False
        # Loads land in request order; earlier tags were superseded
        del documents[:documents.index(document) + 1]
        if not documents:
            del self._pending[pane.id]
        return True

    def on_document_changed(self, pane: WorkspaceLeaf, document: Optional[str]) -> Optional[WorkspaceLeaf]:
        """
        Handle a document becoming active in a pane.

        Returns:
            The partner asked to load the document, or None if nothing was done
        """
        if document is None:
            return None
        if self._consume_tag(pane, document):
            logger.debug(f"Ignoring self-caused change in {pane}")
            return None
        if self._syncing or not self.config.data.sync.enabled:
            return None

        partner = self.registry.get_partner(pane)
        if partner is None:
            return None
        if not partner.is_viewable:
            logger.debug(f"Partner {partner.id[:8]} of {pane} is gone, skipping")
            return None
        if partner.document == document and partner.id not in self._pending:
            return None

        try:
            self._syncing = True
            self.tag_load(partner, document)
            logger.debug(f"Syncing {document} from {pane.id[:8]} to {partner.id[:8]}")
            partner.open_document(document)
        finally:
            self._syncing = False
        return partner
