"""
Pane Registry - the link relation between panes.

The relation is stored as an adjacency map keyed by pane id. Pane handles
are held through weak references only: panes belong to the workspace, and
the registry must never be the reason a closed pane stays alive.
"""
import weakref
from typing import Dict, List, Optional, Set, Tuple

from loguru import logger

from panesync.core.events import Signal
from panesync.workspace import WorkspaceLeaf


class PaneRegistry:
    """
    Symmetric, exclusive pairing of panes.

    Every pane has at most one partner and every link is recorded in both
    directions. Linking a pane drops whatever links it and its new partner
    held before.

    Signals:
        link_created(a, b)
        link_removed(a_id, b_id): ids, since either pane may already be gone
    """

    def __init__(self):
        self._links: Dict[str, Set[str]] = {}
        self._handles: "weakref.WeakValueDictionary[str, WorkspaceLeaf]" = weakref.WeakValueDictionary()
        self.link_created = Signal("LinkCreated")
        self.link_removed = Signal("LinkRemoved")

    def set_linked_pair(self, a: WorkspaceLeaf, b: WorkspaceLeaf) -> None:
        """
        Link two panes, clearing existing links of both first.

        Raises:
            ValueError: If both arguments are the same pane
        """
        if a.id == b.id:
            raise ValueError(f"Cannot link pane {a.id} to itself")
        if self._links.get(a.id) == {b.id} and self._links.get(b.id) == {a.id}:
            return

        self._clear_links(a.id)
        self._clear_links(b.id)
        self._handles[a.id] = a
        self._handles[b.id] = b
        self._links[a.id] = {b.id}
        self._links[b.id] = {a.id}
        logger.info(f"Linked panes {a.id[:8]} <-> {b.id[:8]}")
        self.link_created.emit(a, b)

    def get_partner(self, pane: WorkspaceLeaf) -> Optional[WorkspaceLeaf]:
        """Linked pane, or None if unlinked or the partner handle is gone."""
        partners = self._links.get(pane.id)
        if not partners:
            return None
        partner_id = next(iter(partners))
        return self._handles.get(partner_id)

    def unregister(self, pane) -> None:
        """
        Remove a pane and every entry referencing it.

        Accepts a pane or a pane id, since reconciliation works on ids of
        panes that may already be collected.
        """
        pane_id = pane if isinstance(pane, str) else pane.id
        self._clear_links(pane_id)
        self._links.pop(pane_id, None)
        self._handles.pop(pane_id, None)

    def _clear_links(self, pane_id: str) -> None:
        for partner_id in self._links.get(pane_id, set()).copy():
            self._links[pane_id].discard(partner_id)
            partner_links = self._links.get(partner_id)
            if partner_links is not None:
                partner_links.discard(pane_id)
                if not partner_links:
                    del self._links[partner_id]
                    self._handles.pop(partner_id, None)
            logger.debug(f"Unlinked panes {pane_id[:8]} <-> {partner_id[:8]}")
            self.link_removed.emit(pane_id, partner_id)
        if pane_id in self._links and not self._links[pane_id]:
            del self._links[pane_id]

    def all_linked_panes(self) -> List[WorkspaceLeaf]:
        """Live handles of panes holding at least one link."""
        panes = []
        for pane_id, partners in self._links.items():
            pane = self._handles.get(pane_id)
            if partners and pane is not None:
                panes.append(pane)
        return panes

    def is_linked(self, pane: WorkspaceLeaf) -> bool:
        return self.get_partner(pane) is not None

    def pairs(self) -> List[Tuple[str, str]]:
        """Each linked pair once, as sorted id tuples."""
        seen = set()
        for pane_id, partners in self._links.items():
            for partner_id in partners:
                seen.add(tuple(sorted((pane_id, partner_id))))
        return sorted(seen)

    def registered_ids(self) -> Set[str]:
        return set(self._links)

    def clear(self) -> None:
        """Drop every link; used at engine shutdown."""
        for a_id, b_id in self.pairs():
            self.link_removed.emit(a_id, b_id)
        self._links.clear()
        self._handles.clear()

    def __contains__(self, pane) -> bool:
        pane_id = pane if isinstance(pane, str) else pane.id
        return pane_id in self._links

    def __len__(self) -> int:
        return len(self._links)
