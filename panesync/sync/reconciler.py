"""
Liveness Reconciler - forget panes that have left the workspace.

There is no "pane closed" event to rely on; a pane counts as closed once
it no longer shows up when the workspace enumerates its leaves.
"""
from typing import List, Optional

from loguru import logger

from panesync.workspace import Workspace
from .propagator import SyncPropagator
from .registry import PaneRegistry


class LivenessReconciler:
    def __init__(self, workspace: Workspace, registry: PaneRegistry,
                 propagator: Optional[SyncPropagator] = None):
        self.workspace = workspace
        self.registry = registry
        self.propagator = propagator

    def reconcile(self) -> List[str]:
        """
        Unregister every registry entry whose pane is no longer live.

        Returns:
            Ids of the panes that were removed
        """
        live_ids = set()
        self.workspace.iterate_all_leaves(lambda leaf: live_ids.add(leaf.id))

        stale = [pane_id for pane_id in self.registry.registered_ids() if pane_id not in live_ids]
        for pane_id in stale:
            self.registry.unregister(pane_id)

        if self.propagator is not None:
            for pane_id in list(self.propagator.pending_loads):
                if pane_id not in live_ids:
                    self.propagator.discard_pending(pane_id)

        if stale:
            logger.info(f"Removed {len(stale)} closed pane(s) from registry")
        return stale
