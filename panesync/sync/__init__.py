"""
Pane-linking and synchronization engine.

Provides:
- PaneRegistry: symmetric, exclusive link relation
- PartnerResolver: find or create a partner in the main area
- SyncPropagator: mirror document loads without feedback loops
- LivenessReconciler: drop links of closed panes
- IndicatorPresenter: "linked" badges on tab headers
- PaneSyncEngine: wires all of the above to a workspace
"""
from .registry import PaneRegistry
from .resolver import PartnerResolver
from .propagator import SyncPropagator
from .reconciler import LivenessReconciler
from .indicators import IndicatorPresenter, LINKED_BADGE_ID
from .engine import PaneSyncEngine

__all__ = [
    "PaneRegistry",
    "PartnerResolver",
    "SyncPropagator",
    "LivenessReconciler",
    "IndicatorPresenter",
    "LINKED_BADGE_ID",
    "PaneSyncEngine",
]
