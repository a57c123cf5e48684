"""
PaneSync error taxonomy.

All errors raised by the linking engine derive from PaneSyncError. None of
them is fatal: the engine turns the two link-resolution failures into user
notices and degrades silently on stale pane references.
"""
from typing import Optional


class PaneSyncError(Exception):
    """Base class for pane-linking errors."""
    pass


class NoActiveDocument(PaneSyncError):
    """The pane a link was requested for shows no document."""

    def __init__(self, pane_id: str):
        self.pane_id = pane_id
        super().__init__(f"Pane {pane_id} has no open document")


class NoPartnerAvailable(PaneSyncError):
    """Partner search (and creation, if permitted) produced no candidate."""

    def __init__(self, pane_id: str, document: Optional[str] = None):
        self.pane_id = pane_id
        self.document = document
        super().__init__(f"No partner pane available for {pane_id} ({document})")


class StalePaneReference(PaneSyncError):
    """An operation targeted a pane that is no longer part of the workspace."""

    def __init__(self, pane_id: str):
        self.pane_id = pane_id
        super().__init__(f"Pane {pane_id} is no longer live")
