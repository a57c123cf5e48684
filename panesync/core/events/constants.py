"""
Event Type Constants.

Usage:
    from panesync.core.events import Events, EventBus

    event_bus.subscribe(Events.LINK_CREATED, on_link_created)
"""


class Events:
    """Standard event names published on the EventBus."""

    # Link lifecycle
    LINK_CREATED = "link.created"
    LINK_REMOVED = "link.removed"

    # Document propagation into a partner pane
    SYNC_PROPAGATED = "sync.propagated"

    # Registry cleanup after layout changes
    PANES_RECONCILED = "panes.reconciled"

    # Engine lifecycle
    ENGINE_STARTED = "engine.started"
    ENGINE_STOPPED = "engine.stopped"
