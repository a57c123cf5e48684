"""
Event System.

Provides:
- Signal: synchronous observer for workspace notifications and config changes
- EventBus: named pub/sub for application-wide events
- Events: standard event name constants
"""
from .observer import Signal
from .bus import EventBus
from .constants import Events


__all__ = ["Signal", "EventBus", "Events"]
