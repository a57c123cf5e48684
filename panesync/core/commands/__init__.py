"""
Command registration point.

Commands are zero-argument actions identified by a stable id and shown to
the user under a display name (command palette, menus).
"""
from .registry import Command, CommandRegistry

__all__ = ["Command", "CommandRegistry"]
