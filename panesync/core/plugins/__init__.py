"""
Plugin lifecycle base.
"""
from .plugin_base import Plugin, PluginState

__all__ = ['Plugin', 'PluginState']
