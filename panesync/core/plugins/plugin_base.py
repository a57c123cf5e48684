"""
Base Plugin class.

Hosts drive features through the same lifecycle:
load -> enable -> disable -> unload
"""
from abc import ABC
from enum import Enum
from typing import Optional, TYPE_CHECKING
from loguru import logger

if TYPE_CHECKING:
    from ..locator import ServiceLocator


class PluginState(Enum):
    """Plugin lifecycle states."""
    UNLOADED = "unloaded"
    LOADED = "loaded"
    ENABLED = "enabled"


class Plugin(ABC):
    """
    Base class for all plugins.

    Transition methods return False instead of raising when called from the
    wrong state or when a hook fails; hook errors are logged.

    Usage:
        class MyPlugin(Plugin):
            def on_enable(self):
                self.commands.register_command("my-cmd", "My command", self.run)
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__
        self.version = "1.0.0"
        self.description = ""

        self._state = PluginState.UNLOADED
        self._locator: Optional['ServiceLocator'] = None

    @property
    def state(self) -> PluginState:
        return self._state

    @property
    def locator(self) -> Optional['ServiceLocator']:
        return self._locator

    def _transition(self, expected: PluginState, target: PluginState, hook, verb: str) -> bool:
        if self._state != expected:
            logger.debug(f"Cannot {verb} plugin {self.name} in state {self._state.value}")
            return False
        try:
            hook()
        except Exception as e:
            logger.error(f"Failed to {verb} plugin {self.name}: {e}")
            return False
        self._state = target
        logger.info(f"Plugin {verb}: {self.name}")
        return True

    def load(self, locator: 'ServiceLocator') -> bool:
        """
        Load the plugin.

        Args:
            locator: ServiceLocator instance

        Returns:
            True if load succeeded
        """
        if self._state != PluginState.UNLOADED:
            return False
        self._locator = locator
        loaded = self._transition(PluginState.UNLOADED, PluginState.LOADED, self.on_load, "load")
        if not loaded:
            self._locator = None
        return loaded

    def unload(self) -> bool:
        if self._state == PluginState.ENABLED:
            self.disable()
        unloaded = self._transition(PluginState.LOADED, PluginState.UNLOADED, self.on_unload, "unload")
        if unloaded:
            self._locator = None
        return unloaded

    def enable(self) -> bool:
        return self._transition(PluginState.LOADED, PluginState.ENABLED, self.on_enable, "enable")

    def disable(self) -> bool:
        return self._transition(PluginState.ENABLED, PluginState.LOADED, self.on_disable, "disable")

    # Override these methods in subclasses
    def on_load(self) -> None:
        pass

    def on_unload(self) -> None:
        pass

    def on_enable(self) -> None:
        pass

    def on_disable(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"Plugin({self.name}, state={self._state.value})"
