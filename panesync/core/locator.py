from typing import Dict, Optional, Type, TypeVar

from loguru import logger

from .config import ConfigManager

T = TypeVar("T")


class ServiceLocator:
    """
    Registry of the application's systems.

    Constructed explicitly and passed to whoever needs it, so every test can
    build its own isolated set of systems.
    """

    def __init__(self, config: Optional[ConfigManager] = None):
        self.config = config
        self._systems: Dict[type, object] = {}

    def register_system(self, system_type: Type[T], instance: T) -> T:
        if system_type in self._systems:
            logger.warning(f"Replacing registered system: {system_type.__name__}")
        self._systems[system_type] = instance
        logger.debug(f"Registered system: {system_type.__name__}")
        return instance

    def get_system(self, system_type: Type[T]) -> T:
        """
        Get a registered system.

        Raises:
            KeyError: If no system of that type is registered
        """
        try:
            return self._systems[system_type]
        except KeyError:
            raise KeyError(f"System not registered: {system_type.__name__}") from None

    def has_system(self, system_type: type) -> bool:
        return system_type in self._systems

    def systems(self) -> Dict[type, object]:
        return dict(self._systems)
