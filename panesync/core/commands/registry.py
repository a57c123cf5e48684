from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from loguru import logger

from ..events import Signal


@dataclass(frozen=True)
class Command:
    """A registered zero-argument action."""
    command_id: str
    name: str
    callback: Callable[[], None]
    icon: Optional[str] = None


class CommandRegistry:
    """
    Holds the commands contributed by plugins.

    Example:
        registry.register_command("link-pane-for-sync", "Link this pane for file sync", engine.link_active_pane)
        registry.execute("link-pane-for-sync")
    """

    def __init__(self):
        self._commands: Dict[str, Command] = {}
        self.on_registered = Signal("CommandRegistered")
        self.on_unregistered = Signal("CommandUnregistered")

    def register_command(self, command_id: str, name: str,
                         callback: Callable[[], None], icon: Optional[str] = None) -> Command:
        """
        Register a command.

        Raises:
            ValueError: If a command with the same id is already registered
        """
        if command_id in self._commands:
            raise ValueError(f"Command already registered: {command_id}")
        command = Command(command_id, name, callback, icon)
        self._commands[command_id] = command
        self.on_registered.emit(command)
        logger.debug(f"Registered command: {command_id}")
        return command

    def unregister_command(self, command_id: str) -> bool:
        command = self._commands.pop(command_id, None)
        if command is None:
            return False
        self.on_unregistered.emit(command)
        logger.debug(f"Unregistered command: {command_id}")
        return True

    def get_command(self, command_id: str) -> Optional[Command]:
        return self._commands.get(command_id)

    def commands(self) -> List[Command]:
        return list(self._commands.values())

    def execute(self, command_id: str) -> bool:
        """
        Run a command's action.

        Returns:
            True if the action completed, False if it raised

        Raises:
            KeyError: If the command id is unknown
        """
        command = self._commands.get(command_id)
        if command is None:
            raise KeyError(f"Unknown command: {command_id}")
        try:
            command.callback()
            return True
        except Exception as e:
            logger.error(f"Command '{command_id}' failed: {e}")
            return False

    def __contains__(self, command_id: str) -> bool:
        return command_id in self._commands
