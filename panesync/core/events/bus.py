"""
EventBus - named publish/subscribe channel.

The linking engine announces link lifecycle and propagation through the
bus when one is registered with the service locator, so that panels and
status widgets can react without holding a reference to the engine.
"""
import asyncio
import inspect
from typing import Any, Callable, Dict, List
from loguru import logger

from panesync.core.base_system import BaseSystem


class EventBus(BaseSystem):
    """
    Application-wide pub/sub.

    Usage:
        event_bus.subscribe(Events.LINK_CREATED, on_link_created)
        event_bus.publish_sync(Events.LINK_CREATED, {"panes": (a.id, b.id)})
    """

    def __init__(self, locator, config):
        super().__init__(locator, config)
        self._subscribers: Dict[str, List[Callable]] = {}

    async def initialize(self):
        logger.info("EventBus initialized")
        await super().initialize()

    async def shutdown(self):
        self._subscribers.clear()
        await super().shutdown()

    def subscribe(self, event: str, handler: Callable) -> None:
        """
        Subscribe to an event.

        Args:
            event: Event name (e.g., "link.created")
            handler: Callback function (sync or async)
        """
        handlers = self._subscribers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Subscribed to {event}: {getattr(handler, '__name__', handler)}")

    def unsubscribe(self, event: str, handler: Callable) -> None:
        if event in self._subscribers and handler in self._subscribers[event]:
            self._subscribers[event].remove(handler)
            logger.debug(f"Unsubscribed from {event}: {getattr(handler, '__name__', handler)}")

    async def publish(self, event: str, data: Any = None) -> None:
        """
        Publish an event to all subscribers, awaiting async handlers.

        Args:
            event: Event name
            data: Optional payload passed to handlers
        """
        for handler in list(self._subscribers.get(event, [])):
            try:
                if inspect.iscoroutinefunction(handler):
                    await handler(data)
                else:
                    handler(data)
            except Exception as e:
                logger.error(f"Error in handler for {event}: {e}")

    def publish_sync(self, event: str, data: Any = None) -> None:
        """
        Publish from synchronous code (workspace callbacks, Qt slots).

        Async handlers are scheduled on the running loop; without a running
        loop they are skipped with a warning.
        """
        for handler in list(self._subscribers.get(event, [])):
            try:
                if inspect.iscoroutinefunction(handler):
                    try:
                        loop = asyncio.get_running_loop()
                    except RuntimeError:
                        logger.warning(f"No running loop for async handler of {event}")
                        continue
                    loop.create_task(handler(data))
                else:
                    handler(data)
            except Exception as e:
                logger.error(f"Error in sync handler for {event}: {e}")
