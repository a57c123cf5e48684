from contextlib import contextmanager
from typing import Callable, List

from loguru import logger


class Signal:
    """
    Synchronous observer used for workspace and engine notifications.

    Subscribers are called in connection order. An exception raised by one
    subscriber is logged and does not stop delivery to the others, so a
    faulty handler can never break the host's event dispatch.
    """
    def __init__(self, name: str = "Signal"):
        self.name = name
        self._subscribers: List[Callable] = []
        self._blocked = False

    def connect(self, callback: Callable):
        """Connect a callback function to this signal."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def disconnect(self, callback: Callable):
        """Disconnect a callback function from this signal."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def disconnect_all(self):
        self._subscribers.clear()

    @property
    def subscribers(self) -> List[Callable]:
        return list(self._subscribers)

    def __len__(self) -> int:
        return len(self._subscribers)

    @contextmanager
    def blocked(self):
        """Suppress emission for the duration of the block."""
        previous = self._blocked
        self._blocked = True
        try:
            yield self
        finally:
            self._blocked = previous

    def emit(self, *args, **kwargs):
        """Broadcast arguments to all subscribers synchronously."""
        if self._blocked:
            return
        # Copy so handlers may disconnect themselves while being notified
        for sub in list(self._subscribers):
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}' error in subscriber '{sub}': {e}")
