"""
Context menu model.

Plugins receive a Menu through the workspace's file_menu signal and add
items to it; the view layer renders the result.
"""
from typing import Callable, List, Optional

from loguru import logger


class MenuItem:
    """Single menu entry with a fluent setter API."""

    def __init__(self):
        self.title = ""
        self.icon: Optional[str] = None
        self.callback: Optional[Callable[[], None]] = None

    def set_title(self, title: str) -> 'MenuItem':
        self.title = title
        return self

    def set_icon(self, icon: str) -> 'MenuItem':
        self.icon = icon
        return self

    def on_click(self, callback: Callable[[], None]) -> 'MenuItem':
        self.callback = callback
        return self

    def click(self) -> None:
        if self.callback is None:
            logger.debug(f"Menu item '{self.title}' has no action")
            return
        try:
            self.callback()
        except Exception as e:
            logger.error(f"Menu item '{self.title}' failed: {e}")


class Menu:
    def __init__(self):
        self.items: List[MenuItem] = []

    def add_item(self, builder: Callable[[MenuItem], object]) -> MenuItem:
        """Create an item and let the caller configure it."""
        item = MenuItem()
        builder(item)
        self.items.append(item)
        return item

    def find(self, title: str) -> Optional[MenuItem]:
        for item in self.items:
            if item.title == title:
                return item
        return None

    def titles(self) -> List[str]:
        return [item.title for item in self.items]

    def __len__(self) -> int:
        return len(self.items)
