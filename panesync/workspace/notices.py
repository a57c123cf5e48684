"""
Transient user notices.

A notice is a short, non-blocking message. The view decides how to show
it (status bar, toast); the center only keeps a bounded history.
"""
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List

from loguru import logger

from panesync.core.events import Signal


@dataclass(frozen=True)
class Notice:
    message: str
    timeout_ms: int = 4000
    created_at: float = field(default_factory=time.time)


class NoticeCenter:
    """Collects notices and broadcasts them to the view."""

    def __init__(self, history_size: int = 50):
        self._history: Deque[Notice] = deque(maxlen=history_size)
        self.on_notice = Signal("Notice")

    def show(self, message: str, timeout_ms: int = 4000) -> Notice:
        notice = Notice(message, timeout_ms)
        self._history.append(notice)
        logger.info(f"Notice: {message}")
        self.on_notice.emit(notice)
        return notice

    @property
    def history(self) -> List[Notice]:
        return list(self._history)

    @property
    def messages(self) -> List[str]:
        return [notice.message for notice in self._history]

    def clear(self) -> None:
        self._history.clear()
