"""Capacity-bounded message buffer for the joined room."""

from __future__ import annotations

import collections
from collections.abc import Iterable

from campus_chat.state import ChatMessage
from campus_chat.config.protocol import MAX_BUFFERED_MESSAGES


class MessageBuffer:
    """Oldest-first queue that evicts from the head once full.

    Eviction follows arrival order, never access order.
    """

    def __init__(self, capacity: int = MAX_BUFFERED_MESSAGES) -> None:
        self.capacity = max(1, int(capacity))
        self._items: collections.deque[ChatMessage] = collections.deque(maxlen=self.capacity)

    def __len__(self) -> int:
        return len(self._items)

    def append(self, message: ChatMessage) -> None:
        self._items.append(message)

    def replace(self, messages: Iterable[ChatMessage]) -> None:
        self._items.clear()
        self._items.extend(messages)

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> tuple[ChatMessage, ...]:
        return tuple(self._items)


__all__ = ["MessageBuffer"]
