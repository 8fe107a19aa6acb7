"""In-memory per-room message history for the dev server."""

from __future__ import annotations

import itertools
import collections
from datetime import datetime, timezone

from campus_chat.state import StoredMessage


def _now_rfc3339() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class MessageStore:
    """Keeps the newest ``retention`` messages of each room, oldest first."""

    def __init__(self, *, retention: int) -> None:
        self._retention = max(1, int(retention))
        self._rooms: dict[str, collections.deque[StoredMessage]] = {}
        self._seq = itertools.count(1)

    def add_message(self, room_id: str, sender_id: str, content: str) -> StoredMessage:
        message = StoredMessage(
            id=f"m_{next(self._seq)}",
            room_id=room_id,
            sender_id=sender_id,
            content=content,
            created_at=_now_rfc3339(),
        )
        room = self._rooms.setdefault(room_id, collections.deque(maxlen=self._retention))
        room.append(message)
        return message

    def messages(self, room_id: str, limit: int) -> list[StoredMessage]:
        """Return the last ``limit`` messages ascending (all of them if ``limit <= 0``)."""
        room = self._rooms.get(room_id)
        if not room:
            return []
        items = list(room)
        if limit > 0:
            items = items[-limit:]
        return items


__all__ = ["MessageStore"]
