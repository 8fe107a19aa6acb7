"""Dev server records (dataclasses only)."""

from __future__ import annotations

import asyncio
from dataclasses import field, dataclass

from .settings import ChatUser


@dataclass(frozen=True, slots=True)
class StoredMessage:
    id: str
    room_id: str
    sender_id: str
    content: str
    created_at: str


@dataclass(slots=True, eq=False)
class ChatPeer:
    """One connected websocket client; compared and hashed by identity."""

    user: ChatUser
    outbox_max: int
    room: str | None = None
    outbox: asyncio.Queue[str] = field(default_factory=asyncio.Queue)


__all__ = ["ChatPeer", "StoredMessage"]
