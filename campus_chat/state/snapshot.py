"""Point-in-time view of a chat session."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ChatError
from .status import ConnectionStatus
from .message import ChatMessage


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    status: ConnectionStatus
    room_id: str | None
    messages: tuple[ChatMessage, ...]
    error: ChatError | None


__all__ = ["SessionSnapshot"]
