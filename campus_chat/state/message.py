"""Chat message value object."""

from __future__ import annotations

from datetime import datetime
from dataclasses import dataclass

from .origin import MessageOrigin


@dataclass(frozen=True, slots=True)
class ChatMessage:
    id: str
    content: str
    created_at: str
    origin: MessageOrigin
    sender_id: str | None = None
    sender_name: str | None = None

    @property
    def timestamp(self) -> datetime | None:
        try:
            return datetime.fromisoformat(self.created_at)
        except (TypeError, ValueError):
            return None

    def display_time(self) -> str:
        """Local wall-clock rendering, or the raw value when it does not parse."""
        ts = self.timestamp
        if ts is None:
            return self.created_at
        if ts.tzinfo is not None:
            ts = ts.astimezone()
        return ts.strftime("%Y-%m-%d %H:%M:%S")

    @property
    def author_label(self) -> str:
        if self.sender_name:
            return self.sender_name
        return "history" if self.origin is MessageOrigin.HISTORY else "anonymous"


__all__ = ["ChatMessage"]
