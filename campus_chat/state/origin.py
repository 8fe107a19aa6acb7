"""Where a chat message entered the session from."""

from __future__ import annotations

from enum import StrEnum


class MessageOrigin(StrEnum):
    HISTORY = "history"
    LIVE = "live"


__all__ = ["MessageOrigin"]
