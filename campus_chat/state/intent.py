"""What an outbound request was for, used to route its reply."""

from __future__ import annotations

from enum import StrEnum


class RequestIntent(StrEnum):
    JOIN = "join"
    HISTORY = "history"
    SEND = "send"
    PING = "ping"


__all__ = ["RequestIntent"]
