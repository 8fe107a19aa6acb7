"""Configuration module exports (env-resolved constants only)."""

from .rooms import ROOMS, room_name
from .protocol import HISTORY_LIMIT, PROTOCOL_VERSION, MAX_BUFFERED_MESSAGES

__all__ = [
    "HISTORY_LIMIT",
    "MAX_BUFFERED_MESSAGES",
    "PROTOCOL_VERSION",
    "ROOMS",
    "room_name",
]
