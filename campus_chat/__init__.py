"""Real-time chat session client for the campus forum."""

from .errors import DecodeError
from .client import ChatSession
from .state import ChatError, ErrorKind, ChatMessage, MessageOrigin, ClientSettings, ConnectionStatus

__all__ = [
    "ChatError",
    "ChatMessage",
    "ChatSession",
    "ClientSettings",
    "ConnectionStatus",
    "DecodeError",
    "ErrorKind",
    "MessageOrigin",
]
