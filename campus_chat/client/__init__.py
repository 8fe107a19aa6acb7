from .room import RoomSession
from .base import Transport, TransportFactory
from .buffer import MessageBuffer
from .session import ChatSession
from .connection import ConnectionManager
from .observable import Observable
from .transport import WebSocketTransport

__all__ = [
    "ChatSession",
    "ConnectionManager",
    "MessageBuffer",
    "Observable",
    "RoomSession",
    "Transport",
    "TransportFactory",
    "WebSocketTransport",
]
