from .room import Room
from .errors import ChatError
from .intent import RequestIntent
from .origin import MessageOrigin
from .status import ConnectionStatus
from .message import ChatMessage
from .pending import PendingRequest
from .envelope import Envelope, ErrorPayload
from .records import ChatPeer, StoredMessage
from .runtime import ServerDeps
from .settings import ChatUser, ClientSettings, ServerSettings
from .snapshot import SessionSnapshot
from .error_kind import ErrorKind

__all__ = [
    "ChatError",
    "ChatMessage",
    "ChatPeer",
    "ChatUser",
    "ClientSettings",
    "ConnectionStatus",
    "Envelope",
    "ErrorKind",
    "ErrorPayload",
    "MessageOrigin",
    "PendingRequest",
    "RequestIntent",
    "Room",
    "ServerDeps",
    "ServerSettings",
    "SessionSnapshot",
    "StoredMessage",
]
