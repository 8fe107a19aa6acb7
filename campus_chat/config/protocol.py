"""Chat envelope protocol constants."""

from __future__ import annotations

PROTOCOL_VERSION = 1

# Envelope keys
ENV_KEY_VERSION = "v"
ENV_KEY_TYPE = "type"
ENV_KEY_REQUEST_ID = "requestId"
ENV_KEY_DATA = "data"
ENV_KEY_ERROR = "error"

# Client -> server types
TYPE_JOIN = "chat.join"
TYPE_HISTORY = "chat.history"
TYPE_SEND = "chat.send"
TYPE_PING = "system.ping"

# Server -> client types
TYPE_JOINED = "chat.joined"
TYPE_HISTORY_RESULT = "chat.history.result"
TYPE_MESSAGE = "chat.message"
TYPE_ERROR = "error"
TYPE_CONNECTED = "system.connected"
TYPE_PONG = "system.pong"

# Session bounds
HISTORY_LIMIT = 50
MAX_BUFFERED_MESSAGES = 200
# chat.send has no correlated success reply, so pending entries need a ceiling.
MAX_PENDING_REQUESTS = 100

# User-facing error texts
MSG_MISSING_CREDENTIAL = "no login token found; sign in first"
MSG_DECODE_FAILED = "message parse failed"
MSG_TRANSPORT_FAILED = "chat connection failed; reconnect to retry"
MSG_TRANSPORT_CLOSED = "chat connection closed"
MSG_NOT_READY = "not connected to chat yet; try again shortly"
MSG_NO_ROOM = "join a room before sending"
MSG_PROTOCOL_FALLBACK = "chat server reported an error"

__all__ = [
    "ENV_KEY_DATA",
    "ENV_KEY_ERROR",
    "ENV_KEY_REQUEST_ID",
    "ENV_KEY_TYPE",
    "ENV_KEY_VERSION",
    "HISTORY_LIMIT",
    "MAX_BUFFERED_MESSAGES",
    "MAX_PENDING_REQUESTS",
    "MSG_DECODE_FAILED",
    "MSG_MISSING_CREDENTIAL",
    "MSG_NOT_READY",
    "MSG_NO_ROOM",
    "MSG_PROTOCOL_FALLBACK",
    "MSG_TRANSPORT_CLOSED",
    "MSG_TRANSPORT_FAILED",
    "PROTOCOL_VERSION",
    "TYPE_CONNECTED",
    "TYPE_ERROR",
    "TYPE_HISTORY",
    "TYPE_HISTORY_RESULT",
    "TYPE_JOIN",
    "TYPE_JOINED",
    "TYPE_MESSAGE",
    "TYPE_PING",
    "TYPE_PONG",
    "TYPE_SEND",
]
