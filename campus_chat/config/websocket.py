"""WebSocket endpoint configuration and constants."""

from __future__ import annotations

WS_ENDPOINT_PATH = "/ws/chat"
WS_TOKEN_QUERY_KEY = "token"

# Client environment
ENV_CHAT_SERVER = "CHAT_SERVER"
ENV_CHAT_SECURE = "CHAT_SECURE"
ENV_CHAT_OPEN_TIMEOUT_S = "CHAT_OPEN_TIMEOUT_S"
ENV_CHAT_PING_INTERVAL_S = "CHAT_PING_INTERVAL_S"
ENV_CHAT_MAX_MESSAGE_BYTES = "CHAT_MAX_MESSAGE_BYTES"

DEFAULT_CHAT_SERVER = "127.0.0.1:8080"
DEFAULT_CHAT_SECURE = False
DEFAULT_CHAT_OPEN_TIMEOUT_S = 10.0
# Protocol-level ping keeps idle proxies from reaping the socket; 0 disables.
DEFAULT_CHAT_PING_INTERVAL_S = 20.0
DEFAULT_CHAT_MAX_MESSAGE_BYTES = 1024 * 1024

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_UNAUTHORIZED_CODE = 4001

# Server errors (error.code values)
WS_ERROR_AUTH_FAILED = 1001
WS_ERROR_INVALID_MESSAGE = 3000
WS_ERROR_UNKNOWN_EVENT = 3001
WS_ERROR_INVALID_JOIN = 3002
WS_ERROR_INVALID_SEND = 3003
WS_ERROR_NOT_JOINED = 3004
WS_ERROR_INVALID_HISTORY = 3005
WS_ERROR_RATE_LIMITED = 3006

__all__ = [
    "DEFAULT_CHAT_MAX_MESSAGE_BYTES",
    "DEFAULT_CHAT_OPEN_TIMEOUT_S",
    "DEFAULT_CHAT_PING_INTERVAL_S",
    "DEFAULT_CHAT_SECURE",
    "DEFAULT_CHAT_SERVER",
    "ENV_CHAT_MAX_MESSAGE_BYTES",
    "ENV_CHAT_OPEN_TIMEOUT_S",
    "ENV_CHAT_PING_INTERVAL_S",
    "ENV_CHAT_SECURE",
    "ENV_CHAT_SERVER",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_UNAUTHORIZED_CODE",
    "WS_ENDPOINT_PATH",
    "WS_ERROR_AUTH_FAILED",
    "WS_ERROR_INVALID_HISTORY",
    "WS_ERROR_INVALID_JOIN",
    "WS_ERROR_INVALID_MESSAGE",
    "WS_ERROR_INVALID_SEND",
    "WS_ERROR_NOT_JOINED",
    "WS_ERROR_RATE_LIMITED",
    "WS_ERROR_UNKNOWN_EVENT",
    "WS_TOKEN_QUERY_KEY",
]
