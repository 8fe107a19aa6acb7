"""Environment parsing for client and dev server settings."""

from __future__ import annotations

import os
import logging
from typing import Any

import orjson

from campus_chat.state import ChatUser, ClientSettings, ServerSettings
from campus_chat.config.secrets import ENV_CHAT_SERVER_USERS
from campus_chat.config.websocket import (
    ENV_CHAT_SECURE,
    ENV_CHAT_SERVER,
    DEFAULT_CHAT_SECURE,
    DEFAULT_CHAT_SERVER,
    ENV_CHAT_OPEN_TIMEOUT_S,
    ENV_CHAT_PING_INTERVAL_S,
    ENV_CHAT_MAX_MESSAGE_BYTES,
    DEFAULT_CHAT_OPEN_TIMEOUT_S,
    DEFAULT_CHAT_PING_INTERVAL_S,
    DEFAULT_CHAT_MAX_MESSAGE_BYTES,
)
from campus_chat.config.limits import (
    ENV_CHAT_OUTBOX_MAX,
    DEFAULT_CHAT_OUTBOX_MAX,
    ENV_CHAT_HISTORY_RETENTION,
    ENV_CHAT_SEND_WINDOW_SECONDS,
    ENV_CHAT_MAX_SENDS_PER_WINDOW,
    DEFAULT_CHAT_HISTORY_RETENTION,
    DEFAULT_CHAT_SEND_WINDOW_SECONDS,
    DEFAULT_CHAT_MAX_SENDS_PER_WINDOW,
)

logger = logging.getLogger(__name__)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _json_env(name: str) -> Any:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        logger.warning("%s is not valid JSON; ignoring", name)
        return None


def parse_users(raw: Any) -> dict[str, ChatUser]:
    """Build the token directory from ``{"<token>": {"id": ..., "nickname": ...}}``."""
    if not isinstance(raw, dict):
        return {}
    users: dict[str, ChatUser] = {}
    for token, entry in raw.items():
        if not isinstance(token, str) or not token.strip() or not isinstance(entry, dict):
            continue
        user_id = entry.get("id")
        nickname = entry.get("nickname")
        if not isinstance(user_id, str) or not user_id:
            continue
        users[token.strip()] = ChatUser(id=user_id, nickname=nickname if isinstance(nickname, str) else user_id)
    return users


def load_client_settings() -> ClientSettings:
    ping_interval = _float_env(ENV_CHAT_PING_INTERVAL_S, DEFAULT_CHAT_PING_INTERVAL_S)
    return ClientSettings(
        server=_str_env(ENV_CHAT_SERVER, DEFAULT_CHAT_SERVER),
        secure=_bool_env(ENV_CHAT_SECURE, DEFAULT_CHAT_SECURE),
        open_timeout_s=_float_env(ENV_CHAT_OPEN_TIMEOUT_S, DEFAULT_CHAT_OPEN_TIMEOUT_S),
        ping_interval_s=ping_interval if ping_interval > 0 else None,
        max_message_bytes=max(1024, _int_env(ENV_CHAT_MAX_MESSAGE_BYTES, DEFAULT_CHAT_MAX_MESSAGE_BYTES)),
    )


def load_server_settings() -> ServerSettings:
    return ServerSettings(
        users=parse_users(_json_env(ENV_CHAT_SERVER_USERS)),
        send_window_seconds=_float_env(ENV_CHAT_SEND_WINDOW_SECONDS, DEFAULT_CHAT_SEND_WINDOW_SECONDS),
        max_sends_per_window=_int_env(ENV_CHAT_MAX_SENDS_PER_WINDOW, DEFAULT_CHAT_MAX_SENDS_PER_WINDOW),
        outbox_max=max(1, _int_env(ENV_CHAT_OUTBOX_MAX, DEFAULT_CHAT_OUTBOX_MAX)),
        history_retention=max(1, _int_env(ENV_CHAT_HISTORY_RETENTION, DEFAULT_CHAT_HISTORY_RETENTION)),
    )


__all__ = ["load_client_settings", "load_server_settings", "parse_users"]
