"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class ClientSettings:
    server: str
    secure: bool
    open_timeout_s: float
    ping_interval_s: float | None
    max_message_bytes: int


@dataclass(frozen=True, slots=True)
class ChatUser:
    id: str
    nickname: str


@dataclass(frozen=True, slots=True)
class ServerSettings:
    users: dict[str, ChatUser] = field(default_factory=dict)
    send_window_seconds: float = 10.0
    max_sends_per_window: int = 20
    outbox_max: int = 16
    history_retention: int = 1000


__all__ = ["ChatUser", "ClientSettings", "ServerSettings"]
