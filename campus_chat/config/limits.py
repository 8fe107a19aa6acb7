"""Dev server admission and retention limits."""

from __future__ import annotations

ENV_CHAT_SEND_WINDOW_SECONDS = "CHAT_SEND_WINDOW_SECONDS"
ENV_CHAT_MAX_SENDS_PER_WINDOW = "CHAT_MAX_SENDS_PER_WINDOW"
ENV_CHAT_OUTBOX_MAX = "CHAT_OUTBOX_MAX"
ENV_CHAT_HISTORY_RETENTION = "CHAT_HISTORY_RETENTION"

DEFAULT_CHAT_SEND_WINDOW_SECONDS = 10.0
DEFAULT_CHAT_MAX_SENDS_PER_WINDOW = 20
# Mirrors a small per-client send channel; slow readers drop broadcasts.
DEFAULT_CHAT_OUTBOX_MAX = 16
DEFAULT_CHAT_HISTORY_RETENTION = 1000

__all__ = [
    "DEFAULT_CHAT_HISTORY_RETENTION",
    "DEFAULT_CHAT_MAX_SENDS_PER_WINDOW",
    "DEFAULT_CHAT_OUTBOX_MAX",
    "DEFAULT_CHAT_SEND_WINDOW_SECONDS",
    "ENV_CHAT_HISTORY_RETENTION",
    "ENV_CHAT_MAX_SENDS_PER_WINDOW",
    "ENV_CHAT_OUTBOX_MAX",
    "ENV_CHAT_SEND_WINDOW_SECONDS",
]
