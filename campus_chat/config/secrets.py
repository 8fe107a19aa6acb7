"""Credential configuration."""

from __future__ import annotations

import os

ENV_CHAT_TOKEN = "CHAT_TOKEN"
ENV_CHAT_SERVER_USERS = "CHAT_SERVER_USERS"


def get_chat_token() -> str | None:
    token = (os.getenv(ENV_CHAT_TOKEN) or "").strip()
    return token or None


__all__ = ["ENV_CHAT_SERVER_USERS", "ENV_CHAT_TOKEN", "get_chat_token"]
