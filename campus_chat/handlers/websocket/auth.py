"""WebSocket authentication helpers."""

from __future__ import annotations

from fastapi import WebSocket

from campus_chat.state import ChatUser
from campus_chat.config.websocket import WS_TOKEN_QUERY_KEY


def get_token(ws: WebSocket) -> str:
    return (ws.query_params.get(WS_TOKEN_QUERY_KEY) or "").strip()


def resolve_user(token: str, users: dict[str, ChatUser]) -> ChatUser | None:
    if not token:
        return None
    return users.get(token)


async def authenticate_websocket(ws: WebSocket, users: dict[str, ChatUser]) -> ChatUser | None:
    return resolve_user(get_token(ws), users)


__all__ = ["authenticate_websocket", "get_token", "resolve_user"]
