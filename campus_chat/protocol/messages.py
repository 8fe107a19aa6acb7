"""Conversion of chat payloads into :class:`ChatMessage` values."""

from __future__ import annotations

from typing import Any

from campus_chat.errors import DecodeError
from campus_chat.state import ChatMessage, MessageOrigin


def _require_str(entry: dict[str, Any], key: str) -> str:
    value = entry.get(key)
    # Store ids may arrive as numbers from some backends.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise DecodeError(f"chat message missing string '{key}'")
    return value


def _parse_entry(entry: Any, origin: MessageOrigin) -> ChatMessage:
    if not isinstance(entry, dict):
        raise DecodeError("chat message must be an object")

    sender_id: str | None = None
    sender_name: str | None = None
    sender = entry.get("sender")
    if isinstance(sender, dict):
        raw_id = sender.get("id")
        raw_name = sender.get("nickname")
        sender_id = raw_id if isinstance(raw_id, str) and raw_id else None
        sender_name = raw_name if isinstance(raw_name, str) and raw_name else None

    return ChatMessage(
        id=_require_str(entry, "id"),
        content=_require_str(entry, "content"),
        created_at=_require_str(entry, "created_at"),
        origin=origin,
        sender_id=sender_id,
        sender_name=sender_name,
    )


def parse_history_items(data: Any) -> list[ChatMessage]:
    """Parse a ``chat.history.result`` payload, keeping delivery order."""
    if data is None:
        return []
    if not isinstance(data, dict):
        raise DecodeError("history payload must be an object")
    items = data.get("items")
    if items is None:
        return []
    if not isinstance(items, list):
        raise DecodeError("history 'items' must be a list")
    return [_parse_entry(entry, MessageOrigin.HISTORY) for entry in items]


def parse_live_message(data: Any) -> ChatMessage:
    return _parse_entry(data, MessageOrigin.LIVE)


def payload_room_id(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    room_id = data.get("roomId")
    return room_id if isinstance(room_id, str) and room_id else None


__all__ = ["parse_history_items", "parse_live_message", "payload_room_id"]
