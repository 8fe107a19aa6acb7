"""Dispatch handlers for inbound chat envelopes."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable

from campus_chat.errors import RateLimitError
from campus_chat.state import ChatPeer, Envelope, ServerDeps
from campus_chat.config.protocol import (
    TYPE_JOIN,
    TYPE_PING,
    TYPE_PONG,
    TYPE_SEND,
    TYPE_JOINED,
    TYPE_HISTORY,
    TYPE_MESSAGE,
    TYPE_HISTORY_RESULT,
)
from campus_chat.config.websocket import (
    WS_ERROR_NOT_JOINED,
    WS_ERROR_INVALID_JOIN,
    WS_ERROR_INVALID_SEND,
    WS_ERROR_RATE_LIMITED,
    WS_ERROR_INVALID_HISTORY,
)

from .errors import enqueue_error, build_envelope, enqueue_envelope

logger = logging.getLogger(__name__)

HandlerFn = Callable[[ChatPeer, Envelope, ServerDeps], None]


def _non_empty_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def _payload(envelope: Envelope) -> dict[str, Any]:
    return envelope.data if isinstance(envelope.data, dict) else {}


def _handle_join(peer: ChatPeer, envelope: Envelope, deps: ServerDeps) -> None:
    room_id = _non_empty_str(_payload(envelope), "roomId")
    if room_id is None:
        enqueue_error(peer, envelope.request_id, WS_ERROR_INVALID_JOIN, "invalid join payload")
        return
    deps.hub.leave(peer)
    deps.hub.join(room_id, peer)
    enqueue_envelope(peer, TYPE_JOINED, envelope.request_id, {"roomId": room_id})


def _handle_history(peer: ChatPeer, envelope: Envelope, deps: ServerDeps) -> None:
    data = _payload(envelope)
    room_id = _non_empty_str(data, "roomId")
    limit = data.get("limit", 0)
    if room_id is None or not isinstance(limit, int) or isinstance(limit, bool):
        enqueue_error(peer, envelope.request_id, WS_ERROR_INVALID_HISTORY, "invalid history payload")
        return
    items = [
        {"id": entry.id, "content": entry.content, "created_at": entry.created_at}
        for entry in deps.store.messages(room_id, limit)
    ]
    enqueue_envelope(peer, TYPE_HISTORY_RESULT, envelope.request_id, {"items": items})


def _handle_send(peer: ChatPeer, envelope: Envelope, deps: ServerDeps) -> None:
    data = _payload(envelope)
    room_id = _non_empty_str(data, "roomId")
    content = _non_empty_str(data, "content")
    if room_id is None or content is None:
        enqueue_error(peer, envelope.request_id, WS_ERROR_INVALID_SEND, "invalid send payload")
        return
    if peer.room != room_id:
        enqueue_error(peer, envelope.request_id, WS_ERROR_NOT_JOINED, "not joined")
        return
    try:
        deps.send_limiter.consume(peer.user.id)
    except RateLimitError as exc:
        enqueue_error(
            peer,
            envelope.request_id,
            WS_ERROR_RATE_LIMITED,
            f"rate limited; retry in {exc.retry_in:.1f}s",
        )
        return

    message = deps.store.add_message(room_id, peer.user.id, content)
    payload = {
        "id": message.id,
        "roomId": message.room_id,
        "sender": {"id": peer.user.id, "nickname": peer.user.nickname},
        "content": message.content,
        "created_at": message.created_at,
    }
    delivered = deps.hub.broadcast(room_id, build_envelope(TYPE_MESSAGE, None, payload))
    logger.debug("chat message %s delivered to %d peers", message.id, delivered)


def _handle_ping(peer: ChatPeer, envelope: Envelope, _deps: ServerDeps) -> None:
    enqueue_envelope(peer, TYPE_PONG, envelope.request_id)


HANDLERS: dict[str, HandlerFn] = {
    TYPE_JOIN: _handle_join,
    TYPE_HISTORY: _handle_history,
    TYPE_SEND: _handle_send,
    TYPE_PING: _handle_ping,
}

__all__ = ["HANDLERS"]
