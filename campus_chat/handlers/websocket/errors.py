"""Envelope output helpers for the dev server websocket."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from campus_chat.protocol import encode_envelope
from campus_chat.state import ChatPeer, Envelope, ErrorPayload
from campus_chat.config.protocol import TYPE_ERROR, PROTOCOL_VERSION

logger = logging.getLogger(__name__)


def build_envelope(
    msg_type: str,
    request_id: str | None,
    data: Any = None,
    *,
    error: ErrorPayload | None = None,
) -> str:
    envelope = Envelope(version=PROTOCOL_VERSION, type=msg_type, request_id=request_id, data=data, error=error)
    return encode_envelope(envelope).decode("utf-8")


def enqueue_envelope(peer: ChatPeer, msg_type: str, request_id: str | None, data: Any = None) -> None:
    # Direct replies are never dropped; only room broadcasts honour outbox_max.
    peer.outbox.put_nowait(build_envelope(msg_type, request_id, data))


def enqueue_error(peer: ChatPeer, request_id: str | None, code: int, message: str) -> None:
    text = build_envelope(TYPE_ERROR, request_id, error=ErrorPayload(code=code, message=message))
    peer.outbox.put_nowait(text)


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def reject_connection(
    ws: WebSocket,
    *,
    error_code: int,
    message: str,
    close_code: int,
) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        return
    text = build_envelope(TYPE_ERROR, None, error=ErrorPayload(code=error_code, message=message))
    await safe_send_text(ws, text)
    try:
        await ws.close(code=close_code, reason=message)
    except Exception:
        return


__all__ = [
    "build_envelope",
    "enqueue_envelope",
    "enqueue_error",
    "reject_connection",
    "safe_send_text",
]
