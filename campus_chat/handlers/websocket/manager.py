"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from fastapi import WebSocket, WebSocketDisconnect

from campus_chat.errors import DecodeError
from campus_chat.protocol import decode
from campus_chat.state import ChatPeer, ServerDeps
from campus_chat.config.protocol import TYPE_CONNECTED
from campus_chat.config.websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_ERROR_AUTH_FAILED,
    WS_ERROR_UNKNOWN_EVENT,
    WS_ERROR_INVALID_MESSAGE,
    WS_CLOSE_UNAUTHORIZED_CODE,
)

from .auth import authenticate_websocket
from .errors import enqueue_error, safe_send_text, enqueue_envelope, reject_connection
from .dispatch import HANDLERS

logger = logging.getLogger(__name__)


async def _write_loop(ws: WebSocket, peer: ChatPeer) -> None:
    while True:
        text = await peer.outbox.get()
        if not await safe_send_text(ws, text):
            return


async def _receive_frame(ws: WebSocket) -> str | bytes:
    # Binary frames carry JSON too.
    message = await ws.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", WS_CLOSE_NORMAL_CODE), message.get("reason"))
    text = message.get("text")
    if text is not None:
        return text
    return message.get("bytes") or b""


async def run_message_loop(ws: WebSocket, peer: ChatPeer, deps: ServerDeps) -> None:
    try:
        while True:
            raw = await _receive_frame(ws)
            try:
                envelope = decode(raw)
            except DecodeError as exc:
                enqueue_error(peer, None, WS_ERROR_INVALID_MESSAGE, str(exc))
                continue

            handler = HANDLERS.get(envelope.type)
            if handler is None:
                enqueue_error(peer, envelope.request_id, WS_ERROR_UNKNOWN_EVENT, "unknown event")
                continue
            handler(peer, envelope, deps)
    except WebSocketDisconnect:
        return


async def handle_websocket_connection(ws: WebSocket, deps: ServerDeps) -> None:
    user = await authenticate_websocket(ws, deps.settings.users)
    if user is None:
        await reject_connection(
            ws,
            error_code=WS_ERROR_AUTH_FAILED,
            message="invalid token",
            close_code=WS_CLOSE_UNAUTHORIZED_CODE,
        )
        return

    await ws.accept()
    peer = ChatPeer(user=user, outbox_max=deps.settings.outbox_max)
    writer = asyncio.create_task(_write_loop(ws, peer))
    logger.info("chat connection accepted user=%s", user.id)
    try:
        enqueue_envelope(peer, TYPE_CONNECTED, None, {"userId": user.id})
        await run_message_loop(ws, peer, deps)
    finally:
        deps.hub.leave(peer)
        deps.send_limiter.release(user.id)
        writer.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await writer
        logger.info("chat connection closed user=%s", user.id)


__all__ = ["handle_websocket_connection", "run_message_loop"]
