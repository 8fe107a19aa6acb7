"""websockets-backed transport used by the connection manager."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import AsyncIterator

import websockets
from websockets.exceptions import ConnectionClosed

from campus_chat.state import ClientSettings
from campus_chat.config.websocket import WS_CLOSE_NORMAL_CODE

from .base import Transport, TransportFactory

logger = logging.getLogger(__name__)


class WebSocketTransport:
    """One client connection; outbound frames go through a single writer task."""

    def __init__(self, url: str, *, options: dict[str, Any] | None = None) -> None:
        self.url = url
        self._options = options or {}
        self._ws: Any = None
        self._outbound: asyncio.Queue[str] = asyncio.Queue()
        self._writer: asyncio.Task | None = None
        self.close_code: int | None = None
        self.close_reason: str = ""

    async def open(self) -> None:
        self._ws = await websockets.connect(self.url, **self._options)
        self._writer = asyncio.create_task(self._write_loop())

    def send_text(self, text: str) -> None:
        self._outbound.put_nowait(text)

    async def _write_loop(self) -> None:
        try:
            while True:
                text = await self._outbound.get()
                await self._ws.send(text)
        except ConnectionClosed:
            # The reader observes the same closure and reports it.
            return

    async def frames(self) -> AsyncIterator[str | bytes]:
        try:
            async for raw in self._ws:
                yield raw
        except ConnectionClosed as exc:
            logger.debug("chat transport closed abnormally: %s", exc)
        self.close_code = getattr(self._ws, "close_code", None)
        self.close_reason = getattr(self._ws, "close_reason", None) or ""
        logger.info("chat transport closed code=%s reason=%s", self.close_code, self.close_reason)

    async def close(self) -> None:
        if self._writer is not None:
            self._writer.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await self._writer
            self._writer = None
        if self._ws is not None:
            with contextlib.suppress(Exception):
                await self._ws.close(code=WS_CLOSE_NORMAL_CODE)


def get_ws_options(settings: ClientSettings) -> dict[str, Any]:
    return {
        "open_timeout": settings.open_timeout_s,
        "ping_interval": settings.ping_interval_s,
        "max_size": settings.max_message_bytes,
    }


def websocket_transport_factory(settings: ClientSettings) -> TransportFactory:
    options = get_ws_options(settings)

    def _factory(url: str) -> Transport:
        return WebSocketTransport(url, options=options)

    return _factory


__all__ = ["WebSocketTransport", "get_ws_options", "websocket_transport_factory"]
