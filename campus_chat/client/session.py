"""Public chat session surface consumed by UI layers."""

from __future__ import annotations

import logging
from functools import partial

from campus_chat.errors import DecodeError
from campus_chat.protocol import decode
from campus_chat.state import ChatError, ErrorKind, ChatMessage, ClientSettings, SessionSnapshot, ConnectionStatus
from campus_chat.config.protocol import (
    HISTORY_LIMIT,
    MSG_NO_ROOM,
    MSG_NOT_READY,
    MSG_DECODE_FAILED,
    MAX_BUFFERED_MESSAGES,
)

from .room import RoomSession
from .base import TransportFactory
from .network import build_chat_url
from .transport import websocket_transport_factory
from .connection import TokenProvider, ConnectionManager
from .observable import Observable

logger = logging.getLogger(__name__)


class ChatSession:
    """Wires the connection manager, room session and envelope codec together.

    All operations return immediately; results surface through ``status``,
    ``messages`` and ``error``, which update synchronously as events are
    processed. Methods must be called from inside the running event loop.
    """

    def __init__(
        self,
        settings: ClientSettings,
        *,
        token_provider: TokenProvider,
        transport_factory: TransportFactory | None = None,
        history_limit: int = HISTORY_LIMIT,
        capacity: int = MAX_BUFFERED_MESSAGES,
    ) -> None:
        # Repeated identical errors are still reported.
        self.error: Observable[ChatError | None] = Observable(None, distinct=False)
        self._deferred_room: str | None = None
        self._connection = ConnectionManager(
            token_provider=token_provider,
            url_builder=partial(build_chat_url, settings.server, settings.secure),
            transport_factory=transport_factory or websocket_transport_factory(settings),
            on_frame=self._on_frame,
            on_error=self._report,
        )
        self._room = RoomSession(
            self._connection.send,
            history_limit=history_limit,
            capacity=capacity,
            on_error=self._report,
        )
        self._connection.status.subscribe(self._on_status)

    @property
    def status(self) -> Observable[ConnectionStatus]:
        return self._connection.status

    @property
    def messages(self) -> Observable[tuple[ChatMessage, ...]]:
        return self._room.messages

    @property
    def room_id(self) -> str | None:
        return self._room.room_id

    @property
    def user_id(self) -> str | None:
        return self._room.user_id

    @property
    def pending_room(self) -> str | None:
        return self._deferred_room

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            status=self.status.value,
            room_id=self._room.room_id,
            messages=self._room.messages.value,
            error=self.error.value,
        )

    def connect(self) -> bool:
        if self.status.value in {ConnectionStatus.CONNECTING, ConnectionStatus.READY}:
            return True
        return self._connection.connect()

    def reconnect(self) -> bool:
        return self._connection.connect()

    def disconnect(self) -> None:
        self._deferred_room = None
        self._connection.disconnect()
        self._room.reset()
        self._clear_error()

    async def wait_closed(self) -> None:
        await self._connection.wait_closed()

    def switch_room(self, room_id: str) -> bool:
        """Join ``room_id`` now, or once the next connect reaches ``ready``.

        Returns ``True`` only when the join sequence was sent immediately.
        """
        room_id = (room_id or "").strip()
        if not room_id:
            return False
        if self.status.value is not ConnectionStatus.READY:
            self._deferred_room = room_id
            return False
        self._deferred_room = None
        return self._room.join(room_id)

    def send(self, text: str) -> bool:
        content = (text or "").strip()
        if not content:
            return False
        if self.status.value is not ConnectionStatus.READY:
            self._report(ChatError(kind=ErrorKind.SEND_REJECTED, message=MSG_NOT_READY))
            return False
        if not self._room.send_text(content):
            self._report(ChatError(kind=ErrorKind.SEND_REJECTED, message=MSG_NO_ROOM))
            return False
        return True

    def ping(self) -> bool:
        if self.status.value is not ConnectionStatus.READY:
            return False
        return self._room.ping()

    def _report(self, error: ChatError) -> None:
        self.error.set(error)

    def _clear_error(self) -> None:
        if self.error.value is not None:
            self.error.set(None)

    def _on_status(self, status: ConnectionStatus) -> None:
        if status is ConnectionStatus.CONNECTING:
            self._room.detach()
            self._clear_error()
            return
        if status is ConnectionStatus.ERROR:
            self._room.detach()
            return
        if status is ConnectionStatus.READY and self._deferred_room is not None:
            room_id, self._deferred_room = self._deferred_room, None
            logger.info("joining deferred room=%s", room_id)
            self._room.join(room_id)

    def _on_frame(self, raw: str | bytes) -> None:
        try:
            self._room.handle(decode(raw))
        except DecodeError as exc:
            logger.warning("discarding chat frame: %s", exc)
            self._report(ChatError(kind=ErrorKind.DECODE, message=MSG_DECODE_FAILED))


__all__ = ["ChatSession"]
