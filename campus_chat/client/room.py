"""Room membership handshake and the joined room's message buffer.

Each ``join`` starts a new generation. Correlations recorded under an older
generation are discarded at switch time, so replies to a previous room's
requests find no pending entry and are dropped.
"""

from __future__ import annotations

import logging
import collections
from typing import Any
from collections.abc import Callable

from campus_chat.errors import DecodeError
from campus_chat.protocol import build_request, payload_room_id, parse_live_message, parse_history_items
from campus_chat.state import Envelope, ChatError, ErrorKind, ChatMessage, RequestIntent, PendingRequest
from campus_chat.config.protocol import (
    TYPE_JOIN,
    TYPE_PING,
    TYPE_PONG,
    TYPE_SEND,
    TYPE_ERROR,
    TYPE_JOINED,
    TYPE_HISTORY,
    TYPE_MESSAGE,
    HISTORY_LIMIT,
    TYPE_CONNECTED,
    TYPE_HISTORY_RESULT,
    MAX_PENDING_REQUESTS,
    MAX_BUFFERED_MESSAGES,
    MSG_PROTOCOL_FALLBACK,
)

from .buffer import MessageBuffer
from .observable import Observable

logger = logging.getLogger(__name__)

SendFn = Callable[[Envelope], bool]

# The server never answers a successful chat.send, so these are the only
# entries that may be evicted to make room.
EVICTABLE_INTENTS = frozenset({RequestIntent.SEND, RequestIntent.PING})


class RoomSession:
    def __init__(
        self,
        send: SendFn,
        *,
        history_limit: int = HISTORY_LIMIT,
        capacity: int = MAX_BUFFERED_MESSAGES,
        max_pending: int = MAX_PENDING_REQUESTS,
        on_error: Callable[[ChatError], None] | None = None,
    ) -> None:
        self._send = send
        self._history_limit = history_limit
        self._max_pending = max(1, int(max_pending))
        self._on_error = on_error
        self._buffer = MessageBuffer(capacity)
        self._pending: dict[str, PendingRequest] = {}
        self._superseded: collections.deque[str] = collections.deque(maxlen=self._max_pending)
        self._generation = 0
        self.room_id: str | None = None
        self.joined = False
        self.user_id: str | None = None
        self.messages: Observable[tuple[ChatMessage, ...]] = Observable(())
        self._handlers: dict[str, Callable[[Envelope], None]] = {
            TYPE_JOINED: self._handle_joined,
            TYPE_HISTORY_RESULT: self._handle_history_result,
            TYPE_MESSAGE: self._handle_message,
            TYPE_ERROR: self._handle_error,
            TYPE_CONNECTED: self._handle_connected,
            TYPE_PONG: self._handle_pong,
        }

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def join(self, room_id: str) -> bool:
        """Reset to ``room_id`` and request membership plus recent history.

        The buffer is cleared before anything goes on the wire.
        """
        self._invalidate()
        self.room_id = room_id
        self._buffer.clear()
        self._publish()
        joined = self._request(RequestIntent.JOIN, TYPE_JOIN, {"roomId": room_id})
        fetched = self._request(
            RequestIntent.HISTORY,
            TYPE_HISTORY,
            {"roomId": room_id, "limit": self._history_limit},
        )
        return joined and fetched

    def send_text(self, content: str) -> bool:
        if self.room_id is None:
            return False
        return self._request(RequestIntent.SEND, TYPE_SEND, {"roomId": self.room_id, "content": content})

    def ping(self) -> bool:
        return self._request(RequestIntent.PING, TYPE_PING, None)

    def detach(self) -> None:
        """Forget the joined room after transport loss; messages stay visible."""
        self._invalidate()
        self.room_id = None

    def reset(self) -> None:
        self.detach()
        self.user_id = None
        self._buffer.clear()
        self._publish()

    def handle(self, envelope: Envelope) -> None:
        handler = self._handlers.get(envelope.type)
        if handler is None:
            logger.debug("ignoring chat envelope type=%s", envelope.type)
            return
        handler(envelope)

    def _invalidate(self) -> None:
        self._generation += 1
        self._superseded.extend(self._pending)
        self._pending.clear()
        self.joined = False

    def _evict_one(self) -> None:
        """Drop the oldest send/ping entry; join and history stay until answered."""
        victim = next(
            (rid for rid, pending in self._pending.items() if pending.intent in EVICTABLE_INTENTS),
            None,
        )
        if victim is None:
            victim = next(iter(self._pending))
        del self._pending[victim]

    def _request(self, intent: RequestIntent, msg_type: str, data: Any) -> bool:
        envelope = build_request(msg_type, data)
        if not self._send(envelope):
            return False
        if len(self._pending) >= self._max_pending:
            self._evict_one()
        self._pending[envelope.request_id] = PendingRequest(
            intent=intent,
            room_id=self.room_id,
            generation=self._generation,
        )
        return True

    def _claim(self, envelope: Envelope, intent: RequestIntent) -> PendingRequest | None:
        """Pop the pending entry answered by ``envelope`` if it is current and of ``intent``."""
        if envelope.request_id is None:
            return None
        pending = self._pending.get(envelope.request_id)
        if pending is None or pending.intent is not intent or pending.generation != self._generation:
            return None
        del self._pending[envelope.request_id]
        return pending

    def _publish(self) -> None:
        self.messages.set(self._buffer.snapshot())

    def _handle_joined(self, envelope: Envelope) -> None:
        if self._claim(envelope, RequestIntent.JOIN) is None:
            logger.debug("dropping stale join ack request_id=%s", envelope.request_id)
            return
        self.joined = True

    def _handle_history_result(self, envelope: Envelope) -> None:
        if self._claim(envelope, RequestIntent.HISTORY) is None:
            logger.debug("dropping stale history result request_id=%s", envelope.request_id)
            return
        self._buffer.replace(parse_history_items(envelope.data))
        self._publish()

    def _handle_message(self, envelope: Envelope) -> None:
        if self.room_id is None:
            return
        target = payload_room_id(envelope.data)
        if target is not None and target != self.room_id:
            logger.debug("dropping live message for room=%s while in room=%s", target, self.room_id)
            return
        self._buffer.append(parse_live_message(envelope.data))
        self._publish()

    def _handle_error(self, envelope: Envelope) -> None:
        if envelope.request_id is not None:
            if envelope.request_id in self._superseded:
                logger.debug("dropping error for superseded request_id=%s", envelope.request_id)
                return
            self._pending.pop(envelope.request_id, None)
        payload = envelope.error
        error = ChatError(
            kind=ErrorKind.PROTOCOL,
            message=payload.message if payload is not None and payload.message else MSG_PROTOCOL_FALLBACK,
            code=payload.code if payload is not None else None,
        )
        logger.info("chat server error code=%s message=%s", error.code, error.message)
        if self._on_error is not None:
            self._on_error(error)

    def _handle_connected(self, envelope: Envelope) -> None:
        data = envelope.data if isinstance(envelope.data, dict) else {}
        user_id = data.get("userId")
        if not isinstance(user_id, str):
            raise DecodeError("system.connected missing 'userId'")
        self.user_id = user_id

    def _handle_pong(self, envelope: Envelope) -> None:
        self._claim(envelope, RequestIntent.PING)


__all__ = ["RoomSession"]
