"""Transport lifecycle state machine for one chat session.

``idle -> connecting -> ready -> error``, with ``connect()`` as the only way
out of ``error``. Every opened transport is tagged with a generation number;
events from a transport that has since been replaced are ignored, so at most
one transport ever drives the status.
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable

from campus_chat.protocol import encode_envelope
from campus_chat.state import Envelope, ChatError, ErrorKind, ConnectionStatus
from campus_chat.config.protocol import MSG_TRANSPORT_CLOSED, MSG_TRANSPORT_FAILED, MSG_MISSING_CREDENTIAL

from .base import Transport, TransportFactory
from .observable import Observable

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]
UrlBuilder = Callable[[str], str]


class ConnectionManager:
    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        url_builder: UrlBuilder,
        transport_factory: TransportFactory,
        on_frame: Callable[[str | bytes], None] | None = None,
        on_error: Callable[[ChatError], None] | None = None,
    ) -> None:
        self._token_provider = token_provider
        self._url_builder = url_builder
        self._transport_factory = transport_factory
        self._on_frame = on_frame
        self._on_error = on_error
        self.status: Observable[ConnectionStatus] = Observable(ConnectionStatus.IDLE)
        self.last_error: ChatError | None = None
        self._generation = 0
        self._transport: Transport | None = None
        self._task: asyncio.Task | None = None
        self._retired: set[asyncio.Task] = set()

    def connect(self) -> bool:
        """Replace any current transport with a fresh one.

        Must be called from inside the running event loop. Returns ``False``
        when no credential is available; the status is then ``error``.
        """
        self._teardown()
        token = (self._token_provider() or "").strip()
        if not token:
            logger.warning("chat connect skipped: no credential available")
            self._fail(ChatError(kind=ErrorKind.MISSING_CREDENTIAL, message=MSG_MISSING_CREDENTIAL))
            return False

        generation = self._generation
        transport = self._transport_factory(self._url_builder(token))
        self._transport = transport
        self.last_error = None
        self.status.set(ConnectionStatus.CONNECTING)
        self._task = asyncio.get_running_loop().create_task(self._run(generation, transport))
        return True

    def disconnect(self) -> None:
        self._teardown()
        self.last_error = None
        self.status.set(ConnectionStatus.IDLE)

    async def wait_closed(self) -> None:
        """Wait until replaced or disconnected transports have finished closing."""
        if self._retired:
            await asyncio.gather(*self._retired, return_exceptions=True)

    def send(self, envelope: Envelope) -> bool:
        if self.status.value is not ConnectionStatus.READY or self._transport is None:
            return False
        self._transport.send_text(encode_envelope(envelope).decode("utf-8"))
        return True

    def _teardown(self) -> None:
        # Bumping the generation first makes any late events from the old transport stale.
        self._generation += 1
        task, self._task = self._task, None
        self._transport = None
        if task is not None and not task.done():
            task.cancel()
            self._retired.add(task)
            task.add_done_callback(self._reap)

    def _reap(self, task: asyncio.Task) -> None:
        self._retired.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.debug("retired chat transport task failed: %s", task.exception())

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _fail(self, error: ChatError) -> None:
        self._transport = None
        self.last_error = error
        self.status.set(ConnectionStatus.ERROR)
        if self._on_error is not None:
            self._on_error(error)

    async def _run(self, generation: int, transport: Transport) -> None:
        try:
            try:
                await transport.open()
            except Exception as exc:
                logger.warning("chat transport failed to open: %s", exc)
                if self._is_current(generation):
                    self._fail(ChatError(kind=ErrorKind.TRANSPORT, message=MSG_TRANSPORT_FAILED))
                return

            if not self._is_current(generation):
                return
            logger.info("chat transport ready")
            self.status.set(ConnectionStatus.READY)

            try:
                async for raw in transport.frames():
                    if not self._is_current(generation):
                        return
                    if self._on_frame is not None:
                        self._on_frame(raw)
            except Exception as exc:
                logger.warning("chat transport errored: %s", exc)
                if self._is_current(generation):
                    self._fail(ChatError(kind=ErrorKind.TRANSPORT, message=MSG_TRANSPORT_FAILED))
                return

            if self._is_current(generation):
                self._fail(ChatError(kind=ErrorKind.TRANSPORT, message=MSG_TRANSPORT_CLOSED))
        finally:
            with contextlib.suppress(Exception):
                await transport.close()


__all__ = ["ConnectionManager", "TokenProvider", "UrlBuilder"]
