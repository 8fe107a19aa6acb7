"""Transport contract consumed by the connection manager."""

from __future__ import annotations

from typing import Protocol
from collections.abc import Callable, AsyncIterator


class Transport(Protocol):
    """A single bidirectional text-frame connection.

    ``frames()`` ends when the peer closes; any other failure propagates.
    """

    async def open(self) -> None: ...

    def send_text(self, text: str) -> None: ...

    def frames(self) -> AsyncIterator[str | bytes]: ...

    async def close(self) -> None: ...


TransportFactory = Callable[[str], Transport]

__all__ = ["Transport", "TransportFactory"]
