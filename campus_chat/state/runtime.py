"""Typed runtime state objects for dev server wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from campus_chat.handlers.hub import RoomHub
    from campus_chat.handlers.store import MessageStore
    from campus_chat.state.settings import ServerSettings
    from campus_chat.handlers.limits import SlidingWindowRateLimiter


@dataclass(slots=True)
class ServerDeps:
    hub: RoomHub
    store: MessageStore
    send_limiter: SlidingWindowRateLimiter
    settings: ServerSettings


__all__ = ["ServerDeps"]
