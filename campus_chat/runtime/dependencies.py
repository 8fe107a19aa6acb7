"""Dev server dependency construction."""

from __future__ import annotations

import logging

from campus_chat.state import ServerDeps, ServerSettings
from campus_chat.handlers.hub import RoomHub
from campus_chat.handlers.store import MessageStore
from campus_chat.handlers.limits import SlidingWindowRateLimiter

from .settings import load_server_settings

logger = logging.getLogger(__name__)


def build_server_deps(settings: ServerSettings | None = None) -> ServerDeps:
    settings = settings or load_server_settings()
    if not settings.users:
        logger.warning("no chat users configured; every connection will be rejected")
    return ServerDeps(
        hub=RoomHub(),
        store=MessageStore(retention=settings.history_retention),
        send_limiter=SlidingWindowRateLimiter(
            limit=settings.max_sends_per_window,
            window_seconds=settings.send_window_seconds,
        ),
        settings=settings,
    )


__all__ = ["ServerDeps", "build_server_deps"]
