"""Connection lifecycle status."""

from __future__ import annotations

from enum import StrEnum


class ConnectionStatus(StrEnum):
    IDLE = "idle"
    CONNECTING = "connecting"
    READY = "ready"
    ERROR = "error"


__all__ = ["ConnectionStatus"]
