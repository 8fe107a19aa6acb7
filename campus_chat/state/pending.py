"""Outstanding request bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass

from .intent import RequestIntent


@dataclass(frozen=True, slots=True)
class PendingRequest:
    intent: RequestIntent
    room_id: str | None
    generation: int


__all__ = ["PendingRequest"]
