"""Chat room descriptor."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Room:
    id: str
    name: str
    description: str = ""


__all__ = ["Room"]
