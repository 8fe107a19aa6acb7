"""Decoded wire envelope."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ErrorPayload:
    code: int
    message: str


@dataclass(frozen=True, slots=True)
class Envelope:
    version: int
    type: str
    request_id: str | None = None
    data: Any = None
    error: ErrorPayload | None = None


__all__ = ["Envelope", "ErrorPayload"]
