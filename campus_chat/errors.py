"""Shared error types for the chat client and dev server."""

from __future__ import annotations

from dataclasses import dataclass


class DecodeError(ValueError):
    """Raised when an inbound frame or payload is not a well-formed envelope."""


@dataclass(frozen=True, slots=True)
class RateLimitError(Exception):
    """Raised when a sliding-window rate limiter is saturated."""

    retry_in: float
    limit: int
    window_seconds: float


__all__ = ["DecodeError", "RateLimitError"]
