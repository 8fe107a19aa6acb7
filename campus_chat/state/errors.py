"""Error types (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass

from .error_kind import ErrorKind


@dataclass(frozen=True, slots=True)
class ChatError:
    """A failure narrowed to something a UI can display."""

    kind: ErrorKind
    message: str
    code: int | None = None


__all__ = ["ChatError"]
