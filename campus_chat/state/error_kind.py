"""Categories of failures surfaced by a chat session."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    MISSING_CREDENTIAL = "missing_credential"
    DECODE = "decode"
    PROTOCOL = "protocol"
    TRANSPORT = "transport"
    SEND_REJECTED = "send_rejected"


__all__ = ["ErrorKind"]
