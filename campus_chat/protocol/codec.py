"""Versioned JSON envelope codec.

Outbound frames always carry the fixed protocol version and a fresh request
id. Decoding fails closed: a frame is either a complete :class:`Envelope` or a
:class:`DecodeError`, never something in between.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import orjson

from campus_chat.errors import DecodeError
from campus_chat.state import Envelope, ErrorPayload
from campus_chat.config.protocol import (
    ENV_KEY_DATA,
    ENV_KEY_TYPE,
    ENV_KEY_ERROR,
    ENV_KEY_VERSION,
    PROTOCOL_VERSION,
    ENV_KEY_REQUEST_ID,
)


def new_request_id() -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:16]}"


def build_request(msg_type: str, data: Any = None, *, request_id: str | None = None) -> Envelope:
    return Envelope(
        version=PROTOCOL_VERSION,
        type=msg_type,
        request_id=request_id or new_request_id(),
        data=data,
    )


def envelope_to_dict(envelope: Envelope) -> dict[str, Any]:
    out: dict[str, Any] = {ENV_KEY_VERSION: envelope.version, ENV_KEY_TYPE: envelope.type}
    if envelope.request_id:
        out[ENV_KEY_REQUEST_ID] = envelope.request_id
    if envelope.data is not None:
        out[ENV_KEY_DATA] = envelope.data
    if envelope.error is not None:
        out[ENV_KEY_ERROR] = {"code": envelope.error.code, "message": envelope.error.message}
    return out


def encode_envelope(envelope: Envelope) -> bytes:
    return orjson.dumps(envelope_to_dict(envelope))


def encode(msg_type: str, data: Any = None, *, request_id: str | None = None) -> bytes:
    return encode_envelope(build_request(msg_type, data, request_id=request_id))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _decode_error(raw: Any) -> ErrorPayload | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise DecodeError("envelope 'error' must be an object")
    code = raw.get("code")
    message = raw.get("message")
    if not _is_int(code):
        raise DecodeError("envelope 'error.code' must be an integer")
    if not isinstance(message, str):
        raise DecodeError("envelope 'error.message' must be a string")
    return ErrorPayload(code=code, message=message)


def decode(raw: bytes | bytearray | str) -> Envelope:
    try:
        msg = orjson.loads(raw)
    except (orjson.JSONDecodeError, TypeError) as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise DecodeError("envelope must be a JSON object")

    msg_type = msg.get(ENV_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise DecodeError("envelope missing non-empty 'type'")

    version = msg.get(ENV_KEY_VERSION, PROTOCOL_VERSION)
    if not _is_int(version):
        raise DecodeError("envelope 'v' must be an integer")

    request_id = msg.get(ENV_KEY_REQUEST_ID)
    if request_id is not None and not isinstance(request_id, str):
        raise DecodeError("envelope 'requestId' must be a string")

    return Envelope(
        version=version,
        type=msg_type.strip(),
        request_id=request_id or None,
        data=msg.get(ENV_KEY_DATA),
        error=_decode_error(msg.get(ENV_KEY_ERROR)),
    )


__all__ = [
    "build_request",
    "decode",
    "encode",
    "encode_envelope",
    "envelope_to_dict",
    "new_request_id",
]
