from __future__ import annotations

import json

import pytest

from campus_chat.errors import DecodeError
from campus_chat.state import Envelope, ErrorPayload
from campus_chat.protocol import decode, encode, build_request, new_request_id, encode_envelope


def test_send_round_trip_keeps_room_and_content() -> None:
    envelope = decode(encode("chat.send", {"roomId": "R", "content": "hello"}))
    assert envelope.type == "chat.send"
    assert envelope.data["roomId"] == "R"
    assert envelope.data["content"] == "hello"
    assert envelope.version == 1
    assert envelope.request_id


def test_encode_attaches_version_and_request_id() -> None:
    msg = json.loads(encode("chat.join", {"roomId": "general"}))
    assert msg["v"] == 1
    assert msg["type"] == "chat.join"
    assert isinstance(msg["requestId"], str) and msg["requestId"]
    assert "error" not in msg


def test_encode_omits_absent_data() -> None:
    msg = json.loads(encode("system.ping"))
    assert set(msg) == {"v", "type", "requestId"}


def test_request_ids_do_not_collide() -> None:
    ids = {new_request_id() for _ in range(2000)}
    assert len(ids) == 2000


def test_build_request_honours_explicit_request_id() -> None:
    envelope = build_request("chat.history", {"roomId": "a", "limit": 50}, request_id="r-1")
    assert envelope.request_id == "r-1"
    assert json.loads(encode_envelope(envelope))["requestId"] == "r-1"


def test_decode_error_envelope() -> None:
    raw = json.dumps({"v": 1, "type": "error", "requestId": "r1", "error": {"code": 3004, "message": "not joined"}})
    envelope = decode(raw)
    assert envelope == Envelope(
        version=1,
        type="error",
        request_id="r1",
        data=None,
        error=ErrorPayload(code=3004, message="not joined"),
    )


def test_decode_accepts_bytes_and_missing_version() -> None:
    envelope = decode(b'{"type": "system.pong"}')
    assert envelope.type == "system.pong"
    assert envelope.version == 1
    assert envelope.request_id is None


def test_decode_treats_empty_request_id_as_absent() -> None:
    assert decode('{"v": 1, "type": "chat.message", "requestId": ""}').request_id is None


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "",
        json.dumps([]),
        json.dumps("chat.message"),
        json.dumps({"v": 1}),
        json.dumps({"v": 1, "type": ""}),
        json.dumps({"v": 1, "type": 7}),
        json.dumps({"v": "1", "type": "chat.message"}),
        json.dumps({"v": True, "type": "chat.message"}),
        json.dumps({"v": 1, "type": "chat.message", "requestId": 12}),
        json.dumps({"v": 1, "type": "error", "error": "boom"}),
        json.dumps({"v": 1, "type": "error", "error": {"code": "x", "message": "boom"}}),
        json.dumps({"v": 1, "type": "error", "error": {"code": 1}}),
    ],
)
def test_decode_fails_closed(raw: str) -> None:
    with pytest.raises(DecodeError):
        decode(raw)
