from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from campus_chat.server import build_app
from campus_chat.state import ChatUser, ServerSettings
from campus_chat.runtime.dependencies import build_server_deps

USERS = {"t1": ChatUser(id="u_1", nickname="alice"), "t2": ChatUser(id="u_2", nickname="bob")}


def _client(**overrides: Any) -> TestClient:
    settings = ServerSettings(users=USERS, **overrides)
    return TestClient(build_app(build_server_deps(settings)))


def _request(msg_type: str, request_id: str, data: Any = None) -> dict[str, Any]:
    out: dict[str, Any] = {"v": 1, "type": msg_type, "requestId": request_id}
    if data is not None:
        out["data"] = data
    return out


def _join(ws, room: str, request_id: str = "j1") -> dict[str, Any]:
    ws.send_json(_request("chat.join", request_id, {"roomId": room}))
    return ws.receive_json()


def test_health_endpoints() -> None:
    with _client() as client:
        assert client.get("/").json() == {"status": "ok"}
        assert client.get("/health").json() == {"status": "ok"}


def test_unknown_token_is_rejected() -> None:
    with _client() as client, client.websocket_connect("/ws/chat?token=nope") as ws:
        msg = ws.receive_json()
        assert msg["type"] == "error"
        assert msg["error"]["code"] == 1001
        with pytest.raises(WebSocketDisconnect) as exc:
            ws.receive_json()
        assert exc.value.code == 4001


def test_connected_join_and_ping() -> None:
    with _client() as client, client.websocket_connect("/ws/chat?token=t1") as ws:
        assert ws.receive_json() == {"v": 1, "type": "system.connected", "data": {"userId": "u_1"}}

        joined = _join(ws, "general")
        assert joined == {"v": 1, "type": "chat.joined", "requestId": "j1", "data": {"roomId": "general"}}

        ws.send_json(_request("system.ping", "p1"))
        assert ws.receive_json() == {"v": 1, "type": "system.pong", "requestId": "p1"}


def test_send_broadcasts_to_room_members() -> None:
    with _client() as client:
        with client.websocket_connect("/ws/chat?token=t1") as alice, client.websocket_connect(
            "/ws/chat?token=t2"
        ) as bob:
            alice.receive_json()
            bob.receive_json()
            _join(alice, "general")
            _join(bob, "general")

            alice.send_json(_request("chat.send", "s1", {"roomId": "general", "content": "  hi all "}))
            for ws in (alice, bob):
                msg = ws.receive_json()
                assert msg["type"] == "chat.message"
                assert "requestId" not in msg
                data = msg["data"]
                assert data["id"] == "m_1"
                assert data["roomId"] == "general"
                assert data["content"] == "hi all"
                assert data["sender"] == {"id": "u_1", "nickname": "alice"}
                assert data["created_at"].endswith("Z")


def test_history_returns_latest_ascending() -> None:
    with _client() as client, client.websocket_connect("/ws/chat?token=t1") as ws:
        ws.receive_json()
        _join(ws, "general")
        for i in range(3):
            ws.send_json(_request("chat.send", f"s{i}", {"roomId": "general", "content": f"msg {i}"}))
            ws.receive_json()

        ws.send_json(_request("chat.history", "h1", {"roomId": "general", "limit": 2}))
        result = ws.receive_json()
        assert result["type"] == "chat.history.result"
        assert result["requestId"] == "h1"
        assert [item["content"] for item in result["data"]["items"]] == ["msg 1", "msg 2"]

        ws.send_json(_request("chat.history", "h2", {"roomId": "resources", "limit": 50}))
        assert ws.receive_json()["data"] == {"items": []}


@pytest.mark.parametrize(
    ("payload", "code"),
    [
        (_request("chat.typing", "x1"), 3001),
        (_request("chat.join", "x2", {"roomId": "  "}), 3002),
        (_request("chat.send", "x3", {"roomId": "general"}), 3003),
        (_request("chat.send", "x4", {"roomId": "general", "content": "hi"}), 3004),
        (_request("chat.history", "x5", {"roomId": "general", "limit": "ten"}), 3005),
    ],
)
def test_invalid_requests_get_error_replies(payload: dict[str, Any], code: int) -> None:
    with _client() as client, client.websocket_connect("/ws/chat?token=t1") as ws:
        ws.receive_json()
        ws.send_json(payload)
        reply = ws.receive_json()
        assert reply["type"] == "error"
        assert reply["requestId"] == payload["requestId"]
        assert reply["error"]["code"] == code


def test_unparseable_frame_gets_error_reply() -> None:
    with _client() as client, client.websocket_connect("/ws/chat?token=t1") as ws:
        ws.receive_json()
        ws.send_text("{not json")
        reply = ws.receive_json()
        assert reply["type"] == "error"
        assert reply["error"]["code"] == 3000
        assert "requestId" not in reply


def test_sends_are_rate_limited_per_user() -> None:
    with _client(max_sends_per_window=1, send_window_seconds=60.0) as client:
        with client.websocket_connect("/ws/chat?token=t1") as ws:
            ws.receive_json()
            _join(ws, "general")
            ws.send_json(_request("chat.send", "s1", {"roomId": "general", "content": "one"}))
            assert ws.receive_json()["type"] == "chat.message"
            ws.send_json(_request("chat.send", "s2", {"roomId": "general", "content": "two"}))
            reply = ws.receive_json()
            assert reply["type"] == "error"
            assert reply["error"]["code"] == 3006


def test_binary_frames_are_decoded_or_rejected() -> None:
    with _client() as client, client.websocket_connect("/ws/chat?token=t1") as ws:
        ws.receive_json()
        ws.send_bytes(b"\x00\xff")
        reply = ws.receive_json()
        assert reply["type"] == "error"
        assert reply["error"]["code"] == 3000

        ws.send_bytes(b'{"v":1,"type":"system.ping","requestId":"p1"}')
        assert ws.receive_json() == {"v": 1, "type": "system.pong", "requestId": "p1"}
