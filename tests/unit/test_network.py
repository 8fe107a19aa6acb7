from __future__ import annotations

import pytest

from campus_chat.client.network import ws_url, build_chat_url, append_token_query


@pytest.mark.parametrize(
    ("server", "secure", "expected"),
    [
        ("localhost:8080", False, "ws://localhost:8080/ws/chat"),
        ("localhost:8080/", True, "wss://localhost:8080/ws/chat"),
        ("https://forum.example.edu", False, "wss://forum.example.edu/ws/chat"),
        ("http://forum.example.edu/api", False, "ws://forum.example.edu/api/ws/chat"),
        ("ws://127.0.0.1:9000/ws/chat", True, "ws://127.0.0.1:9000/ws/chat"),
    ],
)
def test_ws_url(server: str, secure: bool, expected: str) -> None:
    assert ws_url(server, secure) == expected


def test_token_is_url_encoded_and_replaced() -> None:
    url = append_token_query("ws://h/ws/chat?token=old&x=1", "a b&c")
    assert url == "ws://h/ws/chat?token=a+b%26c&x=1"


def test_build_chat_url() -> None:
    assert build_chat_url("h:1", False, "tok") == "ws://h:1/ws/chat?token=tok"
