"""Chat endpoint URL helpers."""

from __future__ import annotations

from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

from campus_chat.config.websocket import WS_ENDPOINT_PATH, WS_TOKEN_QUERY_KEY


def ws_url(server: str, secure: bool) -> str:
    """Generate a WebSocket URL for the chat endpoint."""
    server = (server or "").strip()
    if server.startswith(("ws://", "wss://", "http://", "https://")):
        parsed = urlparse(server)
        if parsed.scheme in {"ws", "wss"}:
            scheme = parsed.scheme
        else:
            scheme = "wss" if (parsed.scheme == "https" or secure) else "ws"
        base_path = (parsed.path or "").rstrip("/")
        if not base_path.endswith(WS_ENDPOINT_PATH):
            base_path = f"{base_path}{WS_ENDPOINT_PATH}"
        return urlunparse((scheme, parsed.netloc, base_path, "", parsed.query, ""))
    scheme = "wss" if secure else "ws"
    host = server.rstrip("/")
    return f"{scheme}://{host}{WS_ENDPOINT_PATH}"


def append_token_query(url: str, token: str) -> str:
    """Set the bearer token query parameter, replacing any existing one."""
    parsed = urlparse(url)
    query_params = dict(parse_qsl(parsed.query, keep_blank_values=True))
    query_params[WS_TOKEN_QUERY_KEY] = token
    new_query = urlencode(query_params)
    return urlunparse((parsed.scheme, parsed.netloc, parsed.path, parsed.params, new_query, parsed.fragment))


def build_chat_url(server: str, secure: bool, token: str) -> str:
    return append_token_query(ws_url(server, secure), token)


__all__ = ["append_token_query", "build_chat_url", "ws_url"]
