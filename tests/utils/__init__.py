"""Test helpers.

- transport.py: in-memory transport standing in for a websocket connection
- envelopes.py: server-side envelope builders for driving a session
"""

from __future__ import annotations

from .transport import FakeTransport, FakeTransportFactory, settle
from .envelopes import sent_types, live_message, history_result, server_envelope

__all__ = [
    "FakeTransport",
    "FakeTransportFactory",
    "history_result",
    "live_message",
    "sent_types",
    "server_envelope",
    "settle",
]
