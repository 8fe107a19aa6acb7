from __future__ import annotations

import pytest

from campus_chat.client import ConnectionManager
from campus_chat.protocol import build_request
from campus_chat.state import ErrorKind, ConnectionStatus
from campus_chat.config.protocol import MSG_TRANSPORT_CLOSED, MSG_TRANSPORT_FAILED

from tests.utils import FakeTransportFactory, settle


def _manager(factory: FakeTransportFactory, token: str | None = "tok", frames: list | None = None):
    errors: list = []
    manager = ConnectionManager(
        token_provider=lambda: token,
        url_builder=lambda t: f"ws://chat.test/ws/chat?token={t}",
        transport_factory=factory,
        on_frame=frames.append if frames is not None else None,
        on_error=errors.append,
    )
    return manager, errors


@pytest.mark.asyncio
async def test_missing_credential_opens_nothing() -> None:
    factory = FakeTransportFactory()
    manager, errors = _manager(factory, token="   ")

    assert manager.connect() is False
    assert manager.status.value is ConnectionStatus.ERROR
    assert manager.last_error is not None
    assert manager.last_error.kind is ErrorKind.MISSING_CREDENTIAL
    assert [e.kind for e in errors] == [ErrorKind.MISSING_CREDENTIAL]
    assert factory.created == []


@pytest.mark.asyncio
async def test_connect_reaches_ready_and_delivers_frames() -> None:
    factory = FakeTransportFactory()
    frames: list = []
    manager, _ = _manager(factory, frames=frames)
    seen: list[ConnectionStatus] = []
    manager.status.subscribe(seen.append)

    assert manager.connect() is True
    assert manager.status.value is ConnectionStatus.CONNECTING
    await settle()
    assert manager.status.value is ConnectionStatus.READY
    assert factory.last.url == "ws://chat.test/ws/chat?token=tok"

    factory.last.push('{"v":1,"type":"system.pong"}')
    await settle()
    assert frames == ['{"v":1,"type":"system.pong"}']
    assert seen == [ConnectionStatus.CONNECTING, ConnectionStatus.READY]

    manager.disconnect()
    await settle()


@pytest.mark.asyncio
async def test_send_requires_ready() -> None:
    factory = FakeTransportFactory()
    manager, _ = _manager(factory)
    envelope = build_request("system.ping")

    assert manager.send(envelope) is False
    manager.connect()
    assert manager.send(envelope) is False
    await settle()
    assert manager.send(envelope) is True
    sent = factory.last.sent_envelopes()
    assert sent == [{"v": 1, "type": "system.ping", "requestId": envelope.request_id}]

    manager.disconnect()
    await settle()


@pytest.mark.asyncio
async def test_server_close_moves_to_error() -> None:
    factory = FakeTransportFactory()
    manager, errors = _manager(factory)
    manager.connect()
    await settle()

    factory.last.drop()
    await settle()
    assert manager.status.value is ConnectionStatus.ERROR
    assert errors[-1].kind is ErrorKind.TRANSPORT
    assert errors[-1].message == MSG_TRANSPORT_CLOSED
    assert factory.last.closed is True
    assert manager.send(build_request("system.ping")) is False


@pytest.mark.asyncio
async def test_reader_failure_moves_to_error() -> None:
    factory = FakeTransportFactory()
    manager, errors = _manager(factory)
    manager.connect()
    await settle()

    factory.last.explode(ConnectionResetError("reset by peer"))
    await settle()
    assert manager.status.value is ConnectionStatus.ERROR
    assert errors[-1].message == MSG_TRANSPORT_FAILED


@pytest.mark.asyncio
async def test_open_failure_moves_to_error() -> None:
    factory = FakeTransportFactory(fail_open=OSError("connection refused"))
    manager, errors = _manager(factory)

    assert manager.connect() is True
    await settle()
    assert manager.status.value is ConnectionStatus.ERROR
    assert errors[-1].kind is ErrorKind.TRANSPORT
    assert factory.last.closed is True


@pytest.mark.asyncio
async def test_reconnect_replaces_transport_and_ignores_stale_events() -> None:
    factory = FakeTransportFactory()
    frames: list = []
    manager, _ = _manager(factory, frames=frames)
    manager.connect()
    await settle()
    first = factory.last

    first.push('{"v":1,"type":"system.pong"}')
    manager.connect()
    first.drop()
    await settle()

    second = factory.last
    assert second is not first
    assert first.closed is True
    assert frames == []
    assert manager.status.value is ConnectionStatus.READY

    second.push('{"v":1,"type":"system.pong","requestId":"r2"}')
    await settle()
    assert frames == ['{"v":1,"type":"system.pong","requestId":"r2"}']

    manager.disconnect()
    await settle()


@pytest.mark.asyncio
async def test_disconnect_returns_to_idle_and_recovers_from_error() -> None:
    factory = FakeTransportFactory()
    manager, _ = _manager(factory)
    manager.connect()
    await settle()
    factory.last.drop()
    await settle()
    assert manager.status.value is ConnectionStatus.ERROR

    manager.connect()
    await settle()
    assert manager.status.value is ConnectionStatus.READY

    manager.disconnect()
    await settle()
    assert manager.status.value is ConnectionStatus.IDLE
    assert manager.last_error is None
    assert factory.last.closed is True


@pytest.mark.asyncio
async def test_wait_closed_drains_retired_transports() -> None:
    factory = FakeTransportFactory()
    manager, _ = _manager(factory)
    manager.connect()
    await settle()
    first = factory.last
    manager.connect()
    await settle()

    manager.disconnect()
    await manager.wait_closed()
    assert first.closed is True
    assert factory.last.closed is True
