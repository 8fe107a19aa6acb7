"""Terminal chat client.

Lines typed on stdin are sent to the current room. Slash commands:
``/room <id>``, ``/rooms``, ``/reconnect``, ``/ping``, ``/quit``.
"""

from __future__ import annotations

import sys
import asyncio
import argparse
from dataclasses import replace

from campus_chat.client import ChatSession
from campus_chat.state import ChatError, ChatMessage, ClientSettings, ConnectionStatus
from campus_chat.config.rooms import ROOMS, room_name
from campus_chat.config.secrets import get_chat_token
from campus_chat.runtime.logging import configure_logging
from campus_chat.runtime.settings import load_client_settings


class _Printer:
    """Prints only the messages that were not on screen yet."""

    def __init__(self) -> None:
        self._last_id: str | None = None

    def __call__(self, messages: tuple[ChatMessage, ...]) -> None:
        start = 0
        if self._last_id is not None:
            for idx, message in enumerate(messages):
                if message.id == self._last_id:
                    start = idx + 1
                    break
        for message in messages[start:]:
            print(f"[{message.display_time()}] {message.author_label}: {message.content}")
        self._last_id = messages[-1].id if messages else None


def _parse_args(argv: list[str] | None, settings: ClientSettings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Campus chat terminal client")
    parser.add_argument("--server", default=settings.server, help="host:port or ws(s)/http(s) URL")
    parser.add_argument("--secure", action="store_true", default=settings.secure, help="use wss://")
    parser.add_argument("--room", default=ROOMS[0].id, help="room to join once connected")
    parser.add_argument("--token", default=None, help="bearer token (defaults to $CHAT_TOKEN)")
    return parser.parse_args(argv)


def _handle_command(session: ChatSession, line: str) -> bool:
    """Run a slash command; returns ``False`` when the client should exit."""
    cmd, _, arg = line.partition(" ")
    if cmd == "/quit":
        return False
    if cmd == "/rooms":
        for room in ROOMS:
            print(f"  {room.id:<12} {room.name} - {room.description}")
    elif cmd == "/room":
        if not session.switch_room(arg) and session.status.value is not ConnectionStatus.READY:
            print(f"* will join {arg.strip()} once connected")
    elif cmd == "/reconnect":
        session.reconnect()
    elif cmd == "/ping":
        session.ping()
    else:
        print(f"* unknown command {cmd}")
    return True


async def run(argv: list[str] | None = None) -> int:
    settings = load_client_settings()
    args = _parse_args(argv, settings)
    settings = replace(settings, server=args.server, secure=args.secure)
    token = args.token

    session = ChatSession(settings, token_provider=lambda: token or get_chat_token())
    session.status.subscribe(
        lambda status: print(f"* {status.value} ({room_name(session.room_id or args.room)})")
    )
    session.messages.subscribe(_Printer())

    def _on_error(error: ChatError | None) -> None:
        if error is not None:
            print(f"! {error.message}")

    session.error.subscribe(_on_error)

    session.switch_room(args.room)
    session.connect()

    loop = asyncio.get_running_loop()
    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            line = line.strip()
            if line.startswith("/"):
                if not _handle_command(session, line):
                    break
                continue
            session.send(line)
    finally:
        session.disconnect()
        await session.wait_closed()
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    try:
        return asyncio.run(run(argv))
    except KeyboardInterrupt:
        return 130


__all__ = ["main", "run"]
