"""Room membership and fan-out for connected dev server peers."""

from __future__ import annotations

import logging

from campus_chat.state import ChatPeer

logger = logging.getLogger(__name__)


class RoomHub:
    def __init__(self) -> None:
        self._rooms: dict[str, set[ChatPeer]] = {}

    def join(self, room: str, peer: ChatPeer) -> None:
        self._rooms.setdefault(room, set()).add(peer)
        peer.room = room

    def leave(self, peer: ChatPeer) -> None:
        room = peer.room
        if room is None:
            return
        peers = self._rooms.get(room)
        if peers is not None:
            peers.discard(peer)
            if not peers:
                del self._rooms[room]
        peer.room = None

    def broadcast(self, room: str, text: str) -> int:
        """Queue ``text`` for every peer in ``room``; full outboxes drop it."""
        delivered = 0
        for peer in list(self._rooms.get(room, ())):
            if peer.outbox.qsize() >= peer.outbox_max:
                logger.debug("dropping broadcast for slow peer user=%s", peer.user.id)
                continue
            peer.outbox.put_nowait(text)
            delivered += 1
        return delivered

    def member_count(self, room: str) -> int:
        return len(self._rooms.get(room, ()))


__all__ = ["RoomHub"]
