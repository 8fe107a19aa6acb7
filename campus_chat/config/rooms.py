"""Static room catalogue shown by chat front-ends."""

from __future__ import annotations

from campus_chat.state.room import Room

ROOMS: tuple[Room, ...] = (
    Room(id="general", name="General", description="Everyday talk and campus news."),
    Room(id="study-help", name="Study Help", description="Homework questions and course material."),
    Room(id="resources", name="Resources", description="Revision notes and exam experience."),
)


def room_name(room_id: str) -> str:
    for room in ROOMS:
        if room.id == room_id:
            return room.name
    return room_id


__all__ = ["ROOMS", "room_name"]
