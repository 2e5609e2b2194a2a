from __future__ import annotations

import random
from collections.abc import Sequence

from timetabler.core.exceptions import ConfigurationError
from timetabler.schemas.settings import DEFAULT_ROOMS

LAB_MARKERS = ("lab",)
PRACTICAL_MARKERS = ("lab", "hall", "practical")
LECTURE_MARKERS = ("room", "class")
SPECIALIZED_MARKERS = ("lab", "practical")


def _has_marker(room: str, markers: Sequence[str]) -> bool:
    label = room.lower()
    return any(marker in label for marker in markers)


def resolve_room_inventory(rooms: Sequence[str] | None, *, fallback: Sequence[str] = DEFAULT_ROOMS) -> tuple[str, ...]:
    inventory = tuple(room for room in (rooms or ()) if room)
    if inventory:
        return inventory
    inventory = tuple(room for room in fallback if room)
    if not inventory:
        raise ConfigurationError(
            "No rooms available for generation: the configured inventory and the built-in fallback are both empty",
        )
    return inventory


def preferred_rooms(session_type: str, rooms: Sequence[str]) -> list[str]:
    if session_type == "lab":
        return [room for room in rooms if _has_marker(room, LAB_MARKERS)]
    if session_type == "practical":
        return [room for room in rooms if _has_marker(room, PRACTICAL_MARKERS)]
    return [
        room
        for room in rooms
        if _has_marker(room, LECTURE_MARKERS) or not _has_marker(room, SPECIALIZED_MARKERS)
    ]


def assign_room(session_type: str, rooms: Sequence[str], rng: random.Random) -> str:
    """Pick a room suited to the session type.

    Falls back to the first room of the inventory when no room carries a
    matching marker.
    """
    if not rooms:
        raise ConfigurationError("Cannot assign a room from an empty inventory")
    candidates = preferred_rooms(session_type, rooms)
    if not candidates:
        return rooms[0]
    return rng.choice(candidates)
