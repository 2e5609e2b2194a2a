import random

import pytest

from timetabler.core.exceptions import ConfigurationError
from timetabler.schemas.settings import DEFAULT_ROOMS
from timetabler.services.room_policy import assign_room, preferred_rooms, resolve_room_inventory


def test_lab_sessions_get_lab_rooms():
    rng = random.Random(3)
    for _ in range(30):
        assert assign_room("lab", DEFAULT_ROOMS, rng).startswith("Lab ")


def test_practical_sessions_prefer_labs_and_halls():
    rooms = ["Room 1", "Lab 2", "Hall 3", "Practical Studio"]
    assert preferred_rooms("practical", rooms) == ["Lab 2", "Hall 3", "Practical Studio"]


def test_lectures_avoid_specialized_rooms():
    rooms = ["Room 1", "Lab 2", "Hall 3", "Practical Studio", "Classroom Lab Annex"]
    # "Classroom Lab Annex" carries a class marker, so it still qualifies.
    assert preferred_rooms("lecture", rooms) == ["Room 1", "Hall 3", "Classroom Lab Annex"]


def test_markers_are_case_insensitive():
    assert preferred_rooms("lab", ["CHEM LAB", "room 4"]) == ["CHEM LAB"]


def test_falls_back_to_first_room_without_matches():
    rng = random.Random(0)
    assert assign_room("lab", ["Room 1", "Hall 2"], rng) == "Room 1"


def test_empty_inventory_uses_defaults():
    assert resolve_room_inventory([]) == DEFAULT_ROOMS
    assert resolve_room_inventory(None) == DEFAULT_ROOMS
    assert resolve_room_inventory(["Room X"]) == ("Room X",)


def test_empty_inventory_and_fallback_fails_fast():
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_room_inventory([], fallback=())
    assert exc_info.value.status_code == 500


def test_assign_room_rejects_empty_inventory():
    with pytest.raises(ConfigurationError):
        assign_room("lecture", [], random.Random(1))
