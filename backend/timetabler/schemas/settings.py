from __future__ import annotations

import re

DAY_VALUES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

DAY_SHORT_MAP = {
    "Mon": "Monday",
    "Tue": "Tuesday",
    "Wed": "Wednesday",
    "Thu": "Thursday",
    "Fri": "Friday",
    "Sat": "Saturday",
    "Sun": "Sunday",
}

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
TIME_RANGE_PATTERN = re.compile(r"^\s*(\d{2}:\d{2})\s*-\s*(\d{2}:\d{2})\s*$")

SLOT_MINUTES = 60
DEFAULT_START_TIME = "09:00"
DEFAULT_END_TIME = "17:00"
DEFAULT_LUNCH_TIME = "13:00 - 14:00"
DEFAULT_MAX_CLASSES_PER_DAY = 8

DEFAULT_WORKING_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

DEFAULT_TIME_SLOTS = (
    "09:00 - 10:00",
    "10:00 - 11:00",
    "11:00 - 12:00",
    "12:00 - 13:00",
    "13:00 - 14:00",
    "14:00 - 15:00",
    "15:00 - 16:00",
    "16:00 - 17:00",
)

DEFAULT_ROOMS = (
    "Room A101",
    "Room A102",
    "Room A103",
    "Room A104",
    "Room A105",
    "Lab L201",
    "Lab L202",
    "Lab L203",
    "Hall H301",
    "Hall H302",
)

DEFAULT_FACULTY = (
    "Dr. Smith",
    "Prof. Johnson",
    "Dr. Brown",
    "Prof. Davis",
    "Dr. Wilson",
    "Prof. Anderson",
    "Dr. Taylor",
    "Prof. Martinez",
    "Dr. Garcia",
    "Prof. Rodriguez",
)


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(value: int) -> str:
    hours = value // 60
    minutes = value % 60
    return f"{hours:02d}:{minutes:02d}"


def parse_time_range(value: str) -> tuple[int, int]:
    """Parse ``"HH:MM - HH:MM"`` (spaces optional) into start/end minutes."""
    match = TIME_RANGE_PATTERN.match(value)
    if match is None:
        raise ValueError("Time range must look like 'HH:MM - HH:MM'")
    start = parse_time_to_minutes(match.group(1))
    end = parse_time_to_minutes(match.group(2))
    if end <= start:
        raise ValueError("Time range end must be after its start")
    return start, end


def format_time_range(start: int, end: int) -> str:
    return f"{minutes_to_time(start)} - {minutes_to_time(end)}"


def normalize_time_range(value: str) -> str:
    start, end = parse_time_range(value)
    return format_time_range(start, end)


def normalize_day(value: str) -> str:
    day = value.strip()
    return DAY_SHORT_MAP.get(day, day)
