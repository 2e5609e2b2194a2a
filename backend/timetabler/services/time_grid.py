from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from timetabler.schemas.generator import TimetableConfig
from timetabler.schemas.settings import (
    DEFAULT_END_TIME,
    DEFAULT_LUNCH_TIME,
    DEFAULT_MAX_CLASSES_PER_DAY,
    DEFAULT_START_TIME,
    DEFAULT_TIME_SLOTS,
    DEFAULT_WORKING_DAYS,
    SLOT_MINUTES,
    format_time_range,
    parse_time_range,
    parse_time_to_minutes,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridCell:
    day: str
    slot: str


@dataclass(frozen=True)
class TimeGrid:
    days: tuple[str, ...]
    time_slots: tuple[str, ...]
    lunch_time: str | None

    @property
    def rows(self) -> tuple[str, ...]:
        """Teaching slots plus the lunch row, if any, in time-of-day order."""
        labels = set(self.time_slots)
        if self.lunch_time is not None:
            labels.add(self.lunch_time)
        return tuple(sorted(labels, key=slot_sort_key))

    @property
    def total_cells(self) -> int:
        return len(self.days) * len(self.rows)

    def cells(self) -> list[GridCell]:
        return [GridCell(day=day, slot=slot) for day in self.days for slot in self.time_slots]

    @property
    def middle_slot(self) -> str | None:
        if len(self.time_slots) <= 2:
            return None
        return self.time_slots[len(self.time_slots) // 2]


def slot_sort_key(label: str) -> tuple[int, int]:
    return parse_time_range(label)


def _overlaps(start: int, end: int, other_start: int, other_end: int) -> bool:
    return start < other_end and other_start < end


def build_time_slots(
    start_time: str,
    end_time: str,
    *,
    lunch_time: str = DEFAULT_LUNCH_TIME,
    max_slots: int = DEFAULT_MAX_CLASSES_PER_DAY,
    slot_minutes: int = SLOT_MINUTES,
) -> list[str]:
    """Hourly teaching slots in ``[start_time, end_time)`` with lunch removed.

    Any slot overlapping the lunch window is dropped and the result is capped
    at ``max_slots``. When nothing fits, the built-in 09:00-17:00 day is used
    instead, with the same lunch and cap rules applied.
    """
    if max_slots < 1:
        raise ValueError("max_slots must be at least 1")
    lunch_start, lunch_end = parse_time_range(lunch_time)
    start = parse_time_to_minutes(start_time)
    end = parse_time_to_minutes(end_time)

    slots: list[str] = []
    cursor = start
    while cursor + slot_minutes <= end and len(slots) < max_slots:
        slot_end = cursor + slot_minutes
        if not _overlaps(cursor, slot_end, lunch_start, lunch_end):
            slots.append(format_time_range(cursor, slot_end))
        cursor = slot_end

    if slots:
        return slots

    logger.info(
        "Time grid %s-%s produced no slots; falling back to the default day",
        start_time,
        end_time,
    )
    fallback = [
        label
        for label in DEFAULT_TIME_SLOTS
        if not _overlaps(*parse_time_range(label), lunch_start, lunch_end)
    ]
    return fallback[:max_slots]


def resolve_working_days(days: Iterable[str] | None) -> tuple[str, ...]:
    resolved = tuple(days or ())
    return resolved if resolved else DEFAULT_WORKING_DAYS


def lunch_falls_within_day(lunch_time: str, start_time: str, end_time: str, time_slots: Sequence[str]) -> bool:
    """True when lunch overlaps the teaching day.

    The day spans ``[start_time, end_time)`` widened to the slots actually
    produced, so the fallback grid still gets its lunch.
    """
    lunch_start, lunch_end = parse_time_range(lunch_time)
    day_start = parse_time_to_minutes(start_time)
    day_end = parse_time_to_minutes(end_time)
    if time_slots:
        day_start = min(day_start, slot_sort_key(time_slots[0])[0])
        day_end = max(day_end, slot_sort_key(time_slots[-1])[1])
    return _overlaps(day_start, day_end, lunch_start, lunch_end)


def build_time_grid(config: TimetableConfig, *, max_classes_per_day: int | None = None) -> TimeGrid:
    lunch_time = config.lunch_time or DEFAULT_LUNCH_TIME
    start_time = config.start_time or DEFAULT_START_TIME
    end_time = config.end_time or DEFAULT_END_TIME
    max_slots = config.max_classes_per_day or max_classes_per_day or DEFAULT_MAX_CLASSES_PER_DAY
    time_slots = build_time_slots(
        start_time,
        end_time,
        lunch_time=lunch_time,
        max_slots=max_slots,
    )
    if not lunch_falls_within_day(lunch_time, start_time, end_time, time_slots):
        logger.info("Lunch %s lies outside %s-%s; no lunch row reserved", lunch_time, start_time, end_time)
        lunch_time = None
    return TimeGrid(
        days=resolve_working_days(config.working_days),
        time_slots=tuple(time_slots),
        lunch_time=lunch_time,
    )
