from __future__ import annotations

from collections.abc import Sequence

from timetabler.schemas.generator import CandidateSchedule, ScheduledSession
from timetabler.schemas.settings import DAY_VALUES
from timetabler.services.time_grid import slot_sort_key


def grid_axes(timetable: CandidateSchedule) -> tuple[list[str], list[str]]:
    """Days and time rows that actually appear in a candidate, in calendar order."""
    day_order = {day: index for index, day in enumerate(DAY_VALUES)}
    days: list[str] = []
    times: list[str] = []
    for session in timetable.schedule:
        if session.day not in days:
            days.append(session.day)
        if session.time not in times:
            times.append(session.time)
    days.sort(key=lambda day: day_order.get(day, len(day_order)))
    times.sort(key=slot_sort_key)
    return days, times


def format_timetable_for_display(
    timetable: CandidateSchedule,
    *,
    days: Sequence[str] | None = None,
    time_slots: Sequence[str] | None = None,
) -> dict[str, dict[str, ScheduledSession]]:
    if days is None or time_slots is None:
        derived_days, derived_times = grid_axes(timetable)
        days = derived_days if days is None else days
        time_slots = derived_times if time_slots is None else time_slots

    grid = {
        day: {
            slot: ScheduledSession(day=day, time=slot, subject="", type="lecture")
            for slot in time_slots
        }
        for day in days
    }
    for session in timetable.schedule:
        row = grid.get(session.day)
        if row is not None and session.time in row:
            row[session.time] = session
    return grid
