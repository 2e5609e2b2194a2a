from __future__ import annotations

import logging
from collections import Counter, defaultdict
from collections.abc import Iterable

from timetabler.schemas.faculty import (
    DepartmentFacultyTimetables,
    FacultyDistributionSummary,
    FacultySession,
    FacultyTimetable,
    FacultyWorkload,
)
from timetabler.schemas.generator import CandidateSchedule
from timetabler.schemas.settings import DAY_VALUES
from timetabler.services.metrics import round_half_up
from timetabler.services.time_grid import slot_sort_key

logger = logging.getLogger(__name__)

FIXED_SESSION_TYPES = frozenset({"lunch", "break"})


def _round_two_places(value: float) -> float:
    return round_half_up(value * 100) / 100


def _session_key(session: FacultySession) -> tuple[int, tuple[int, int], str]:
    day_order = DAY_VALUES.index(session.day) if session.day in DAY_VALUES else len(DAY_VALUES)
    return day_order, slot_sort_key(session.time), session.batch


def _workload(schedule: list[FacultySession]) -> FacultyWorkload:
    days_with_classes = len({session.day for session in schedule})
    return FacultyWorkload(
        weekly_total=len(schedule),
        daily_average=_round_two_places(len(schedule) / days_with_classes) if days_with_classes else 0.0,
        subject_breakdown=dict(Counter(session.subject for session in schedule)),
    )


def _conflicts(faculty: str, schedule: list[FacultySession]) -> list[str]:
    by_cell: dict[tuple[str, str], list[FacultySession]] = defaultdict(list)
    for session in schedule:
        by_cell[(session.day, session.time)].append(session)

    conflicts: list[str] = []
    for (day, time), sessions in by_cell.items():
        if len(sessions) > 1:
            clashing = " vs ".join(f"{session.subject} ({session.batch})" for session in sessions)
            conflicts.append(f"{faculty} has conflict at {day} {time}: {clashing}")
    return conflicts


def distribute_to_faculty(
    timetables: Iterable[tuple[str, CandidateSchedule]],
    *,
    department: str = "",
    semester: str = "",
    faculty_roster: Iterable[str] = (),
) -> DepartmentFacultyTimetables:
    """Regroup class timetables into one weekly timetable per instructor.

    ``timetables`` pairs a batch label with the candidate chosen for that
    batch. Lunch and break sessions are skipped, as are sessions without an
    instructor. Instructors on ``faculty_roster`` are listed even when they
    teach nothing; anyone else appears in order of first appearance after the
    roster. A clash is the same instructor booked in one (day, time) cell by
    more than one session, which can only happen across batches or under a
    conflict-tolerant strategy.
    """
    schedules: dict[str, list[FacultySession]] = {name: [] for name in faculty_roster}

    batches = 0
    for batch, candidate in timetables:
        batches += 1
        for session in candidate.schedule:
            if session.type in FIXED_SESSION_TYPES or not session.faculty:
                continue
            schedules.setdefault(session.faculty, []).append(
                FacultySession(
                    day=session.day,
                    time=session.time,
                    subject=session.subject,
                    room=session.room,
                    type=session.type,
                    batch=batch,
                )
            )

    faculty_timetables: list[FacultyTimetable] = []
    all_conflicts = 0
    for faculty, sessions in schedules.items():
        schedule = sorted(sessions, key=_session_key)
        conflicts = _conflicts(faculty, schedule)
        for message in conflicts:
            logger.warning("Faculty clash: %s", message)
        all_conflicts += len(conflicts)
        faculty_timetables.append(
            FacultyTimetable(
                faculty=faculty,
                department=department,
                semester=semester,
                schedule=schedule,
                total_classes=len(schedule),
                workload=_workload(schedule),
                conflicts=conflicts,
            )
        )

    total_classes = sum(item.total_classes for item in faculty_timetables)
    summary = FacultyDistributionSummary(
        total_faculties=len(faculty_timetables),
        total_classes=total_classes,
        average_workload=_round_two_places(total_classes / len(faculty_timetables)) if faculty_timetables else 0.0,
        conflicts_found=all_conflicts,
    )
    logger.info(
        "Faculty distribution department=%s semester=%s batches=%s faculties=%s classes=%s conflicts=%s",
        department,
        semester,
        batches,
        summary.total_faculties,
        summary.total_classes,
        summary.conflicts_found,
    )
    return DepartmentFacultyTimetables(
        department=department,
        semester=semester,
        faculty_timetables=faculty_timetables,
        summary=summary,
    )
