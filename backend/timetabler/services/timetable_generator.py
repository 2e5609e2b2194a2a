from __future__ import annotations

import logging
import random
from collections import defaultdict
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum

from timetabler.core.exceptions import ConfigurationError
from timetabler.schemas.generator import (
    CandidateSchedule,
    GenerationSettings,
    ScheduledSession,
    ShortfallNotice,
    SubjectIn,
    TimetableConfig,
)
from timetabler.schemas.settings import DEFAULT_FACULTY
from timetabler.services.metrics import ScheduleMetrics, evaluate_metrics
from timetabler.services.room_policy import assign_room, resolve_room_inventory
from timetabler.services.time_grid import GridCell, TimeGrid, build_time_grid, slot_sort_key

logger = logging.getLogger(__name__)

PRIORITY_WEIGHTS = {"high": 3, "medium": 2, "low": 1}
DEFAULT_PRIORITY_WEIGHT = 1


class GenerationStrategy(str, Enum):
    optimal = "optimal"
    balanced = "balanced"
    flexible = "flexible"

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()} Schedule"

    @property
    def tolerates_conflicts(self) -> bool:
        return self is GenerationStrategy.flexible

    def order_subjects(self, subjects: Sequence[SubjectIn], rng: random.Random) -> list[SubjectIn]:
        ordered = list(subjects)
        if self is GenerationStrategy.optimal:
            ordered.sort(
                key=lambda subject: (
                    PRIORITY_WEIGHTS.get(subject.priority, DEFAULT_PRIORITY_WEIGHT),
                    subject.sessions_per_week,
                ),
                reverse=True,
            )
        elif self is GenerationStrategy.balanced:
            ordered.sort(key=lambda subject: subject.sessions_per_week)
        else:
            rng.shuffle(ordered)
        return ordered


STRATEGY_ORDER: tuple[GenerationStrategy, ...] = (
    GenerationStrategy.optimal,
    GenerationStrategy.balanced,
    GenerationStrategy.flexible,
)


class PlacementStatus(str, Enum):
    pending = "pending"
    placing = "placing"
    done = "done"
    partial = "partial"


@dataclass
class SubjectPlacement:
    subject: SubjectIn
    status: PlacementStatus = PlacementStatus.pending
    achieved: int = 0

    @property
    def required(self) -> int:
        return self.subject.sessions_per_week

    def to_shortfall(self) -> ShortfallNotice:
        return ShortfallNotice(
            subject_id=self.subject.id,
            subject_name=self.subject.name,
            required=self.required,
            achieved=self.achieved,
        )


@dataclass
class RunState:
    """Mutable state of one strategy run. Never shared between runs."""

    strategy: GenerationStrategy
    rng: random.Random
    schedule: dict[GridCell, ScheduledSession] = field(default_factory=dict)
    faculty_cells: dict[str, set[GridCell]] = field(default_factory=lambda: defaultdict(set))
    conflicts: int = 0
    placements: list[SubjectPlacement] = field(default_factory=list)

    def place(self, cell: GridCell, session: ScheduledSession) -> None:
        self.schedule[cell] = session
        if session.faculty:
            self.faculty_cells[session.faculty].add(cell)


class TimetableGenerator:
    def __init__(
        self,
        config: TimetableConfig,
        settings: GenerationSettings | None = None,
        *,
        rng: random.Random | None = None,
        max_classes_per_day: int | None = None,
        faculty_pool: Sequence[str] = DEFAULT_FACULTY,
    ) -> None:
        self.config = config
        self.settings = settings or GenerationSettings()
        self.random = rng if rng is not None else random.Random(self.settings.random_seed)
        self.grid: TimeGrid = build_time_grid(config, max_classes_per_day=max_classes_per_day)
        self.rooms = resolve_room_inventory(config.available_classrooms)
        self.faculty_pool = tuple(faculty_pool)
        if not self.faculty_pool and any(subject.faculty is None for subject in config.subjects):
            raise ConfigurationError("Subjects without an assigned instructor need a non-empty faculty pool")
        self._day_index = {day: index for index, day in enumerate(self.grid.days)}

        logger.debug(
            "Generator ready days=%s slots=%s lunch=%s rooms=%s",
            self.grid.days,
            self.grid.time_slots,
            self.grid.lunch_time,
            len(self.rooms),
        )

    def generate(self) -> list[CandidateSchedule]:
        """Build one candidate per strategy, in declared strategy order."""
        logger.info(
            "Generating timetables name=%s subjects=%s strategies=%s parallel=%s",
            self.config.name,
            len(self.config.subjects),
            len(STRATEGY_ORDER),
            self.settings.parallel_strategies,
        )
        # Seeds are drawn up front so parallel and sequential runs match.
        jobs = [
            (index, strategy, random.Random(self.random.getrandbits(64)))
            for index, strategy in enumerate(STRATEGY_ORDER)
        ]
        if self.settings.parallel_strategies:
            with ThreadPoolExecutor(max_workers=len(jobs)) as executor:
                return list(executor.map(lambda job: self._run_strategy(*job), jobs))
        return [self._run_strategy(*job) for job in jobs]

    def _run_strategy(self, index: int, strategy: GenerationStrategy, rng: random.Random) -> CandidateSchedule:
        state = RunState(strategy=strategy, rng=rng)
        logger.debug("Generating %s strategy", strategy.value)

        self._add_fixed_slots(state)
        self._schedule_subjects(state)
        metrics = self._calculate_metrics(state)
        shortfalls = [
            placement.to_shortfall()
            for placement in state.placements
            if placement.status is PlacementStatus.partial
        ]

        logger.info(
            "Strategy complete strategy=%s sessions=%s conflicts=%s utilization=%s efficiency=%s score=%s shortfalls=%s",
            strategy.value,
            len(state.schedule),
            metrics.conflicts,
            metrics.utilization,
            metrics.efficiency,
            metrics.score,
            len(shortfalls),
        )
        return CandidateSchedule(
            id=f"option-{index + 1}",
            name=strategy.label,
            strategy=strategy.value,
            schedule=self._ordered_sessions(state),
            efficiency=metrics.efficiency,
            conflicts=metrics.conflicts,
            utilization=metrics.utilization,
            score=metrics.score,
            shortfalls=shortfalls,
        )

    def _add_fixed_slots(self, state: RunState) -> None:
        lunch_time = self.grid.lunch_time
        if lunch_time is not None:
            for day in self.grid.days:
                state.place(
                    GridCell(day=day, slot=lunch_time),
                    ScheduledSession(day=day, time=lunch_time, subject="Lunch Break", type="lunch"),
                )

        break_slot = self.grid.middle_slot
        if break_slot is None:
            return
        for day in self.grid.days:
            if state.rng.random() < self.settings.break_probability:
                state.place(
                    GridCell(day=day, slot=break_slot),
                    ScheduledSession(day=day, time=break_slot, subject="Break", type="break"),
                )

    def _schedule_subjects(self, state: RunState) -> None:
        for subject in state.strategy.order_subjects(self.config.subjects, state.rng):
            placement = SubjectPlacement(subject=subject)
            state.placements.append(placement)
            self._schedule_subject(state, placement)

    def _schedule_subject(self, state: RunState, placement: SubjectPlacement) -> None:
        subject = placement.subject
        placement.status = PlacementStatus.placing
        logger.debug("Scheduling %s (%s sessions)", subject.name, placement.required)

        if self.grid.time_slots:
            for _ in range(self.settings.attempt_budget):
                if placement.achieved >= placement.required:
                    break
                day = state.rng.choice(self.grid.days)
                slot = state.rng.choice(self.grid.time_slots)
                cell = GridCell(day=day, slot=slot)
                # First writer wins; an occupied cell just burns the attempt.
                if cell in state.schedule:
                    continue

                room = assign_room(subject.type, self.rooms, state.rng)
                faculty = subject.faculty or state.rng.choice(self.faculty_pool)
                conflict = self._has_faculty_conflict(state, faculty, cell)
                if conflict and not state.strategy.tolerates_conflicts:
                    continue

                state.place(
                    cell,
                    ScheduledSession(
                        day=day,
                        time=slot,
                        subject=subject.name,
                        faculty=faculty,
                        room=room,
                        type=subject.type,
                    ),
                )
                placement.achieved += 1
                if conflict:
                    state.conflicts += 1

        if placement.achieved >= placement.required:
            placement.status = PlacementStatus.done
            return

        placement.status = PlacementStatus.partial
        logger.warning(
            "Could only schedule %s/%s sessions for %s (strategy=%s)",
            placement.achieved,
            placement.required,
            subject.name,
            state.strategy.value,
        )

    @staticmethod
    def _has_faculty_conflict(state: RunState, faculty: str, cell: GridCell) -> bool:
        return cell in state.faculty_cells.get(faculty, ())

    def _calculate_metrics(self, state: RunState) -> ScheduleMetrics:
        return evaluate_metrics(
            total_cells=self.grid.total_cells,
            occupied_cells=len(state.schedule),
            conflicts=state.conflicts,
            rng=state.rng,
        )

    def _ordered_sessions(self, state: RunState) -> list[ScheduledSession]:
        return sorted(
            state.schedule.values(),
            key=lambda session: (self._day_index.get(session.day, len(self._day_index)), slot_sort_key(session.time)),
        )


def generate_timetables(
    config: TimetableConfig,
    settings: GenerationSettings | None = None,
    *,
    rng: random.Random | None = None,
    max_classes_per_day: int | None = None,
) -> list[CandidateSchedule]:
    generator = TimetableGenerator(config, settings, rng=rng, max_classes_per_day=max_classes_per_day)
    return generator.generate()
