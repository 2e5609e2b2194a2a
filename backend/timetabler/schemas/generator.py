from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from timetabler.schemas.settings import (
    DAY_VALUES,
    TIME_PATTERN,
    normalize_day,
    normalize_time_range,
)

SessionType = Literal["lecture", "practical", "lab"]
SessionKind = Literal["lecture", "practical", "lab", "break", "lunch"]
SubjectPriority = Literal["high", "medium", "low"]
StrategyName = Literal["optimal", "balanced", "flexible"]


class SubjectIn(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    code: str | None = Field(default=None, max_length=50)
    sessions_per_week: int = Field(ge=1, le=40)
    duration_minutes: int = Field(default=60, ge=1, le=480)
    type: SessionType = "lecture"
    faculty: str | None = Field(default=None, max_length=200)
    credits: int | None = Field(default=None, ge=0, le=40)
    priority: SubjectPriority | None = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: object) -> object:
        # Older clients still send "theory" for plain lectures.
        if isinstance(value, str) and value.strip().lower() == "theory":
            return "lecture"
        return value

    @field_validator("faculty")
    @classmethod
    def blank_faculty_is_unassigned(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None


class TimetableConfig(BaseModel):
    name: str = Field(default="Timetable", max_length=200)
    department: str = Field(default="", max_length=200)
    semester: str = Field(default="", max_length=100)
    subjects: list[SubjectIn] = Field(default_factory=list)
    start_time: str | None = None
    end_time: str | None = None
    lunch_time: str | None = None
    working_days: list[str] | None = None
    available_classrooms: list[str] | None = None
    max_classes_per_day: int | None = Field(default=None, ge=1, le=24)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @field_validator("lunch_time")
    @classmethod
    def validate_lunch_time(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return normalize_time_range(value)

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        unique: list[str] = []
        for item in value:
            day = normalize_day(item)
            if not day:
                continue
            if day not in DAY_VALUES:
                raise ValueError(f"Invalid working day: {item}")
            if day not in unique:
                unique.append(day)
        return unique

    @field_validator("available_classrooms")
    @classmethod
    def strip_classrooms(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return [room.strip() for room in value if room and room.strip()]

    @model_validator(mode="after")
    def validate_unique_subject_ids(self) -> "TimetableConfig":
        seen: set[str] = set()
        duplicates: set[str] = set()
        for subject in self.subjects:
            if subject.id in seen:
                duplicates.add(subject.id)
            seen.add(subject.id)
        if duplicates:
            raise ValueError(f"Duplicate subject ids: {', '.join(sorted(duplicates))}")
        return self


class GenerationSettings(BaseModel):
    attempt_budget: int = Field(default=50, ge=1, le=10_000)
    break_probability: float = Field(default=0.5, ge=0.0, le=1.0)
    random_seed: int | None = Field(default=None, ge=0, le=2_000_000_000)
    # Order-preserving fan-out over a thread pool. Output matches the sequential run;
    # the work is CPU-bound Python, so it is not a speed-up.
    parallel_strategies: bool = False


class ScheduledSession(BaseModel):
    day: str
    time: str
    subject: str
    faculty: str = ""
    room: str = ""
    type: SessionKind


class ShortfallNotice(BaseModel):
    subject_id: str
    subject_name: str
    required: int = Field(ge=1)
    achieved: int = Field(ge=0)

    @computed_field
    @property
    def missing(self) -> int:
        return self.required - self.achieved


class CandidateSchedule(BaseModel):
    id: str
    name: str = Field(min_length=1, max_length=100)
    strategy: StrategyName
    schedule: list[ScheduledSession]
    efficiency: int = Field(ge=0, le=100)
    conflicts: int = Field(ge=0)
    utilization: int = Field(ge=0, le=100)
    score: int = Field(ge=0, le=100)
    shortfalls: list[ShortfallNotice] = Field(default_factory=list)


class GenerateTimetableRequest(BaseModel):
    config: TimetableConfig
    settings_override: GenerationSettings | None = None


class GenerateTimetableResponse(BaseModel):
    candidates: list[CandidateSchedule]
    days: list[str]
    time_slots: list[str]
    settings_used: GenerationSettings
    runtime_ms: int
    warnings: list[str] = Field(default_factory=list)
