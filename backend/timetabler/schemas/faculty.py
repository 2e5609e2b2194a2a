from __future__ import annotations

from pydantic import BaseModel, Field

from timetabler.schemas.generator import SessionType


class FacultySession(BaseModel):
    day: str
    time: str
    subject: str
    room: str = ""
    type: SessionType
    batch: str


class FacultyWorkload(BaseModel):
    weekly_total: int = Field(ge=0)
    daily_average: float = Field(ge=0)
    subject_breakdown: dict[str, int] = Field(default_factory=dict)


class FacultyTimetable(BaseModel):
    faculty: str
    department: str = ""
    semester: str = ""
    schedule: list[FacultySession] = Field(default_factory=list)
    total_classes: int = Field(ge=0)
    workload: FacultyWorkload
    conflicts: list[str] = Field(default_factory=list)


class FacultyDistributionSummary(BaseModel):
    total_faculties: int = Field(ge=0)
    total_classes: int = Field(ge=0)
    average_workload: float = Field(ge=0)
    conflicts_found: int = Field(ge=0)


class DepartmentFacultyTimetables(BaseModel):
    department: str = ""
    semester: str = ""
    faculty_timetables: list[FacultyTimetable]
    summary: FacultyDistributionSummary
