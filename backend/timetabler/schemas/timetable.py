from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from timetabler.models.approved_timetable import ApprovalStatus
from timetabler.schemas.generator import CandidateSchedule, ScheduledSession


class TimetableMetadata(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    department: str = Field(default="", max_length=200)
    semester: str = Field(default="", max_length=100)


class ApprovedTimetableCreate(BaseModel):
    timetable: CandidateSchedule
    config: TimetableMetadata


class ApprovedTimetableOut(BaseModel):
    id: str
    config: TimetableMetadata
    timetable: CandidateSchedule
    status: ApprovalStatus
    approved_at: datetime


class TimetableGridOut(BaseModel):
    id: str
    name: str
    days: list[str]
    time_slots: list[str]
    grid: dict[str, dict[str, ScheduledSession]]
