from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from timetabler.core.exceptions import ResourceNotFoundError
from timetabler.models.approved_timetable import ApprovalStatus, ApprovedTimetable
from timetabler.schemas.generator import CandidateSchedule
from timetabler.schemas.timetable import ApprovedTimetableCreate, ApprovedTimetableOut, TimetableMetadata

logger = logging.getLogger(__name__)


def save_approved_timetable(db: Session, payload: ApprovedTimetableCreate) -> ApprovedTimetable:
    record = ApprovedTimetable(
        name=payload.config.name,
        department=payload.config.department,
        semester=payload.config.semester,
        candidate_name=payload.timetable.name,
        payload=payload.timetable.model_dump(mode="json"),
        status=ApprovalStatus.approved,
        approved_at=datetime.now(timezone.utc),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Approved timetable saved id=%s name=%s candidate=%s", record.id, record.name, record.candidate_name)
    return record


def list_approved_timetables(
    db: Session,
    *,
    department: str | None = None,
    semester: str | None = None,
) -> list[ApprovedTimetable]:
    query = select(ApprovedTimetable)
    if department is not None:
        query = query.where(ApprovedTimetable.department == department)
    if semester is not None:
        query = query.where(ApprovedTimetable.semester == semester)
    return list(db.execute(query.order_by(ApprovedTimetable.approved_at.desc())).scalars().all())


def get_approved_timetable(db: Session, timetable_id: str) -> ApprovedTimetable:
    record = db.get(ApprovedTimetable, timetable_id)
    if record is None:
        raise ResourceNotFoundError("Approved timetable", timetable_id)
    return record


def delete_approved_timetable(db: Session, timetable_id: str) -> None:
    record = get_approved_timetable(db, timetable_id)
    db.delete(record)
    db.commit()
    logger.info("Approved timetable deleted id=%s", timetable_id)


def to_approved_out(record: ApprovedTimetable) -> ApprovedTimetableOut:
    return ApprovedTimetableOut(
        id=record.id,
        config=TimetableMetadata(name=record.name, department=record.department, semester=record.semester),
        timetable=CandidateSchedule.model_validate(record.payload),
        status=record.status,
        approved_at=record.approved_at,
    )
