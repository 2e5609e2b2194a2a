from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from timetabler.api.deps import get_db
from timetabler.schemas.faculty import DepartmentFacultyTimetables
from timetabler.schemas.timetable import ApprovedTimetableCreate, ApprovedTimetableOut, TimetableGridOut
from timetabler.services.approved_store import (
    delete_approved_timetable,
    get_approved_timetable,
    list_approved_timetables,
    save_approved_timetable,
    to_approved_out,
)
from timetabler.services.display_grid import format_timetable_for_display, grid_axes
from timetabler.services.faculty_timetables import distribute_to_faculty

router = APIRouter()


@router.get("/approved", response_model=list[ApprovedTimetableOut])
def list_approved(
    department: str | None = Query(default=None),
    semester: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[ApprovedTimetableOut]:
    records = list_approved_timetables(db, department=department, semester=semester)
    return [to_approved_out(record) for record in records]


@router.post("/approved", response_model=ApprovedTimetableOut, status_code=status.HTTP_201_CREATED)
def approve_timetable(payload: ApprovedTimetableCreate, db: Session = Depends(get_db)) -> ApprovedTimetableOut:
    return to_approved_out(save_approved_timetable(db, payload))


@router.get("/approved/faculty", response_model=DepartmentFacultyTimetables)
def get_department_faculty_timetables(
    department: str = Query(...),
    semester: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> DepartmentFacultyTimetables:
    approved = [
        to_approved_out(record)
        for record in list_approved_timetables(db, department=department, semester=semester)
    ]
    return distribute_to_faculty(
        ((item.config.name, item.timetable) for item in approved),
        department=department,
        semester=semester or "",
    )


@router.get("/approved/{timetable_id}", response_model=ApprovedTimetableOut)
def get_approved(timetable_id: str, db: Session = Depends(get_db)) -> ApprovedTimetableOut:
    return to_approved_out(get_approved_timetable(db, timetable_id))


@router.get("/approved/{timetable_id}/grid", response_model=TimetableGridOut)
def get_approved_grid(timetable_id: str, db: Session = Depends(get_db)) -> TimetableGridOut:
    approved = to_approved_out(get_approved_timetable(db, timetable_id))
    days, time_slots = grid_axes(approved.timetable)
    return TimetableGridOut(
        id=approved.id,
        name=approved.config.name,
        days=days,
        time_slots=time_slots,
        grid=format_timetable_for_display(approved.timetable, days=days, time_slots=time_slots),
    )


@router.get("/approved/{timetable_id}/faculty", response_model=DepartmentFacultyTimetables)
def get_approved_faculty_timetables(timetable_id: str, db: Session = Depends(get_db)) -> DepartmentFacultyTimetables:
    approved = to_approved_out(get_approved_timetable(db, timetable_id))
    return distribute_to_faculty(
        [(approved.config.name, approved.timetable)],
        department=approved.config.department,
        semester=approved.config.semester,
    )


@router.delete("/approved/{timetable_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_approved(timetable_id: str, db: Session = Depends(get_db)) -> Response:
    delete_approved_timetable(db, timetable_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
