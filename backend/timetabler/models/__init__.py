from timetabler.models.approved_timetable import ApprovalStatus, ApprovedTimetable  # noqa: F401
