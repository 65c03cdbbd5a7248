"""
Attendance component - Batch attendance recording.

Attendance is stored per session: a submission for (class, date) replaces
every record previously stored for that pair.

Functional Core - no I/O.
"""

from __future__ import annotations

from educenter.domain.context import OperationContext
from educenter.domain.entities import AttendanceRecord, Snapshot
from educenter.domain.errors import NotFoundError

from .models import DeleteAttendanceForDateInput, MonthInput, in_month

ATTENDANCE_PREFIX = "ATT"


def _require_references(snapshot: Snapshot, records: list[AttendanceRecord]) -> None:
    known_classes = {c.id for c in snapshot.classes}
    known_students = {s.id for s in snapshot.students}
    for record in records:
        if record.class_id not in known_classes:
            raise NotFoundError(f"Class with id '{record.class_id}' not found")
        if record.student_id not in known_students:
            raise NotFoundError(f"Student with id '{record.student_id}' not found")


def group_by_session(
    records: list[AttendanceRecord],
) -> dict[tuple[str, str], list[AttendanceRecord]]:
    """
    Partition records by (class_id, date).

    A student listed twice for the same session keeps only the last entry.
    """
    sessions: dict[tuple[str, str], dict[str, AttendanceRecord]] = {}
    for record in records:
        sessions.setdefault((record.class_id, record.date), {})[record.student_id] = record
    return {key: list(by_student.values()) for key, by_student in sessions.items()}


def update_attendance(
    snapshot: Snapshot, payload: list[AttendanceRecord], ctx: OperationContext
) -> None:
    """
    Replace the stored attendance of every submitted session.

    Students missing from a submitted session lose their record for it: the
    caller sends the full roster status of each session.
    """
    sessions = group_by_session(payload)
    if not sessions:
        return
    _require_references(snapshot, payload)

    snapshot.attendance = [
        a for a in snapshot.attendance if (a.class_id, a.date) not in sessions
    ]
    for session_records in sessions.values():
        for record in session_records:
            snapshot.attendance.append(
                record.model_copy(update={"id": record.id or ctx.new_id(ATTENDANCE_PREFIX)})
            )


def delete_attendance_for_date(
    snapshot: Snapshot, payload: DeleteAttendanceForDateInput, ctx: OperationContext
) -> None:
    snapshot.attendance = [
        a
        for a in snapshot.attendance
        if not (a.class_id == payload.class_id and a.date == payload.date)
    ]


def delete_attendance_by_month(
    snapshot: Snapshot, payload: MonthInput, ctx: OperationContext
) -> None:
    month_str = payload.month_str
    snapshot.attendance = [a for a in snapshot.attendance if not in_month(a.date, month_str)]
