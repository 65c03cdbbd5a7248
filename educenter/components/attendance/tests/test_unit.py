"""
Attendance component unit tests.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from educenter.components.attendance import (
    DeleteAttendanceForDateInput,
    MonthInput,
    delete_attendance_by_month,
    delete_attendance_for_date,
    group_by_session,
    in_month,
    update_attendance,
)
from educenter.domain.entities import AttendanceRecord
from educenter.domain.errors import NotFoundError


def _record(student_id: str, date: str, status: str = "PRESENT", class_id: str = "C1"):
    return AttendanceRecord(class_id=class_id, student_id=student_id, date=date, status=status)


class TestUpdateAttendance:
    """Test replace-the-session semantics."""

    def test_inserts_with_generated_ids(self, snapshot, ctx) -> None:
        update_attendance(snapshot, [_record("S1", "2024-05-02"), _record("S2", "2024-05-02")], ctx)
        assert [a.id for a in snapshot.attendance] == ["ATT-1", "ATT-2"]

    def test_resubmission_replaces_session(self, snapshot, ctx) -> None:
        """A second submission for the same (class, date) replaces the first."""
        update_attendance(snapshot, [_record("S1", "2024-05-02"), _record("S2", "2024-05-02")], ctx)
        update_attendance(snapshot, [_record("S1", "2024-05-02", "ABSENT")], ctx)

        assert len(snapshot.attendance) == 1
        assert snapshot.attendance[0].status == "ABSENT"

    def test_other_sessions_untouched(self, snapshot, ctx) -> None:
        update_attendance(snapshot, [_record("S1", "2024-05-02")], ctx)
        update_attendance(snapshot, [_record("S1", "2024-05-09")], ctx)
        assert {a.date for a in snapshot.attendance} == {"2024-05-02", "2024-05-09"}

    def test_duplicate_student_keeps_last(self, snapshot, ctx) -> None:
        update_attendance(
            snapshot,
            [_record("S1", "2024-05-02", "PRESENT"), _record("S1", "2024-05-02", "LATE")],
            ctx,
        )
        assert [a.status for a in snapshot.attendance] == ["LATE"]

    def test_empty_is_noop(self, snapshot, ctx) -> None:
        update_attendance(snapshot, [], ctx)
        assert snapshot.attendance == []

    def test_unknown_student_rejected(self, snapshot, ctx) -> None:
        with pytest.raises(NotFoundError):
            update_attendance(snapshot, [_record("S404", "2024-05-02")], ctx)
        assert snapshot.attendance == []


class TestDeleteAttendance:
    """Test bulk attendance removal."""

    def test_delete_for_date(self, snapshot, ctx) -> None:
        update_attendance(snapshot, [_record("S1", "2024-05-02"), _record("S1", "2024-05-09")], ctx)
        delete_attendance_for_date(
            snapshot, DeleteAttendanceForDateInput(class_id="C1", date="2024-05-02"), ctx
        )
        assert [a.date for a in snapshot.attendance] == ["2024-05-09"]

    def test_delete_by_month(self, snapshot, ctx) -> None:
        update_attendance(snapshot, [_record("S1", "2024-05-02"), _record("S1", "2024-06-02")], ctx)
        delete_attendance_by_month(snapshot, MonthInput(month=5, year=2024), ctx)
        assert [a.date for a in snapshot.attendance] == ["2024-06-02"]


class TestHelpers:
    """Test grouping and month helpers."""

    def test_group_by_session(self) -> None:
        groups = group_by_session(
            [_record("S1", "2024-05-02"), _record("S2", "2024-05-02"), _record("S1", "2024-05-03")]
        )
        assert set(groups) == {("C1", "2024-05-02"), ("C1", "2024-05-03")}
        assert len(groups[("C1", "2024-05-02")]) == 2

    def test_in_month_prefix(self) -> None:
        assert in_month("2024-05-31", "2024-05")
        assert not in_month("2024-051", "2024-05")

    def test_month_str_padding(self) -> None:
        assert MonthInput(month=3, year=2024).month_str == "2024-03"

    def test_month_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            MonthInput(month=13, year=2024)
