"""
Attendance component - Session attendance with replace-the-day semantics.
"""

from .component import (
    delete_attendance_by_month,
    delete_attendance_for_date,
    group_by_session,
    update_attendance,
)
from .models import DeleteAttendanceForDateInput, MonthInput, in_month

__all__ = [
    # Handlers
    "update_attendance",
    "delete_attendance_for_date",
    "delete_attendance_by_month",
    # Helpers
    "group_by_session",
    "in_month",
    # Input models
    "DeleteAttendanceForDateInput",
    "MonthInput",
]
