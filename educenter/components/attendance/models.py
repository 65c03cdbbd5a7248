"""
Attendance component - Operation payload models.
"""

from __future__ import annotations

from pydantic import Field

from educenter.domain.entities import WireModel


class DeleteAttendanceForDateInput(WireModel):
    class_id: str
    date: str


class MonthInput(WireModel):
    """A calendar month, as sent by the month pickers."""

    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1900, le=9999)

    @property
    def month_str(self) -> str:
        """The month as YYYY-MM."""
        return f"{self.year}-{self.month:02d}"


def in_month(date: str, month_str: str) -> bool:
    return date.startswith(f"{month_str}-")
