"""
Roster component - Operation payload models.

Payloads for student, teacher, staff and class maintenance.
"""

from __future__ import annotations

from pydantic import Field

from educenter.domain.entities import (
    SchoolClass,
    Staff,
    Student,
    Teacher,
    UserRole,
    WireModel,
)

# --- Students ---


class AddStudentInput(WireModel):
    """Input for enrolling a new student."""

    student: Student
    class_ids: list[str] = Field(default_factory=list)


class UpdateStudentInput(WireModel):
    """Input for editing (and possibly renaming) a student."""

    original_id: str
    updated_student: Student
    # None leaves class membership untouched apart from a rename.
    class_ids: list[str] | None = None


class DeleteStudentInput(WireModel):
    student_id: str


# --- Teachers ---


class AddTeacherInput(WireModel):
    teacher: Teacher
    class_ids: list[str] = Field(default_factory=list)


class UpdateTeacherInput(WireModel):
    original_id: str
    updated_teacher: Teacher
    class_ids: list[str] | None = None


class DeleteTeacherInput(WireModel):
    teacher_id: str


# --- Staff ---


class AddStaffInput(WireModel):
    staff: Staff


class UpdateStaffInput(WireModel):
    original_id: str
    updated_staff: Staff


class DeleteStaffInput(WireModel):
    staff_id: str


# --- Classes ---


class AddClassInput(WireModel):
    school_class: SchoolClass = Field(alias="class")


class UpdateClassInput(WireModel):
    original_id: str
    updated_class: SchoolClass


class DeleteClassInput(WireModel):
    class_id: str


# --- Accounts ---


class UpdateUserPasswordInput(WireModel):
    user_id: str
    role: UserRole
    new_password: str = Field(min_length=1)
