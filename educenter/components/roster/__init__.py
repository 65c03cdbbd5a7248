"""
Roster component - Students, teachers, staff and classes.

Entity CRUD with cascade cleanup of every cross-reference.
"""

from .component import (
    add_class,
    add_staff,
    add_student,
    add_teacher,
    clear_collections,
    delete_class,
    delete_staff,
    delete_student,
    delete_teacher,
    update_class,
    update_staff,
    update_student,
    update_teacher,
    update_user_password,
)
from .models import (
    AddClassInput,
    AddStaffInput,
    AddStudentInput,
    AddTeacherInput,
    DeleteClassInput,
    DeleteStaffInput,
    DeleteStudentInput,
    DeleteTeacherInput,
    UpdateClassInput,
    UpdateStaffInput,
    UpdateStudentInput,
    UpdateTeacherInput,
    UpdateUserPasswordInput,
)

__all__ = [
    # Handlers
    "add_student",
    "update_student",
    "delete_student",
    "add_teacher",
    "update_teacher",
    "delete_teacher",
    "add_staff",
    "update_staff",
    "delete_staff",
    "add_class",
    "update_class",
    "delete_class",
    "update_user_password",
    "clear_collections",
    # Input models
    "AddStudentInput",
    "UpdateStudentInput",
    "DeleteStudentInput",
    "AddTeacherInput",
    "UpdateTeacherInput",
    "DeleteTeacherInput",
    "AddStaffInput",
    "UpdateStaffInput",
    "DeleteStaffInput",
    "AddClassInput",
    "UpdateClassInput",
    "DeleteClassInput",
    "UpdateUserPasswordInput",
]
