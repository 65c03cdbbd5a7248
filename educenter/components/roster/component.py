"""
Roster component - Student, teacher, staff and class maintenance.

Handlers mutate the working snapshot handed to them by the applicator and
raise a DomainError before touching it when an invariant would break.

Functional Core - no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable

from educenter.domain.context import OperationContext
from educenter.domain.entities import CollectionName, Person, SchoolClass, Snapshot
from educenter.domain.errors import DuplicateIdError, InvalidStateError, NotFoundError

from . import _cascade
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

STUDENT_PREFIX = "STU"
TEACHER_PREFIX = "TEA"
STAFF_PREFIX = "STF"
CLASS_PREFIX = "CLS"

# --- Guards ---


def _index_of(items: list, item_id: str) -> int | None:
    return next((i for i, item in enumerate(items) if item.id == item_id), None)


def _require_unique(items: Iterable, item_id: str, label: str) -> None:
    if any(item.id == item_id for item in items):
        raise DuplicateIdError(f"{label} with id '{item_id}' already exists")


def _require_index(items: list, item_id: str, label: str) -> int:
    index = _index_of(items, item_id)
    if index is None:
        raise NotFoundError(f"{label} with id '{item_id}' not found")
    return index


def _require_rename_free(items: list, original_id: str, new_id: str, label: str) -> None:
    if new_id != original_id:
        _require_unique(items, new_id, label)


def _require_classes(snapshot: Snapshot, class_ids: Iterable[str]) -> None:
    known = {c.id for c in snapshot.classes}
    missing = [cid for cid in class_ids if cid not in known]
    if missing:
        raise NotFoundError(f"Class not found: {', '.join(missing)}")


def _require_members(snapshot: Snapshot, school_class: SchoolClass) -> None:
    known_students = {s.id for s in snapshot.students}
    known_teachers = {t.id for t in snapshot.teachers}
    missing_students = [s for s in school_class.student_ids if s not in known_students]
    missing_teachers = [t for t in school_class.teacher_ids if t not in known_teachers]
    if missing_students:
        raise NotFoundError(f"Student not found: {', '.join(missing_students)}")
    if missing_teachers:
        raise NotFoundError(f"Teacher not found: {', '.join(missing_teachers)}")


def _stamp_new(person: Person, ctx: OperationContext, prefix: str) -> dict[str, str]:
    return {
        "id": person.id or ctx.new_id(prefix),
        "created_at": ctx.today(),
    }


# --- Students ---


def add_student(snapshot: Snapshot, payload: AddStudentInput, ctx: OperationContext) -> None:
    """Create a student with a zero balance and enroll it in the given classes."""
    student = payload.student
    if student.id:
        _require_unique(snapshot.students, student.id, "Student")
    _require_classes(snapshot, payload.class_ids)

    new_student = student.model_copy(
        update={**_stamp_new(student, ctx, STUDENT_PREFIX), "balance": 0}
    )
    snapshot.students.append(new_student)
    _cascade.enroll(snapshot.classes, "student_ids", new_student.id, payload.class_ids)


def update_student(
    snapshot: Snapshot, payload: UpdateStudentInput, ctx: OperationContext
) -> None:
    """
    Replace a student's profile.

    The stored balance and creation date are kept: balance only moves through
    ledger operations.
    """
    original_id = payload.original_id
    index = _require_index(snapshot.students, original_id, "Student")
    new_id = payload.updated_student.id or original_id
    _require_rename_free(snapshot.students, original_id, new_id, "Student")
    if payload.class_ids is not None:
        _require_classes(snapshot, payload.class_ids)

    existing = snapshot.students[index]
    snapshot.students[index] = payload.updated_student.model_copy(
        update={
            "id": new_id,
            "balance": existing.balance,
            "created_at": existing.created_at,
        }
    )

    if new_id != original_id:
        _cascade.rename_student_references(snapshot, original_id, new_id)
    if payload.updated_student.name != existing.name or new_id != original_id:
        _cascade.refresh_invoice_student_name(
            snapshot, new_id, payload.updated_student.name
        )
    _cascade.reconcile_membership(
        snapshot.classes, "student_ids", original_id, new_id, payload.class_ids
    )


def delete_student(
    snapshot: Snapshot, payload: DeleteStudentInput, ctx: OperationContext
) -> None:
    index = _index_of(snapshot.students, payload.student_id)
    if index is None:
        return
    del snapshot.students[index]
    _cascade.remove_student_references(snapshot, payload.student_id)


# --- Teachers ---


def add_teacher(snapshot: Snapshot, payload: AddTeacherInput, ctx: OperationContext) -> None:
    teacher = payload.teacher
    if teacher.id:
        _require_unique(snapshot.teachers, teacher.id, "Teacher")
    _require_classes(snapshot, payload.class_ids)

    new_teacher = teacher.model_copy(update=_stamp_new(teacher, ctx, TEACHER_PREFIX))
    snapshot.teachers.append(new_teacher)
    _cascade.enroll(snapshot.classes, "teacher_ids", new_teacher.id, payload.class_ids)


def update_teacher(
    snapshot: Snapshot, payload: UpdateTeacherInput, ctx: OperationContext
) -> None:
    original_id = payload.original_id
    index = _require_index(snapshot.teachers, original_id, "Teacher")
    new_id = payload.updated_teacher.id or original_id
    _require_rename_free(snapshot.teachers, original_id, new_id, "Teacher")
    if payload.class_ids is not None:
        _require_classes(snapshot, payload.class_ids)

    existing = snapshot.teachers[index]
    snapshot.teachers[index] = payload.updated_teacher.model_copy(
        update={"id": new_id, "created_at": existing.created_at}
    )

    if new_id != original_id:
        _cascade.rename_teacher_references(snapshot, original_id, new_id)
    if payload.class_ids is not None:
        _cascade.reconcile_membership(
            snapshot.classes, "teacher_ids", new_id, new_id, payload.class_ids
        )


def delete_teacher(
    snapshot: Snapshot, payload: DeleteTeacherInput, ctx: OperationContext
) -> None:
    index = _index_of(snapshot.teachers, payload.teacher_id)
    if index is None:
        return
    del snapshot.teachers[index]
    _cascade.remove_teacher_references(snapshot, payload.teacher_id)


# --- Staff ---


def add_staff(snapshot: Snapshot, payload: AddStaffInput, ctx: OperationContext) -> None:
    staff = payload.staff
    if staff.id:
        _require_unique(snapshot.staff, staff.id, "Staff member")
    snapshot.staff.append(staff.model_copy(update=_stamp_new(staff, ctx, STAFF_PREFIX)))


def update_staff(snapshot: Snapshot, payload: UpdateStaffInput, ctx: OperationContext) -> None:
    original_id = payload.original_id
    index = _require_index(snapshot.staff, original_id, "Staff member")
    new_id = payload.updated_staff.id or original_id
    _require_rename_free(snapshot.staff, original_id, new_id, "Staff member")

    existing = snapshot.staff[index]
    snapshot.staff[index] = payload.updated_staff.model_copy(
        update={"id": new_id, "created_at": existing.created_at}
    )


def delete_staff(snapshot: Snapshot, payload: DeleteStaffInput, ctx: OperationContext) -> None:
    snapshot.staff = [s for s in snapshot.staff if s.id != payload.staff_id]


# --- Classes ---


def add_class(snapshot: Snapshot, payload: AddClassInput, ctx: OperationContext) -> None:
    school_class = payload.school_class
    if school_class.id:
        _require_unique(snapshot.classes, school_class.id, "Class")
    _require_members(snapshot, school_class)

    snapshot.classes.append(
        school_class.model_copy(
            update={
                "id": school_class.id or ctx.new_id(CLASS_PREFIX),
                "student_ids": _cascade.dedupe(school_class.student_ids),
                "teacher_ids": _cascade.dedupe(school_class.teacher_ids),
            }
        )
    )


def update_class(snapshot: Snapshot, payload: UpdateClassInput, ctx: OperationContext) -> None:
    original_id = payload.original_id
    index = _require_index(snapshot.classes, original_id, "Class")
    new_id = payload.updated_class.id or original_id
    _require_rename_free(snapshot.classes, original_id, new_id, "Class")
    _require_members(snapshot, payload.updated_class)

    snapshot.classes[index] = payload.updated_class.model_copy(
        update={
            "id": new_id,
            "student_ids": _cascade.dedupe(payload.updated_class.student_ids),
            "teacher_ids": _cascade.dedupe(payload.updated_class.teacher_ids),
        }
    )
    if new_id != original_id:
        _cascade.rename_class_references(snapshot, original_id, new_id)


def delete_class(snapshot: Snapshot, payload: DeleteClassInput, ctx: OperationContext) -> None:
    index = _index_of(snapshot.classes, payload.class_id)
    if index is None:
        return
    del snapshot.classes[index]
    _cascade.remove_class_references(snapshot, payload.class_id)


# --- Accounts ---


def update_user_password(
    snapshot: Snapshot, payload: UpdateUserPasswordInput, ctx: OperationContext
) -> None:
    """Set the login password of a parent (student), teacher or staff account."""
    users: list[Person]
    if payload.role == "PARENT":
        users = list(snapshot.students)
    elif payload.role == "TEACHER":
        users = list(snapshot.teachers)
    elif payload.role in ("MANAGER", "ACCOUNTANT"):
        users = list(snapshot.staff)
    else:
        raise InvalidStateError(f"Role '{payload.role}' has no password managed here")

    user = next((u for u in users if u.id == payload.user_id), None)
    if user is None:
        raise NotFoundError(f"User with id '{payload.user_id}' not found")
    user.password = payload.new_password


# --- Bulk ---


def clear_collections(
    snapshot: Snapshot, payload: list[CollectionName], ctx: OperationContext
) -> None:
    """
    Wipe whole roster collections and everything that depends on them.

    Invoices survive a class wipe: they key off student and month.
    """
    names = set(payload)
    if "students" in names:
        snapshot.students = []
        snapshot.attendance = []
        snapshot.invoices = []
        snapshot.progress_reports = []
        snapshot.transactions = []
        for school_class in snapshot.classes:
            school_class.student_ids = []
    if "teachers" in names:
        snapshot.teachers = []
        snapshot.payrolls = []
        for school_class in snapshot.classes:
            school_class.teacher_ids = []
    if "staff" in names:
        snapshot.staff = []
    if "classes" in names:
        snapshot.classes = []
        snapshot.attendance = []
        snapshot.progress_reports = []
        snapshot.announcements = [a for a in snapshot.announcements if a.class_id is None]
