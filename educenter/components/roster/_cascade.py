"""
Cascade procedures for the roster.

Each procedure restores one referential invariant after a create, rename or
delete. They mutate the working snapshot in place and are composed by the
handlers in ``component.py``.
"""

from __future__ import annotations

from typing import Literal

from educenter.domain.entities import SchoolClass, Snapshot

MemberList = Literal["student_ids", "teacher_ids"]


def dedupe(ids: list[str]) -> list[str]:
    return list(dict.fromkeys(ids))


# --- Membership ---


def enroll(classes: list[SchoolClass], member_list: MemberList, member_id: str,
           class_ids: list[str]) -> None:
    """Append member_id to the membership list of every class in class_ids."""
    wanted = set(class_ids)
    for school_class in classes:
        members = getattr(school_class, member_list)
        if school_class.id in wanted and member_id not in members:
            members.append(member_id)


def reconcile_membership(
    classes: list[SchoolClass],
    member_list: MemberList,
    old_id: str,
    new_id: str,
    class_ids: list[str] | None,
) -> None:
    """
    Move a member from its current classes to ``class_ids`` in one pass.

    Classes only in the old set lose the member, classes only in the new set
    gain it, classes in both keep the member's position (renamed if needed).
    With ``class_ids`` None only the rename is applied.
    """
    old_set = {c.id for c in classes if old_id in getattr(c, member_list)}
    new_set = old_set if class_ids is None else set(class_ids)

    for school_class in classes:
        members: list[str] = getattr(school_class, member_list)
        if school_class.id in old_set and school_class.id in new_set:
            members[:] = dedupe([new_id if m == old_id else m for m in members])
        elif school_class.id in old_set:
            members[:] = [m for m in members if m != old_id]
        elif school_class.id in new_set and new_id not in members:
            members.append(new_id)


def strip_member(classes: list[SchoolClass], member_list: MemberList, member_id: str) -> None:
    for school_class in classes:
        members: list[str] = getattr(school_class, member_list)
        members[:] = [m for m in members if m != member_id]


# --- Rename propagation ---


def rename_student_references(snapshot: Snapshot, old_id: str, new_id: str) -> None:
    """Point every student foreign key at the new id."""
    for record in snapshot.attendance:
        if record.student_id == old_id:
            record.student_id = new_id
    for invoice in snapshot.invoices:
        if invoice.student_id == old_id:
            invoice.student_id = new_id
    for report in snapshot.progress_reports:
        if report.student_id == old_id:
            report.student_id = new_id
    for transaction in snapshot.transactions:
        if transaction.student_id == old_id:
            transaction.student_id = new_id


def refresh_invoice_student_name(snapshot: Snapshot, student_id: str, name: str) -> None:
    for invoice in snapshot.invoices:
        if invoice.student_id == student_id:
            invoice.student_name = name


def rename_teacher_references(snapshot: Snapshot, old_id: str, new_id: str) -> None:
    """
    Rename the teacher in class assignments.

    Payroll history under the old id is dropped: payroll ids embed the
    teacher id, so renamed rows would collide with future regeneration.
    """
    for school_class in snapshot.classes:
        school_class.teacher_ids = dedupe(
            [new_id if t == old_id else t for t in school_class.teacher_ids]
        )
    drop_payrolls(snapshot, old_id)


def rename_class_references(snapshot: Snapshot, old_id: str, new_id: str) -> None:
    for record in snapshot.attendance:
        if record.class_id == old_id:
            record.class_id = new_id
    for report in snapshot.progress_reports:
        if report.class_id == old_id:
            report.class_id = new_id
    for announcement in snapshot.announcements:
        if announcement.class_id == old_id:
            announcement.class_id = new_id


# --- Delete cascades ---


def drop_payrolls(snapshot: Snapshot, teacher_id: str) -> None:
    snapshot.payrolls = [p for p in snapshot.payrolls if p.teacher_id != teacher_id]


def remove_student_references(snapshot: Snapshot, student_id: str) -> None:
    """Remove every row that references the student."""
    strip_member(snapshot.classes, "student_ids", student_id)
    snapshot.attendance = [a for a in snapshot.attendance if a.student_id != student_id]
    snapshot.invoices = [i for i in snapshot.invoices if i.student_id != student_id]
    snapshot.progress_reports = [
        p for p in snapshot.progress_reports if p.student_id != student_id
    ]
    snapshot.transactions = [t for t in snapshot.transactions if t.student_id != student_id]


def remove_teacher_references(snapshot: Snapshot, teacher_id: str) -> None:
    strip_member(snapshot.classes, "teacher_ids", teacher_id)
    drop_payrolls(snapshot, teacher_id)


def remove_class_references(snapshot: Snapshot, class_id: str) -> None:
    """Remove class-scoped attendance, progress reports and announcements."""
    snapshot.attendance = [a for a in snapshot.attendance if a.class_id != class_id]
    snapshot.progress_reports = [
        p for p in snapshot.progress_reports if p.class_id != class_id
    ]
    snapshot.announcements = [a for a in snapshot.announcements if a.class_id != class_id]
