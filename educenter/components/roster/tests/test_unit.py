"""
Roster component unit tests.

Tests for entity CRUD and the cascades that keep references consistent.
"""

from __future__ import annotations

import pytest

from educenter.components.roster import (
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
from educenter.components.roster._cascade import reconcile_membership
from educenter.domain.entities import (
    Announcement,
    AttendanceRecord,
    ClassFee,
    Invoice,
    Payroll,
    ProgressReport,
    SchoolClass,
    Staff,
    Student,
    Teacher,
    Transaction,
)
from educenter.domain.errors import DuplicateIdError, InvalidStateError, NotFoundError


def _class(snapshot, class_id):
    return snapshot.find_class(class_id)


@pytest.fixture
def linked(snapshot):
    """Snapshot with one row of every collection that references S1, T2 and C1."""
    snapshot.attendance.append(
        AttendanceRecord(id="A1", class_id="C1", student_id="S1", date="2024-05-02", status="PRESENT")
    )
    snapshot.invoices.append(
        Invoice(
            id="I1", student_id="S1", student_name="An", month="2024-05",
            amount=100_000, generated_date="2024-05-15",
        )
    )
    snapshot.transactions.append(
        Transaction(
            id="X1", student_id="S1", date="2024-05-15", type="INVOICE",
            amount=-100_000, related_invoice_id="I1",
        )
    )
    snapshot.students[0].balance = -100_000
    snapshot.progress_reports.append(
        ProgressReport(id="P1", class_id="C1", student_id="S1", date="2024-05-03", score=8.5)
    )
    snapshot.payrolls.append(
        Payroll(
            id="PAY-T2-2024-05", teacher_id="T2", teacher_name="Tam", month="2024-05",
            sessions_taught=1, rate=200_000, total_salary=200_000, calculation_date="2024-05-15",
        )
    )
    snapshot.announcements.append(Announcement(id="N1", title="Exam", class_id="C1"))
    snapshot.announcements.append(Announcement(id="N2", title="Holiday"))
    return snapshot


# --- Students ---


class TestAddStudent:
    """Test student creation."""

    def test_generates_id_and_stamps_date(self, snapshot, ctx) -> None:
        """Missing id is generated and createdAt is today."""
        add_student(snapshot, AddStudentInput(student=Student(name="Cuong")), ctx)

        created = snapshot.students[-1]
        assert created.id == "STU-1"
        assert created.created_at == "2024-05-15"

    def test_balance_forced_to_zero(self, snapshot, ctx) -> None:
        """A client-supplied balance is ignored."""
        add_student(snapshot, AddStudentInput(student=Student(id="S9", name="X", balance=999)), ctx)
        assert snapshot.find_student("S9").balance == 0

    def test_enrolls_in_classes(self, snapshot, ctx) -> None:
        """The new student joins every listed class once."""
        add_student(
            snapshot,
            AddStudentInput(student=Student(id="S3", name="Cuong"), class_ids=["C1", "C2"]),
            ctx,
        )
        assert _class(snapshot, "C1").student_ids == ["S1", "S2", "S3"]
        assert _class(snapshot, "C2").student_ids == ["S1", "S3"]

    def test_duplicate_id_rejected(self, snapshot, ctx) -> None:
        """Rejects an id already in use."""
        with pytest.raises(DuplicateIdError):
            add_student(snapshot, AddStudentInput(student=Student(id="S1", name="Dup")), ctx)

    def test_unknown_class_rejected_before_insert(self, snapshot, ctx) -> None:
        """Nothing is added when a class id is unknown."""
        with pytest.raises(NotFoundError, match="C404"):
            add_student(
                snapshot,
                AddStudentInput(student=Student(id="S3", name="Cuong"), class_ids=["C404"]),
                ctx,
            )
        assert snapshot.find_student("S3") is None


class TestUpdateStudent:
    """Test student edits and renames."""

    def test_unknown_original_id(self, snapshot, ctx) -> None:
        with pytest.raises(NotFoundError):
            update_student(
                snapshot,
                UpdateStudentInput(original_id="NOPE", updated_student=Student(name="X")),
                ctx,
            )

    def test_keeps_balance_and_created_at(self, linked, ctx) -> None:
        """Balance and creation date cannot be overwritten by an edit."""
        update_student(
            linked,
            UpdateStudentInput(
                original_id="S1",
                updated_student=Student(id="S1", name="An", balance=0, created_at="1999-01-01"),
            ),
            ctx,
        )
        student = linked.find_student("S1")
        assert student.balance == -100_000
        assert student.created_at == "2024-01-01"

    def test_rename_cascades(self, linked, ctx) -> None:
        """Every student reference follows the rename."""
        update_student(
            linked,
            UpdateStudentInput(original_id="S1", updated_student=Student(id="S1X", name="An")),
            ctx,
        )
        assert linked.find_student("S1") is None
        assert linked.attendance[0].student_id == "S1X"
        assert linked.invoices[0].student_id == "S1X"
        assert linked.transactions[0].student_id == "S1X"
        assert linked.progress_reports[0].student_id == "S1X"
        assert _class(linked, "C1").student_ids == ["S1X", "S2"]
        assert _class(linked, "C2").student_ids == ["S1X"]

    def test_rename_onto_existing_id(self, snapshot, ctx) -> None:
        with pytest.raises(DuplicateIdError):
            update_student(
                snapshot,
                UpdateStudentInput(original_id="S1", updated_student=Student(id="S2", name="An")),
                ctx,
            )

    def test_name_change_refreshes_invoices(self, linked, ctx) -> None:
        """Invoices carry the student's current name."""
        update_student(
            linked,
            UpdateStudentInput(original_id="S1", updated_student=Student(id="S1", name="An Nguyen")),
            ctx,
        )
        assert linked.invoices[0].student_name == "An Nguyen"

    def test_membership_reconciled(self, snapshot, ctx) -> None:
        """Old-only classes drop the student, new-only classes gain it."""
        update_student(
            snapshot,
            UpdateStudentInput(
                original_id="S2", updated_student=Student(id="S2", name="Binh"), class_ids=["C2"]
            ),
            ctx,
        )
        assert _class(snapshot, "C1").student_ids == ["S1"]
        assert _class(snapshot, "C2").student_ids == ["S1", "S2"]

    def test_no_class_ids_keeps_membership(self, snapshot, ctx) -> None:
        update_student(
            snapshot,
            UpdateStudentInput(original_id="S2", updated_student=Student(id="S2", name="Binh")),
            ctx,
        )
        assert _class(snapshot, "C1").student_ids == ["S1", "S2"]


class TestDeleteStudent:
    """Test student removal."""

    def test_cascade_removes_every_reference(self, linked, ctx) -> None:
        delete_student(linked, DeleteStudentInput(student_id="S1"), ctx)

        assert linked.find_student("S1") is None
        assert all("S1" not in c.student_ids for c in linked.classes)
        assert linked.attendance == []
        assert linked.invoices == []
        assert linked.transactions == []
        assert linked.progress_reports == []

    def test_unknown_id_is_noop(self, snapshot, ctx) -> None:
        before = snapshot.model_copy(deep=True)
        delete_student(snapshot, DeleteStudentInput(student_id="NOPE"), ctx)
        assert snapshot == before


# --- Teachers ---


class TestTeachers:
    """Test teacher CRUD."""

    def test_add_assigns_classes(self, snapshot, ctx) -> None:
        add_teacher(
            snapshot,
            AddTeacherInput(teacher=Teacher(id="T3", name="Lan"), class_ids=["C1"]),
            ctx,
        )
        assert _class(snapshot, "C1").teacher_ids == ["T2", "T3"]
        assert snapshot.teachers[-1].created_at == "2024-05-15"

    def test_rename_updates_classes_and_drops_payrolls(self, linked, ctx) -> None:
        """Payroll rows of the old id are dropped on rename."""
        update_teacher(
            linked,
            UpdateTeacherInput(
                original_id="T2",
                updated_teacher=Teacher(id="T2X", name="Tam", salary_type="PER_SESSION"),
            ),
            ctx,
        )
        assert _class(linked, "C1").teacher_ids == ["T2X"]
        assert linked.payrolls == []

    def test_update_with_class_ids(self, snapshot, ctx) -> None:
        update_teacher(
            snapshot,
            UpdateTeacherInput(
                original_id="T1", updated_teacher=Teacher(id="T1", name="Thu"), class_ids=["C1"]
            ),
            ctx,
        )
        assert _class(snapshot, "C1").teacher_ids == ["T2", "T1"]
        assert _class(snapshot, "C2").teacher_ids == []

    def test_delete_cascades(self, linked, ctx) -> None:
        delete_teacher(linked, DeleteTeacherInput(teacher_id="T2"), ctx)
        assert linked.find_teacher("T2") is None
        assert _class(linked, "C1").teacher_ids == []
        assert linked.payrolls == []


# --- Staff ---


class TestStaff:
    """Test staff CRUD."""

    def test_add_update_delete(self, snapshot, ctx) -> None:
        add_staff(snapshot, AddStaffInput(staff=Staff(name="Mai", role="ACCOUNTANT")), ctx)
        staff_id = snapshot.staff[0].id
        assert staff_id == "STF-1"

        update_staff(
            snapshot,
            UpdateStaffInput(original_id=staff_id, updated_staff=Staff(id=staff_id, name="Mai T")),
            ctx,
        )
        assert snapshot.staff[0].name == "Mai T"
        assert snapshot.staff[0].created_at == "2024-05-15"

        delete_staff(snapshot, DeleteStaffInput(staff_id=staff_id), ctx)
        assert snapshot.staff == []

    def test_update_unknown(self, snapshot, ctx) -> None:
        with pytest.raises(NotFoundError):
            update_staff(
                snapshot,
                UpdateStaffInput(original_id="NOPE", updated_staff=Staff(name="X")),
                ctx,
            )


# --- Classes ---


class TestClasses:
    """Test class CRUD."""

    def test_add_dedupes_members(self, snapshot, ctx) -> None:
        add_class(
            snapshot,
            AddClassInput(
                school_class=SchoolClass(
                    name="Physics",
                    student_ids=["S1", "S1", "S2"],
                    teacher_ids=["T1"],
                    fee=ClassFee(type="MONTHLY", amount=200_000),
                )
            ),
            ctx,
        )
        created = snapshot.classes[-1]
        assert created.id == "CLS-1"
        assert created.student_ids == ["S1", "S2"]

    def test_add_accepts_wire_alias(self) -> None:
        """The payload key is ``class`` on the wire."""
        payload = AddClassInput.model_validate(
            {"class": {"name": "Art", "fee": {"type": "MONTHLY", "amount": 1}}}
        )
        assert payload.school_class.name == "Art"

    def test_add_unknown_member(self, snapshot, ctx) -> None:
        with pytest.raises(NotFoundError, match="Student not found: S404"):
            add_class(
                snapshot,
                AddClassInput(
                    school_class=SchoolClass(
                        name="Physics", student_ids=["S404"], fee=ClassFee(type="MONTHLY")
                    )
                ),
                ctx,
            )

    def test_rename_cascades(self, linked, ctx) -> None:
        c1 = _class(linked, "C1")
        update_class(
            linked,
            UpdateClassInput(
                original_id="C1", updated_class=c1.model_copy(update={"id": "C1X"})
            ),
            ctx,
        )
        assert linked.attendance[0].class_id == "C1X"
        assert linked.progress_reports[0].class_id == "C1X"
        assert linked.announcements[0].class_id == "C1X"

    def test_delete_cascades(self, linked, ctx) -> None:
        """Class-scoped rows go, center-wide announcements and invoices stay."""
        delete_class(linked, DeleteClassInput(class_id="C1"), ctx)

        assert _class(linked, "C1") is None
        assert linked.attendance == []
        assert linked.progress_reports == []
        assert [a.id for a in linked.announcements] == ["N2"]
        assert len(linked.invoices) == 1


# --- Cascade helpers ---


class TestReconcileMembership:
    """Test single-pass membership reconciliation."""

    def test_rename_and_move(self) -> None:
        classes = [
            SchoolClass(id="A", name="A", student_ids=["x", "old"], fee=ClassFee(type="MONTHLY")),
            SchoolClass(id="B", name="B", student_ids=["old"], fee=ClassFee(type="MONTHLY")),
            SchoolClass(id="C", name="C", student_ids=[], fee=ClassFee(type="MONTHLY")),
        ]
        reconcile_membership(classes, "student_ids", "old", "new", ["A", "C"])

        assert classes[0].student_ids == ["x", "new"]
        assert classes[1].student_ids == []
        assert classes[2].student_ids == ["new"]


# --- Accounts & bulk ---


class TestUpdateUserPassword:
    """Test password updates by role."""

    def test_parent_sets_student_password(self, snapshot, ctx) -> None:
        update_user_password(
            snapshot, UpdateUserPasswordInput(user_id="S1", role="PARENT", new_password="pw"), ctx
        )
        assert snapshot.find_student("S1").password == "pw"

    def test_unsupported_role(self, snapshot, ctx) -> None:
        with pytest.raises(InvalidStateError):
            update_user_password(
                snapshot,
                UpdateUserPasswordInput(user_id="S1", role="ADMIN", new_password="pw"),
                ctx,
            )

    def test_unknown_user(self, snapshot, ctx) -> None:
        with pytest.raises(NotFoundError):
            update_user_password(
                snapshot,
                UpdateUserPasswordInput(user_id="S1", role="TEACHER", new_password="pw"),
                ctx,
            )


class TestClearCollections:
    """Test bulk collection clearing."""

    def test_clear_students(self, linked, ctx) -> None:
        clear_collections(linked, ["students"], ctx)
        assert linked.students == []
        assert linked.invoices == []
        assert linked.transactions == []
        assert all(c.student_ids == [] for c in linked.classes)
        assert len(linked.teachers) == 2

    def test_clear_teachers(self, linked, ctx) -> None:
        clear_collections(linked, ["teachers"], ctx)
        assert linked.payrolls == []
        assert all(c.teacher_ids == [] for c in linked.classes)

    def test_clear_classes_keeps_invoices(self, linked, ctx) -> None:
        clear_collections(linked, ["classes"], ctx)
        assert linked.classes == []
        assert linked.attendance == []
        assert len(linked.invoices) == 1
        assert [a.id for a in linked.announcements] == ["N2"]
