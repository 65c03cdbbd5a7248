"""
Applicator component - The closed set of operations.

Every operation travels as ``{"op": <name>, "payload": <document>}``. The
union below is discriminated on ``op`` so pydantic picks the payload model
from the name alone.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter

from educenter.components.attendance import DeleteAttendanceForDateInput, MonthInput
from educenter.components.billing import (
    AddAdjustmentInput,
    CancelInvoiceInput,
    DeleteTransactionInput,
    UpdateInvoiceStatusInput,
    UpdateTransactionInput,
)
from educenter.components.records import (
    AddAnnouncementInput,
    DeleteAnnouncementInput,
    DeleteItemInput,
)
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
)
from educenter.domain.entities import (
    AttendanceRecord,
    CenterSettings,
    CollectionName,
    Expense,
    Income,
    ProgressReport,
    WireModel,
)

# --- Roster ---


class AddStudent(WireModel):
    op: Literal["addStudent"]
    payload: AddStudentInput


class UpdateStudent(WireModel):
    op: Literal["updateStudent"]
    payload: UpdateStudentInput


class DeleteStudent(WireModel):
    op: Literal["deleteStudent"]
    payload: DeleteStudentInput


class AddTeacher(WireModel):
    op: Literal["addTeacher"]
    payload: AddTeacherInput


class UpdateTeacher(WireModel):
    op: Literal["updateTeacher"]
    payload: UpdateTeacherInput


class DeleteTeacher(WireModel):
    op: Literal["deleteTeacher"]
    payload: DeleteTeacherInput


class AddStaff(WireModel):
    op: Literal["addStaff"]
    payload: AddStaffInput


class UpdateStaff(WireModel):
    op: Literal["updateStaff"]
    payload: UpdateStaffInput


class DeleteStaff(WireModel):
    op: Literal["deleteStaff"]
    payload: DeleteStaffInput


class AddClass(WireModel):
    op: Literal["addClass"]
    payload: AddClassInput


class UpdateClass(WireModel):
    op: Literal["updateClass"]
    payload: UpdateClassInput


class DeleteClass(WireModel):
    op: Literal["deleteClass"]
    payload: DeleteClassInput


class UpdateUserPassword(WireModel):
    op: Literal["updateUserPassword"]
    payload: UpdateUserPasswordInput


class ClearCollections(WireModel):
    op: Literal["clearCollections"]
    payload: list[CollectionName]


# --- Attendance ---


class UpdateAttendance(WireModel):
    op: Literal["updateAttendance"]
    payload: list[AttendanceRecord]


class DeleteAttendanceForDate(WireModel):
    op: Literal["deleteAttendanceForDate"]
    payload: DeleteAttendanceForDateInput


class DeleteAttendanceByMonth(WireModel):
    op: Literal["deleteAttendanceByMonth"]
    payload: MonthInput


# --- Billing ---


class GenerateInvoices(WireModel):
    op: Literal["generateInvoices"]
    payload: MonthInput


class CancelInvoice(WireModel):
    op: Literal["cancelInvoice"]
    payload: CancelInvoiceInput


class UpdateInvoiceStatus(WireModel):
    op: Literal["updateInvoiceStatus"]
    payload: UpdateInvoiceStatusInput


class AddAdjustment(WireModel):
    op: Literal["addAdjustment"]
    payload: AddAdjustmentInput


class UpdateTransaction(WireModel):
    op: Literal["updateTransaction"]
    payload: UpdateTransactionInput


class DeleteTransaction(WireModel):
    op: Literal["deleteTransaction"]
    payload: DeleteTransactionInput


class ClearAllTransactions(WireModel):
    op: Literal["clearAllTransactions"]
    payload: None = None


# --- Payroll ---


class GeneratePayrolls(WireModel):
    op: Literal["generatePayrolls"]
    payload: MonthInput


# --- Records ---


class AddProgressReport(WireModel):
    op: Literal["addProgressReport"]
    payload: ProgressReport


class AddIncome(WireModel):
    op: Literal["addIncome"]
    payload: Income


class UpdateIncome(WireModel):
    op: Literal["updateIncome"]
    payload: Income


class DeleteIncome(WireModel):
    op: Literal["deleteIncome"]
    payload: DeleteItemInput


class AddExpense(WireModel):
    op: Literal["addExpense"]
    payload: Expense


class UpdateExpense(WireModel):
    op: Literal["updateExpense"]
    payload: Expense


class DeleteExpense(WireModel):
    op: Literal["deleteExpense"]
    payload: DeleteItemInput


class AddAnnouncement(WireModel):
    op: Literal["addAnnouncement"]
    payload: AddAnnouncementInput


class DeleteAnnouncement(WireModel):
    op: Literal["deleteAnnouncement"]
    payload: DeleteAnnouncementInput


class UpdateSettings(WireModel):
    op: Literal["updateSettings"]
    payload: CenterSettings


Operation = Annotated[
    Union[
        AddStudent,
        UpdateStudent,
        DeleteStudent,
        AddTeacher,
        UpdateTeacher,
        DeleteTeacher,
        AddStaff,
        UpdateStaff,
        DeleteStaff,
        AddClass,
        UpdateClass,
        DeleteClass,
        UpdateUserPassword,
        ClearCollections,
        UpdateAttendance,
        DeleteAttendanceForDate,
        DeleteAttendanceByMonth,
        GenerateInvoices,
        CancelInvoice,
        UpdateInvoiceStatus,
        AddAdjustment,
        UpdateTransaction,
        DeleteTransaction,
        ClearAllTransactions,
        GeneratePayrolls,
        AddProgressReport,
        AddIncome,
        UpdateIncome,
        DeleteIncome,
        AddExpense,
        UpdateExpense,
        DeleteExpense,
        AddAnnouncement,
        DeleteAnnouncement,
        UpdateSettings,
    ],
    Field(discriminator="op"),
]

operation_adapter: TypeAdapter[Operation] = TypeAdapter(Operation)
