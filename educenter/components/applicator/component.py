"""
Applicator component - Apply one operation to a snapshot.

The input snapshot is never mutated: the handler works on a deep copy and
the copy is returned only when the handler completes, so a failed operation
leaves no partial change behind.

Functional Core - no I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from educenter.components import attendance, billing, payroll, records, roster
from educenter.domain.context import OperationContext
from educenter.domain.entities import Snapshot
from educenter.domain.errors import DomainError, InvalidPayloadError, UnknownOperationError

from .models import Operation, operation_adapter

logger = logging.getLogger(__name__)

Handler = Callable[[Snapshot, Any, OperationContext], None]

HANDLERS: dict[str, Handler] = {
    # Roster
    "addStudent": roster.add_student,
    "updateStudent": roster.update_student,
    "deleteStudent": roster.delete_student,
    "addTeacher": roster.add_teacher,
    "updateTeacher": roster.update_teacher,
    "deleteTeacher": roster.delete_teacher,
    "addStaff": roster.add_staff,
    "updateStaff": roster.update_staff,
    "deleteStaff": roster.delete_staff,
    "addClass": roster.add_class,
    "updateClass": roster.update_class,
    "deleteClass": roster.delete_class,
    "updateUserPassword": roster.update_user_password,
    "clearCollections": roster.clear_collections,
    # Attendance
    "updateAttendance": attendance.update_attendance,
    "deleteAttendanceForDate": attendance.delete_attendance_for_date,
    "deleteAttendanceByMonth": attendance.delete_attendance_by_month,
    # Billing
    "generateInvoices": billing.generate_invoices,
    "cancelInvoice": billing.cancel_invoice,
    "updateInvoiceStatus": billing.update_invoice_status,
    "addAdjustment": billing.add_adjustment,
    "updateTransaction": billing.update_transaction,
    "deleteTransaction": billing.delete_transaction,
    "clearAllTransactions": billing.clear_all_transactions,
    # Payroll
    "generatePayrolls": payroll.generate_payrolls,
    # Records
    "addProgressReport": records.add_progress_report,
    "addIncome": records.add_income,
    "updateIncome": records.update_income,
    "deleteIncome": records.delete_income,
    "addExpense": records.add_expense,
    "updateExpense": records.update_expense,
    "deleteExpense": records.delete_expense,
    "addAnnouncement": records.add_announcement,
    "deleteAnnouncement": records.delete_announcement,
    "updateSettings": records.update_settings,
}


def _format_validation_errors(op: str, exc: ValidationError) -> str:
    """Render pydantic errors as ``field: message`` pairs."""
    parts = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        # Discriminated unions prefix the location with the tag value.
        if loc and loc[0] == op:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) if loc else "_schema"
        parts.append(f"{field}: {error.get('msg', 'Invalid value')}")
    return f"Invalid payload for '{op}': " + "; ".join(parts)


def _validate(raw: Any) -> Operation:
    if not isinstance(raw, dict) or not isinstance(raw.get("op"), str):
        raise InvalidPayloadError("Operation must be an object with a string 'op'")
    op = raw["op"]
    if op not in HANDLERS:
        raise UnknownOperationError(f"Unknown operation: {op}")
    try:
        return operation_adapter.validate_python(raw)
    except ValidationError as e:
        raise InvalidPayloadError(_format_validation_errors(op, e)) from e


def parse_operation(raw: Any) -> Operation:
    """
    Validate a wire operation ``{"op": ..., "payload": ...}``.

    Raises:
        UnknownOperationError: op names no registered handler.
        InvalidPayloadError: the document or its payload does not validate.
    """
    try:
        return _validate(raw)
    except DomainError as e:
        logger.warning("Rejected operation: %s", e.message)
        raise


def apply_operation(snapshot: Snapshot, operation: Operation, ctx: OperationContext) -> Snapshot:
    """Return a new snapshot with the operation applied."""
    working = snapshot.model_copy(deep=True)
    try:
        HANDLERS[operation.op](working, operation.payload, ctx)
    except DomainError as e:
        logger.warning("Rejected %s: %s", operation.op, e.message)
        raise
    logger.info("Applied %s", operation.op)
    return working


def run(snapshot: Snapshot, raw: Any, ctx: OperationContext) -> Snapshot:
    """Parse a wire operation and apply it."""
    return apply_operation(snapshot, parse_operation(raw), ctx)
