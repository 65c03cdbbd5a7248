"""
Billing component - Invoices and the student ledger.

Every balance change goes through a transaction row, and every transaction
row change moves the owning student's balance by exactly the same delta, so
``student.balance == sum(transaction.amount)`` holds after each handler.

Functional Core - no I/O.
"""

from __future__ import annotations

import logging

from educenter.components.attendance import MonthInput
from educenter.domain.context import OperationContext
from educenter.domain.entities import (
    Invoice,
    Snapshot,
    Student,
    Transaction,
    TransactionType,
)
from educenter.domain.errors import AlreadyPaidError, NotFoundError
from educenter.domain.state import transition

from ._impl import compute_student_charges, render_details
from .models import (
    AddAdjustmentInput,
    CancelInvoiceInput,
    DeleteTransactionInput,
    StudentCharges,
    UpdateInvoiceStatusInput,
    UpdateTransactionInput,
)

logger = logging.getLogger(__name__)

INVOICE_PREFIX = "INV"
TRANSACTION_PREFIX = "TRX"

# --- Ledger Posting ---


def _require_student(snapshot: Snapshot, student_id: str) -> Student:
    student = snapshot.find_student(student_id)
    if student is None:
        raise NotFoundError(f"Student with id '{student_id}' not found")
    return student


def post_transaction(
    snapshot: Snapshot,
    student: Student,
    ctx: OperationContext,
    *,
    type: TransactionType,
    amount: int,
    description: str,
    date: str,
    related_invoice_id: str | None = None,
) -> Transaction:
    """Append a ledger row and move the student's balance by its amount."""
    transaction = Transaction(
        id=ctx.new_id(TRANSACTION_PREFIX),
        student_id=student.id,
        date=date,
        type=type,
        description=description,
        amount=amount,
        related_invoice_id=related_invoice_id,
    )
    snapshot.transactions.append(transaction)
    student.balance += amount
    return transaction


def _invoice_transaction(snapshot: Snapshot, invoice_id: str) -> Transaction | None:
    return next(
        (
            t
            for t in snapshot.transactions
            if t.related_invoice_id == invoice_id and t.type == "INVOICE"
        ),
        None,
    )


def _replace_invoice(snapshot: Snapshot, updated: Invoice) -> None:
    snapshot.invoices = [updated if i.id == updated.id else i for i in snapshot.invoices]


# --- Invoice Generation ---


def _needs_reprice(snapshot: Snapshot, invoice: Invoice, charges: StudentCharges) -> bool:
    """
    An UNPAID invoice is out of date when its charges changed, or when its
    ledger row is gone while something is still owed. A manually edited row
    with unchanged charges is left alone.
    """
    if invoice.amount != charges.total:
        return True
    return charges.total > 0 and _invoice_transaction(snapshot, invoice.id) is None


def _reprice_invoice(
    snapshot: Snapshot,
    student: Student,
    invoice: Invoice,
    charges: StudentCharges,
    ctx: OperationContext,
) -> None:
    """
    Bring an UNPAID invoice and its ledger row in line with new charges.

    The balance moves by the change of the ledger row itself, which may have
    been edited since the invoice was issued.
    """
    invoice.amount = charges.total
    invoice.details = render_details(charges)

    linked = _invoice_transaction(snapshot, invoice.id)
    if linked is None:
        # The ledger row was deleted (and its amount reversed), so the full
        # amount is owed again.
        if charges.total == 0:
            return
        post_transaction(
            snapshot,
            student,
            ctx,
            type="INVOICE",
            amount=-charges.total,
            description=f"Tuition invoice {invoice.month}",
            date=ctx.today(),
            related_invoice_id=invoice.id,
        )
        return

    delta = -charges.total - linked.amount
    linked.amount = -charges.total
    student.balance += delta


def _issue_invoice(
    snapshot: Snapshot,
    student: Student,
    charges: StudentCharges,
    payload: MonthInput,
    ctx: OperationContext,
) -> Invoice:
    today = ctx.today()
    invoice = Invoice(
        id=ctx.new_id(INVOICE_PREFIX),
        student_id=student.id,
        student_name=student.name,
        month=charges.month,
        amount=charges.total,
        details=render_details(charges),
        status="UNPAID",
        generated_date=today,
        paid_date=None,
    )
    snapshot.invoices.append(invoice)
    post_transaction(
        snapshot,
        student,
        ctx,
        type="INVOICE",
        amount=-charges.total,
        description=f"Tuition invoice {payload.month}/{payload.year}",
        date=today,
        related_invoice_id=invoice.id,
    )
    return invoice


def generate_invoices(snapshot: Snapshot, payload: MonthInput, ctx: OperationContext) -> None:
    """
    Bill every active student for a month.

    Settled (PAID or CANCELLED) invoices are never touched. An UNPAID invoice
    whose charges changed is repriced in place, and the balance moves by the
    change of its ledger row only. Zero-amount invoices are never created.
    """
    month_str = payload.month_str
    for student in snapshot.students:
        if student.status != "ACTIVE":
            continue

        charges = compute_student_charges(snapshot, student.id, month_str)
        existing = next(
            (i for i in snapshot.invoices if i.student_id == student.id and i.month == month_str),
            None,
        )
        if existing is not None:
            if existing.status == "UNPAID" and _needs_reprice(snapshot, existing, charges):
                logger.debug(
                    "Repricing invoice %s: %s -> %s", existing.id, existing.amount, charges.total
                )
                _reprice_invoice(snapshot, student, existing, charges, ctx)
        elif charges.total > 0:
            _issue_invoice(snapshot, student, charges, payload, ctx)


# --- Invoice Status ---


def cancel_invoice(snapshot: Snapshot, payload: CancelInvoiceInput, ctx: OperationContext) -> None:
    """
    Cancel an UNPAID invoice and credit its amount back to the student.

    Paid invoices must be reversed with an adjustment instead.
    """
    invoice = snapshot.find_invoice(payload.invoice_id)
    if invoice is None:
        raise NotFoundError(f"Invoice with id '{payload.invoice_id}' not found")
    if invoice.status == "CANCELLED":
        return
    if invoice.status == "PAID":
        raise AlreadyPaidError(f"Invoice '{invoice.id}' is already paid and cannot be cancelled")
    student = _require_student(snapshot, invoice.student_id)

    today = ctx.today()
    _replace_invoice(snapshot, transition(invoice, "CANCELLED", today))
    post_transaction(
        snapshot,
        student,
        ctx,
        type="ADJUSTMENT_CREDIT",
        amount=invoice.amount,
        description=f"Cancelled invoice #{invoice.id}",
        date=today,
        related_invoice_id=invoice.id,
    )


def update_invoice_status(
    snapshot: Snapshot, payload: UpdateInvoiceStatusInput, ctx: OperationContext
) -> None:
    """Mark an invoice paid or unpaid. Cancelling goes through cancel_invoice."""
    if payload.status == "CANCELLED":
        cancel_invoice(snapshot, CancelInvoiceInput(invoice_id=payload.invoice_id), ctx)
        return

    invoice = snapshot.find_invoice(payload.invoice_id)
    if invoice is None:
        raise NotFoundError(f"Invoice with id '{payload.invoice_id}' not found")
    _replace_invoice(snapshot, transition(invoice, payload.status, ctx.today()))


# --- Ledger Edits ---


def add_adjustment(snapshot: Snapshot, payload: AddAdjustmentInput, ctx: OperationContext) -> None:
    student = _require_student(snapshot, payload.student_id)
    if payload.type == "CREDIT":
        amount, tx_type = abs(payload.amount), "PAYMENT"
    else:
        amount, tx_type = -abs(payload.amount), "ADJUSTMENT_DEBIT"
    post_transaction(
        snapshot,
        student,
        ctx,
        type=tx_type,
        amount=amount,
        description=payload.description,
        date=payload.date,
    )


def reclassify(current: TransactionType, amount: int) -> TransactionType:
    """Type of an edited row given its new signed amount."""
    if current == "INVOICE":
        return "INVOICE"
    if amount < 0:
        return "ADJUSTMENT_DEBIT"
    if current == "PAYMENT":
        return "PAYMENT"
    return "ADJUSTMENT_CREDIT"


def update_transaction(
    snapshot: Snapshot, payload: UpdateTransactionInput, ctx: OperationContext
) -> None:
    transaction = snapshot.find_transaction(payload.id)
    if transaction is None:
        raise NotFoundError(f"Transaction with id '{payload.id}' not found")
    student = _require_student(snapshot, transaction.student_id)

    delta = payload.amount - transaction.amount
    transaction.amount = payload.amount
    transaction.type = reclassify(transaction.type, payload.amount)
    if payload.description is not None:
        transaction.description = payload.description
    if payload.date is not None:
        transaction.date = payload.date
    student.balance += delta


def delete_transaction(
    snapshot: Snapshot, payload: DeleteTransactionInput, ctx: OperationContext
) -> None:
    transaction = snapshot.find_transaction(payload.transaction_id)
    if transaction is None:
        return
    snapshot.transactions = [t for t in snapshot.transactions if t.id != transaction.id]
    student = snapshot.find_student(transaction.student_id)
    if student is not None:
        student.balance -= transaction.amount


def clear_all_transactions(snapshot: Snapshot, payload: None, ctx: OperationContext) -> None:
    """Zero every balance and drop the whole ledger, invoices included."""
    for student in snapshot.students:
        student.balance = 0
    snapshot.transactions = []
    snapshot.invoices = []
