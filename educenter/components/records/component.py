"""
Records component - Progress reports, income, expenses, announcements and
center settings.

These collections hang off the roster but carry no money on the student
ledger, so their handlers are plain appends and replacements.

Functional Core - no I/O.
"""

from __future__ import annotations

from typing import Literal

from educenter.domain.context import OperationContext
from educenter.domain.entities import (
    Announcement,
    CenterSettings,
    Expense,
    Income,
    ProgressReport,
    Snapshot,
)
from educenter.domain.errors import NotFoundError

from .models import AddAnnouncementInput, DeleteAnnouncementInput, DeleteItemInput

PROGRESS_REPORT_PREFIX = "PR"
INCOME_PREFIX = "INC"
EXPENSE_PREFIX = "EXP"
ANNOUNCEMENT_PREFIX = "ANN"

Book = Literal["income", "expenses"]


# --- Progress Reports ---


def add_progress_report(
    snapshot: Snapshot, payload: ProgressReport, ctx: OperationContext
) -> None:
    if snapshot.find_student(payload.student_id) is None:
        raise NotFoundError(f"Student with id '{payload.student_id}' not found")
    if snapshot.find_class(payload.class_id) is None:
        raise NotFoundError(f"Class with id '{payload.class_id}' not found")
    snapshot.progress_reports.append(
        payload.model_copy(update={"id": ctx.new_id(PROGRESS_REPORT_PREFIX)})
    )


# --- Income & Expenses ---


def _add_entry(snapshot: Snapshot, book: Book, entry: Income | Expense, prefix: str,
               ctx: OperationContext) -> None:
    getattr(snapshot, book).append(entry.model_copy(update={"id": ctx.new_id(prefix)}))


def _update_entry(snapshot: Snapshot, book: Book, entry: Income | Expense, label: str) -> None:
    rows = getattr(snapshot, book)
    index = next((i for i, row in enumerate(rows) if row.id == entry.id), None)
    if index is None:
        raise NotFoundError(f"{label} with id '{entry.id}' not found")
    rows[index] = entry


def _delete_entry(snapshot: Snapshot, book: Book, item_id: str) -> None:
    setattr(snapshot, book, [row for row in getattr(snapshot, book) if row.id != item_id])


def add_income(snapshot: Snapshot, payload: Income, ctx: OperationContext) -> None:
    _add_entry(snapshot, "income", payload, INCOME_PREFIX, ctx)


def update_income(snapshot: Snapshot, payload: Income, ctx: OperationContext) -> None:
    _update_entry(snapshot, "income", payload, "Income")


def delete_income(snapshot: Snapshot, payload: DeleteItemInput, ctx: OperationContext) -> None:
    _delete_entry(snapshot, "income", payload.item_id)


def add_expense(snapshot: Snapshot, payload: Expense, ctx: OperationContext) -> None:
    _add_entry(snapshot, "expenses", payload, EXPENSE_PREFIX, ctx)


def update_expense(snapshot: Snapshot, payload: Expense, ctx: OperationContext) -> None:
    _update_entry(snapshot, "expenses", payload, "Expense")


def delete_expense(snapshot: Snapshot, payload: DeleteItemInput, ctx: OperationContext) -> None:
    _delete_entry(snapshot, "expenses", payload.item_id)


# --- Announcements ---


def add_announcement(
    snapshot: Snapshot, payload: AddAnnouncementInput, ctx: OperationContext
) -> None:
    """Publish an announcement. Newest announcements come first."""
    if payload.class_id is not None and snapshot.find_class(payload.class_id) is None:
        raise NotFoundError(f"Class with id '{payload.class_id}' not found")
    announcement = Announcement(
        id=ctx.new_id(ANNOUNCEMENT_PREFIX),
        title=payload.title,
        content=payload.content,
        created_at=ctx.today(),
        created_by=payload.created_by,
        class_id=payload.class_id,
    )
    snapshot.announcements.insert(0, announcement)


def delete_announcement(
    snapshot: Snapshot, payload: DeleteAnnouncementInput, ctx: OperationContext
) -> None:
    snapshot.announcements = [a for a in snapshot.announcements if a.id != payload.id]


# --- Settings ---


def update_settings(snapshot: Snapshot, payload: CenterSettings, ctx: OperationContext) -> None:
    snapshot.settings = payload
