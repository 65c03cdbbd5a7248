"""
Billing component - Operation payload models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from educenter.domain.entities import InvoiceStatus, WireModel

# --- Input Models ---


class CancelInvoiceInput(WireModel):
    invoice_id: str


class UpdateInvoiceStatusInput(WireModel):
    invoice_id: str
    status: InvoiceStatus


class AddAdjustmentInput(WireModel):
    """Manual ledger entry. CREDIT is recorded as a payment."""

    student_id: str
    amount: int
    date: str
    description: str = ""
    type: Literal["CREDIT", "DEBIT"]


class UpdateTransactionInput(WireModel):
    """
    Edit of a ledger row.

    A full transaction document is accepted; only amount, description and
    date are taken from it.
    """

    id: str
    amount: int
    description: str | None = None
    date: str | None = None


class DeleteTransactionInput(WireModel):
    transaction_id: str


# --- Fee Computation Results ---


@dataclass(frozen=True)
class ChargeLine:
    """One class's contribution to a monthly invoice."""

    class_id: str
    class_name: str
    amount: int
    sessions: int | None = None
    unit_fee: int | None = None


@dataclass(frozen=True)
class StudentCharges:
    """Fees owed by one student for one month."""

    student_id: str
    month: str
    lines: tuple[ChargeLine, ...]

    @property
    def total(self) -> int:
        return sum(line.amount for line in self.lines)
