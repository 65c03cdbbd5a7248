"""
Billing component - Monthly invoices, cancellations and the student ledger.
"""

from ._impl import compute_student_charges, format_currency, render_details
from .component import (
    add_adjustment,
    cancel_invoice,
    clear_all_transactions,
    delete_transaction,
    generate_invoices,
    post_transaction,
    reclassify,
    update_invoice_status,
    update_transaction,
)
from .models import (
    AddAdjustmentInput,
    CancelInvoiceInput,
    ChargeLine,
    DeleteTransactionInput,
    StudentCharges,
    UpdateInvoiceStatusInput,
    UpdateTransactionInput,
)

__all__ = [
    # Handlers
    "generate_invoices",
    "cancel_invoice",
    "update_invoice_status",
    "add_adjustment",
    "update_transaction",
    "delete_transaction",
    "clear_all_transactions",
    # Helpers
    "post_transaction",
    "reclassify",
    "compute_student_charges",
    "render_details",
    "format_currency",
    # Models
    "AddAdjustmentInput",
    "CancelInvoiceInput",
    "UpdateInvoiceStatusInput",
    "UpdateTransactionInput",
    "DeleteTransactionInput",
    "ChargeLine",
    "StudentCharges",
]
