from educenter.domain.entities import Invoice, InvoiceStatus
from educenter.domain.errors import InvalidStateError


def can_transition(current: InvoiceStatus, new: InvoiceStatus) -> bool:
    """
    Determine if an invoice status transition is allowed.

    CANCELLED is terminal. A payment can be undone (PAID -> UNPAID), but a
    paid invoice is never cancelled directly.
    """
    if current == new:
        return True

    if current == "UNPAID":
        if new == "PAID":
            return True
        if new == "CANCELLED":
            return True

    if current == "PAID":
        if new == "UNPAID":
            return True  # Payment undo

    return False


def transition(invoice: Invoice, new_status: InvoiceStatus, today: str) -> Invoice:
    """
    Return a NEW Invoice with the updated status and paid date.
    Raises InvalidStateError if the transition is not allowed.
    """
    if invoice.status == new_status:
        return invoice.model_copy()

    if not can_transition(invoice.status, new_status):
        raise InvalidStateError(
            f"Invoice '{invoice.id}' cannot change from {invoice.status} to {new_status}"
        )

    paid_date = today if new_status == "PAID" else None
    return invoice.model_copy(update={"status": new_status, "paid_date": paid_date})
