"""
Fee computation - pure helpers used by invoice generation.
"""

from __future__ import annotations

from educenter.components.attendance import in_month
from educenter.domain.entities import ATTENDED_STATUSES, Snapshot

from .models import ChargeLine, StudentCharges

CURRENCY_SYMBOL = "₫"


def format_currency(amount: int) -> str:
    """Format an amount the vi-VN way: ``300000`` -> ``300.000 ₫``."""
    return f"{amount:,} {CURRENCY_SYMBOL}".replace(",", ".")


def count_attended_sessions(
    snapshot: Snapshot, student_id: str, class_id: str, month_str: str
) -> int:
    return sum(
        1
        for a in snapshot.attendance
        if a.student_id == student_id
        and a.class_id == class_id
        and in_month(a.date, month_str)
        and a.status in ATTENDED_STATUSES
    )


def compute_student_charges(snapshot: Snapshot, student_id: str, month_str: str) -> StudentCharges:
    """
    Compute what a student owes for a month across all enrolled classes.

    Flat fees (MONTHLY, PER_COURSE) apply once; PER_SESSION fees are charged
    per PRESENT or LATE record in the month. Zero contributions are omitted.
    """
    lines: list[ChargeLine] = []
    for school_class in snapshot.classes:
        if student_id not in school_class.student_ids:
            continue
        fee = school_class.fee
        if fee.type in ("MONTHLY", "PER_COURSE"):
            if fee.amount > 0:
                lines.append(
                    ChargeLine(
                        class_id=school_class.id,
                        class_name=school_class.name,
                        amount=fee.amount,
                    )
                )
        elif fee.type == "PER_SESSION":
            sessions = count_attended_sessions(snapshot, student_id, school_class.id, month_str)
            if sessions > 0 and fee.amount > 0:
                lines.append(
                    ChargeLine(
                        class_id=school_class.id,
                        class_name=school_class.name,
                        amount=sessions * fee.amount,
                        sessions=sessions,
                        unit_fee=fee.amount,
                    )
                )
    return StudentCharges(student_id=student_id, month=month_str, lines=tuple(lines))


def render_details(charges: StudentCharges) -> str:
    """Itemized invoice text, one line per charged class."""
    rows = []
    for line in charges.lines:
        if line.sessions is None:
            rows.append(f"- Class {line.class_name}: {format_currency(line.amount)}")
        else:
            rows.append(
                f"- Class {line.class_name}: {line.sessions} sessions x "
                f"{format_currency(line.unit_fee or 0)} = {format_currency(line.amount)}"
            )
    return "\n".join(rows)
