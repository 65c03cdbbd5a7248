"""
Payroll component - Monthly teacher salaries.

Payroll ids are derived from (teacher, month), so regenerating a month
overwrites the previous figures instead of duplicating them.

Functional Core - no I/O.
"""

from __future__ import annotations

from educenter.components.attendance import MonthInput, in_month
from educenter.domain.context import OperationContext
from educenter.domain.entities import Payroll, Snapshot, Teacher


def payroll_id(teacher_id: str, month_str: str) -> str:
    return f"PAY-{teacher_id}-{month_str}"


def count_sessions_taught(snapshot: Snapshot, teacher_id: str, month_str: str) -> int:
    """Distinct (class, date) sessions with any attendance in the teacher's classes."""
    class_ids = {c.id for c in snapshot.classes if teacher_id in c.teacher_ids}
    sessions = {
        f"{a.class_id}|{a.date}"
        for a in snapshot.attendance
        if a.class_id in class_ids and in_month(a.date, month_str)
    }
    return len(sessions)


def compute_payroll(
    snapshot: Snapshot, teacher: Teacher, month_str: str, calculation_date: str
) -> Payroll:
    if teacher.salary_type == "MONTHLY":
        sessions, base, total = 0, teacher.rate, teacher.rate
    else:
        sessions = count_sessions_taught(snapshot, teacher.id, month_str)
        base, total = 0, sessions * teacher.rate
    return Payroll(
        id=payroll_id(teacher.id, month_str),
        teacher_id=teacher.id,
        teacher_name=teacher.name,
        month=month_str,
        sessions_taught=sessions,
        rate=teacher.rate,
        base_salary=base,
        total_salary=total,
        calculation_date=calculation_date,
    )


def generate_payrolls(snapshot: Snapshot, payload: MonthInput, ctx: OperationContext) -> None:
    """Compute or recompute the month's payroll of every active teacher."""
    month_str = payload.month_str
    today = ctx.today()
    for teacher in snapshot.teachers:
        if teacher.status != "ACTIVE":
            continue
        payroll = compute_payroll(snapshot, teacher, month_str, today)
        index = next((i for i, p in enumerate(snapshot.payrolls) if p.id == payroll.id), None)
        if index is None:
            snapshot.payrolls.append(payroll)
        else:
            snapshot.payrolls[index] = payroll
