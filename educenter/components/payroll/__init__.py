"""
Payroll component - Deterministic monthly teacher payroll.
"""

from .component import compute_payroll, count_sessions_taught, generate_payrolls, payroll_id

__all__ = [
    "generate_payrolls",
    "compute_payroll",
    "count_sessions_taught",
    "payroll_id",
]
