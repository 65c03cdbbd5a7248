"""
Applicator component - Operation parsing and dispatch.
"""

from .component import HANDLERS, apply_operation, parse_operation, run
from .models import Operation

__all__ = [
    # Component entry points
    "run",
    "apply_operation",
    "parse_operation",
    # Registry
    "HANDLERS",
    # Models
    "Operation",
]
