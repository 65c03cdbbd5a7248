"""
Records component - Progress reports, income and expense books,
announcements and center settings.
"""

from .component import (
    add_announcement,
    add_expense,
    add_income,
    add_progress_report,
    delete_announcement,
    delete_expense,
    delete_income,
    update_expense,
    update_income,
    update_settings,
)
from .models import AddAnnouncementInput, DeleteAnnouncementInput, DeleteItemInput

__all__ = [
    # Handlers
    "add_progress_report",
    "add_income",
    "update_income",
    "delete_income",
    "add_expense",
    "update_expense",
    "delete_expense",
    "add_announcement",
    "delete_announcement",
    "update_settings",
    # Input models
    "AddAnnouncementInput",
    "DeleteAnnouncementInput",
    "DeleteItemInput",
]
