"""
Records component - Operation payload models.
"""

from __future__ import annotations

from educenter.domain.entities import WireModel


class DeleteItemInput(WireModel):
    """Removal of an income or expense row."""

    item_id: str


class AddAnnouncementInput(WireModel):
    title: str
    content: str = ""
    created_by: str = ""
    # None for a center-wide announcement.
    class_id: str | None = None


class DeleteAnnouncementInput(WireModel):
    id: str
