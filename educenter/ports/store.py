"""
Snapshot store port.

The store is a key-value blob store holding one JSON document per key.
Writes are compare-and-swap on an integer version stamp.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


class StoreConflictError(Exception):
    """The stored version changed between load and save."""


class StoreBusyError(Exception):
    """A write could not be committed within the allowed attempts."""


@dataclass(frozen=True)
class StoredDocument:
    """A JSON document and the version it was read at."""

    data: dict[str, Any]
    version: int


class SnapshotStorePort(Protocol):
    """Repository interface for the snapshot blob."""

    def load(self, key: str) -> StoredDocument | None:
        """Get the document stored under key, or None if never written."""
        ...

    def save(self, key: str, data: dict[str, Any], expected_version: int | None) -> int:
        """
        Store data under key and return the new version.

        ``expected_version`` None means "create or overwrite unconditionally".
        Raises StoreConflictError if the stored version differs from
        ``expected_version``.
        """
        ...
