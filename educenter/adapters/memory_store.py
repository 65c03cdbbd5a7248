from __future__ import annotations

import copy
import threading
from typing import Any

from educenter.ports.store import StoreConflictError, StoredDocument


class InMemorySnapshotStore:
    """Process-local snapshot store."""

    def __init__(self) -> None:
        self._documents: dict[str, StoredDocument] = {}
        self._lock = threading.Lock()

    def load(self, key: str) -> StoredDocument | None:
        with self._lock:
            stored = self._documents.get(key)
            if stored is None:
                return None
            return StoredDocument(data=copy.deepcopy(stored.data), version=stored.version)

    def save(self, key: str, data: dict[str, Any], expected_version: int | None) -> int:
        with self._lock:
            current = self._documents.get(key)
            current_version = current.version if current else 0
            if expected_version is not None and expected_version != current_version:
                raise StoreConflictError(
                    f"Version conflict on '{key}': expected {expected_version}, "
                    f"found {current_version}"
                )
            new_version = current_version + 1
            self._documents[key] = StoredDocument(data=copy.deepcopy(data), version=new_version)
            return new_version
