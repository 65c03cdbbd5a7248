from __future__ import annotations

import json
import sqlite3
from typing import Any

from educenter.ports.store import StoreConflictError, StoredDocument

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_documents (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    version INTEGER NOT NULL
)
"""


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteSnapshotStore:
    """Snapshot blobs stored as JSON text, one row per key."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._ensure_schema()

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(SCHEMA)
            conn.commit()
        finally:
            conn.close()

    def load(self, key: str) -> StoredDocument | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT value, version FROM kv_documents WHERE key = ?", (key,)
            ).fetchone()
            if not row:
                return None
            return StoredDocument(data=json.loads(row["value"]), version=row["version"])
        finally:
            conn.close()

    def save(self, key: str, data: dict[str, Any], expected_version: int | None) -> int:
        payload = json.dumps(data, ensure_ascii=False)
        conn = self._get_conn()
        try:
            # Take the write lock before reading the version so the
            # check-and-set is atomic across connections.
            conn.execute("BEGIN IMMEDIATE")
            row = conn.execute(
                "SELECT version FROM kv_documents WHERE key = ?", (key,)
            ).fetchone()
            current_version = row["version"] if row else 0
            if expected_version is not None and expected_version != current_version:
                raise StoreConflictError(
                    f"Version conflict on '{key}': expected {expected_version}, "
                    f"found {current_version}"
                )
            new_version = current_version + 1
            conn.execute(
                """
                INSERT INTO kv_documents (key, value, version) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value=excluded.value,
                    version=excluded.version
                """,
                (key, payload, new_version),
            )
            conn.commit()
            return new_version
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
