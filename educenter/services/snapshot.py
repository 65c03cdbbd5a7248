"""
Snapshot service - load, apply and persist the center's data document.

Writes use optimistic concurrency: the document is read with its version,
the operation is applied in memory and the result is saved with a
compare-and-swap. A conflicting save restarts the whole cycle.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from educenter.components.applicator import parse_operation, apply_operation
from educenter.domain.context import OperationContext
from educenter.domain.entities import Snapshot
from educenter.domain.errors import InvalidPayloadError
from educenter.domain.seed import get_default_snapshot
from educenter.ports.clock import ClockPort
from educenter.ports.ids import IdGeneratorPort
from educenter.ports.store import SnapshotStorePort, StoreBusyError, StoreConflictError

logger = logging.getLogger(__name__)


class SnapshotService:
    def __init__(
        self,
        store: SnapshotStorePort,
        clock: ClockPort,
        ids: IdGeneratorPort,
        data_key: str = "educenter-data",
        max_write_attempts: int = 3,
        retry_backoff_ms: int = 50,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.ctx = OperationContext(clock=clock, ids=ids)
        self.data_key = data_key
        self.max_write_attempts = max_write_attempts
        self.retry_backoff_ms = retry_backoff_ms
        self._sleep = sleep
        self._write_lock = threading.Lock()

    def _load_versioned(self) -> tuple[Snapshot, int]:
        stored = self.store.load(self.data_key)
        if stored is not None:
            return Snapshot.model_validate(stored.data), stored.version

        seed = get_default_snapshot()
        try:
            version = self.store.save(self.data_key, seed.to_wire(), expected_version=0)
            logger.info("Seeded default dataset under '%s'", self.data_key)
            return seed, version
        except StoreConflictError:
            # Another writer seeded first.
            stored = self.store.load(self.data_key)
            if stored is None:
                raise
            return Snapshot.model_validate(stored.data), stored.version

    def load(self) -> Snapshot:
        """Current snapshot, seeding the default dataset on first read."""
        snapshot, _ = self._load_versioned()
        return snapshot

    def apply(self, raw_operation: Any) -> Snapshot:
        """
        Apply a wire operation and persist the result.

        Raises:
            DomainError: the operation was rejected; nothing is persisted.
            StoreBusyError: every attempt lost the compare-and-swap race.
        """
        operation = parse_operation(raw_operation)
        with self._write_lock:
            for attempt in range(1, self.max_write_attempts + 1):
                snapshot, version = self._load_versioned()
                updated = apply_operation(snapshot, operation, self.ctx)
                try:
                    self.store.save(self.data_key, updated.to_wire(), expected_version=version)
                    return updated
                except StoreConflictError as e:
                    logger.warning(
                        "Write conflict on %s (attempt %d/%d): %s",
                        operation.op, attempt, self.max_write_attempts, e,
                    )
                    if attempt < self.max_write_attempts:
                        self._sleep(self.retry_backoff_ms * attempt / 1000)

        raise StoreBusyError(
            f"Could not save '{operation.op}' after {self.max_write_attempts} attempts"
        )

    def restore(self, raw_snapshot: Any) -> Snapshot:
        """Replace the stored snapshot with a validated backup document."""
        try:
            snapshot = Snapshot.model_validate(raw_snapshot)
        except ValidationError as e:
            raise InvalidPayloadError(f"Invalid backup document: {e.error_count()} error(s)") from e
        with self._write_lock:
            self.store.save(self.data_key, snapshot.to_wire(), expected_version=None)
        logger.info("Restored snapshot from backup")
        return snapshot

    def reset(self) -> Snapshot:
        """Overwrite the stored snapshot with the default dataset."""
        snapshot = get_default_snapshot()
        with self._write_lock:
            self.store.save(self.data_key, snapshot.to_wire(), expected_version=None)
        logger.info("Reset data to the default dataset")
        return snapshot
