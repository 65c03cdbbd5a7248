import os
from functools import lru_cache
from pathlib import Path

from educenter.adapters.clock import SystemClock
from educenter.adapters.ids import TimestampIdGenerator
from educenter.adapters.memory_store import InMemorySnapshotStore
from educenter.adapters.sqlite.store import SQLiteSnapshotStore
from educenter.ports.store import SnapshotStorePort
from educenter.rules.loader import load_rules
from educenter.rules.models import Rules
from educenter.services.snapshot import SnapshotService


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("EDUCENTER_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "educenter.db")
        self.rules_path = Path(
            os.environ.get("EDUCENTER_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


# --- Store ---
@lru_cache
def get_store() -> SnapshotStorePort:
    rules = get_rules()
    if rules.store.backend == "memory":
        return InMemorySnapshotStore()
    settings = get_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return SQLiteSnapshotStore(settings.db_path)


# --- Services ---
# One instance per process so its write lock serialises every request.
@lru_cache
def get_snapshot_service() -> SnapshotService:
    rules = get_rules()
    return SnapshotService(
        store=get_store(),
        clock=SystemClock(),
        ids=TimestampIdGenerator(),
        data_key=rules.store.data_key,
        max_write_attempts=rules.store.max_write_attempts,
        retry_backoff_ms=rules.store.retry_backoff_ms,
    )
