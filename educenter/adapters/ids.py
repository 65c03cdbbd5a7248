"""
Id generators for entities created by the core.

Ids follow the ``PREFIX-<millis>-<random>`` scheme: unique in practice for a
single center's dataset, not cryptographically unique.
"""

from __future__ import annotations

import secrets
import string
import time

_ALPHABET = string.ascii_lowercase + string.digits


class TimestampIdGenerator:
    """Prefixed timestamp + random suffix ids."""

    def __init__(self, suffix_length: int = 5) -> None:
        self._suffix_length = suffix_length

    def new_id(self, prefix: str) -> str:
        millis = time.time_ns() // 1_000_000
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(self._suffix_length))
        return f"{prefix}-{millis}-{suffix}"


class SequentialIdGenerator:
    """Deterministic ids (``PREFIX-1``, ``PREFIX-2`` ...) counted per prefix."""

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}

    def new_id(self, prefix: str) -> str:
        self._counters[prefix] = self._counters.get(prefix, 0) + 1
        return f"{prefix}-{self._counters[prefix]}"
