from __future__ import annotations

from dataclasses import dataclass

from educenter.ports.clock import ClockPort
from educenter.ports.ids import IdGeneratorPort


@dataclass(frozen=True)
class OperationContext:
    """Side-effect providers injected into every operation handler."""

    clock: ClockPort
    ids: IdGeneratorPort

    def today(self) -> str:
        """Current date as YYYY-MM-DD."""
        return self.clock.now().date().isoformat()

    def new_id(self, prefix: str) -> str:
        return self.ids.new_id(prefix)
