# fuzzycomplete/DB/memory_store.py
from __future__ import annotations
from typing import Iterable, List, Optional
from .api import UsageStore
from ..models import UsagePreference


class MemoryUsageStore(UsageStore):
    """Keeps the last saved list in memory (tests, ephemeral runs)."""
    def __init__(self, records: Optional[Iterable[UsagePreference]] = None) -> None:
        self._rows: List[UsagePreference] = list(records or [])
        self.saves = 0

    def load_usage_records(self) -> List[UsagePreference]:
        return list(self._rows)

    def save_usage_records(self, records: Iterable[UsagePreference]) -> None:
        self._rows = list(records)
        self.saves += 1

    def close(self) -> None:
        self._rows.clear()
