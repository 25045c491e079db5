# fuzzycomplete/DB/api.py
from __future__ import annotations
import logging
from typing import Iterable, List, Protocol

from ..models import UsagePreference

log = logging.getLogger(__name__)


class UsageStore(Protocol):
    """
    Persistence collaborator for usage preferences.

    The engine only ever hands over / asks for the complete flat list;
    how and where it is kept is up to the implementation.
    """
    def load_usage_records(self) -> List[UsagePreference]: ...
    def save_usage_records(self, records: Iterable[UsagePreference]) -> None: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str) -> UsageStore:
    """
    Factory:
      - sqlite:///path -> SQLiteUsageStore (file and table created on demand)
      - memory://      -> MemoryUsageStore
    """
    if dsn.startswith("sqlite:///"):
        from .sqlite_store import SQLiteUsageStore
        path = dsn.removeprefix("sqlite:///")
        log.info("Opening SQLite usage store at %s", path)
        return SQLiteUsageStore(path)

    if dsn.startswith("memory://"):
        from .memory_store import MemoryUsageStore
        return MemoryUsageStore()

    raise ValueError(f"Unsupported store DSN: {dsn}")
