# fuzzycomplete/DB/sqlite_store.py
from __future__ import annotations
import os
import sqlite3
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from .api import UsageStore
from ..models import UsagePreference

_SCHEMA = """
CREATE TABLE IF NOT EXISTS usage (
  normalized TEXT PRIMARY KEY,
  use_count INTEGER NOT NULL,
  session_count INTEGER NOT NULL,
  last_used TEXT,
  favorited INTEGER NOT NULL
);
"""


def _to_text(ts: Optional[datetime]) -> Optional[str]:
    if ts is None:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat()


def _from_text(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    ts = datetime.fromisoformat(raw)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class SQLiteUsageStore(UsageStore):
    """One row per usage record; a save replaces the whole table."""
    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
        self.path = db_path
        self.conn: sqlite3.Connection = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.executescript(_SCHEMA)

    def load_usage_records(self) -> List[UsagePreference]:
        rows = self.conn.execute(
            "SELECT normalized, use_count, session_count, last_used, favorited "
            "FROM usage ORDER BY normalized"
        ).fetchall()
        return [
            UsagePreference(
                normalized_name=name,
                use_count=int(uses),
                session_count=int(sessions),
                last_used=_from_text(last),
                favorited=bool(fav),
            )
            for name, uses, sessions, last, fav in rows
        ]

    def save_usage_records(self, records: Iterable[UsagePreference]) -> None:
        rows = [
            (r.normalized_name, r.use_count, r.session_count,
             _to_text(r.last_used), int(r.favorited))
            for r in records
        ]
        with self.conn:  # one transaction: delete + insert
            self.conn.execute("DELETE FROM usage")
            self.conn.executemany(
                "INSERT OR REPLACE INTO usage(normalized, use_count, session_count, last_used, favorited) "
                "VALUES (?,?,?,?,?)",
                rows,
            )

    def close(self) -> None:
        self.conn.close()
