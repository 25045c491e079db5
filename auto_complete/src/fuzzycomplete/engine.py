# fuzzycomplete/engine.py
from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple, Union

from . import config as CFG
from .models import CandidateRecord, ScoredCandidate, UsagePreference
from .normalize import normalize, tokenize
from .search import rank
from .DB.api import UsageStore
from .DB.memory_store import MemoryUsageStore

log = logging.getLogger(__name__)

Item = Union[str, Tuple[str, Hashable]]
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _record(item: Item) -> CandidateRecord:
    if isinstance(item, tuple):
        if len(item) != 2:
            raise TypeError(f"expected (text, key) pair, got tuple of length {len(item)}")
        text, key = item
        return CandidateRecord.build(text, key)
    return CandidateRecord.build(item)


class SearchEngine:
    """
    Fuzzy autocomplete over an in-memory corpus, biased by learned usage.

    Public API:
      * load(items, additive=False):  (re)build the corpus
      * search(query, max_results):   ranked display strings
      * search_scored(...):           same ranking with scores and keys
      * record_selection(text) / toggle_favorite(text): feedback
      * save_usage():                 hand usage records to the store

    Concurrency: one writer at a time (internal lock), any number of
    readers. The corpus tuple and the usage mapping are never mutated in
    place; writers build a new one and rebind the attribute, so a search
    works on whatever snapshot it picked up at entry.
    """

    # ------------- lifecycle -------------

    def __init__(self,
                 store: Optional[UsageStore] = None,
                 *,
                 clock: Clock = _utcnow) -> None:
        self._store: UsageStore = store if store is not None else MemoryUsageStore()
        self._clock = clock
        self._write_lock = threading.Lock()
        self._entries: Tuple[CandidateRecord, ...] = ()
        self._usage: Mapping[str, UsagePreference] = MappingProxyType({})
        with self._write_lock:
            self._reset_usage()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[CandidateRecord, ...]:
        return self._entries

    @property
    def usage(self) -> Mapping[str, UsagePreference]:
        return self._usage

    # /* ~~~ Build (or extend) the corpus ~~~ */
    def load(self, items: Iterable[Item], additive: bool = False) -> None:
        """
        Index `items`: display strings or (display string, key) pairs.

        Without `additive` the previous corpus is dropped and usage is
        reloaded from the store. Every item is validated before any state
        changes; a non-string item raises TypeError.
        """
        built = [_record(it) for it in items]
        with self._write_lock:
            if additive:
                self._entries = self._entries + tuple(built)
            else:
                self._entries = tuple(built)
                self._reset_usage()
        log.info("Loaded %d candidates (additive=%s, total=%d)",
                 len(built), additive, len(self._entries))

    def load_with_key(self, texts: Iterable[str], key: Hashable, additive: bool = False) -> None:
        """Index every text under one shared key."""
        self.load(((t, key) for t in texts), additive=additive)

    def clear(self) -> None:
        with self._write_lock:
            self._entries = ()
            self._reset_usage()
        log.info("Corpus cleared")

    # ------------- query -------------

    def search_scored(self, query: str, max_results: int = CFG.TOP_K) -> List[ScoredCandidate]:
        q_norm = normalize(query)
        q_tokens = tokenize(q_norm)
        entries, usage = self._entries, self._usage
        return rank(entries, usage, q_norm, q_tokens, self._clock(), max_results)

    # /* ~~~ Run autocomplete for a user query and return display strings ~~~ */
    def search(self, query: str, max_results: int = CFG.TOP_K) -> List[str]:
        return [r.text for r in self.search_scored(query, max_results)]

    def batch_search(self, queries: Iterable[str], max_results: int = CFG.TOP_K) -> Dict[str, List[str]]:
        return {q: self.search(q, max_results) for q in queries}

    # ------------- feedback -------------

    def record_selection(self, text: str) -> UsagePreference:
        """Count one selection of `text` and stamp it with the current time."""
        now = self._clock()
        return self._update(text, lambda u: u.selected(now))

    def toggle_favorite(self, text: str) -> UsagePreference:
        return self._update(text, UsagePreference.toggled)

    def usage_for(self, text: str) -> Optional[UsagePreference]:
        return self._usage.get(normalize(text))

    # ------------- persistence -------------

    def save_usage(self) -> int:
        # store writes and resets never interleave
        with self._write_lock:
            records = list(self._usage.values())
            self._store.save_usage_records(records)
        log.info("Saved %d usage records", len(records))
        return len(records)

    def shutdown(self) -> None:
        try:
            with self._write_lock:
                self._store.close()
        finally:
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _update(self, text: str,
                change: Callable[[UsagePreference], UsagePreference]) -> UsagePreference:
        key = normalize(text)
        with self._write_lock:
            current = self._usage.get(key) or UsagePreference(normalized_name=key)
            updated = change(current)
            table = dict(self._usage)
            table[key] = updated
            self._usage = MappingProxyType(table)
        return updated

    def _reset_usage(self) -> None:
        """Replace the usage table with what the store holds. Caller holds the lock."""
        table: Dict[str, UsagePreference] = {}
        for rec in self._store.load_usage_records() or []:
            table[rec.normalized_name] = rec
        self._usage = MappingProxyType(table)
        log.info("Usage table reset: %d records", len(table))
