# src/e2e/test_engine.py
import threading

import pytest

from fuzzycomplete import SearchEngine, UsagePreference
from fuzzycomplete.DB.memory_store import MemoryUsageStore


def _engine(items, clock, store=None) -> SearchEngine:
    eng = SearchEngine(store, clock=clock)
    eng.load(items)
    return eng


def test_exact_match_ranks_first(clock):
    eng = _engine(["apple", "appetizer", "banana"], clock)
    assert eng.search("apple", 3)[0] == "apple"


def test_typo_still_finds_candidate(clock):
    eng = _engine(["banana"], clock)
    assert eng.search("bananna") == ["banana"]


def test_sound_alike_wins(clock):
    eng = _engine(["Smith", "Schulz", "Schmidt"], clock)
    assert eng.search("schmitt", 1) == ["Schmidt"]


def test_abbreviation_query(clock):
    eng = _engine(["Central Data Node", "Content Delivery Network", "cardamom"], clock)
    rows = eng.search_scored("cdn", 3)
    assert {"Central Data Node", "Content Delivery Network"} == {r.text for r in rows[:2]}


def test_result_cap(clock):
    eng = _engine([f"item {i}" for i in range(10)], clock)
    assert len(eng.search("item", 2)) == 2
    assert len(eng.search("item", 50)) == 10
    assert eng.search("item", 0) == []


def test_search_is_deterministic(clock):
    eng = _engine(["red car", "red bar", "blue car", "car red", "bar"], clock)
    first = eng.search("rad car", 5)
    for _ in range(5):
        assert eng.search("rad car", 5) == first


def test_empty_query_is_usage_dominated(clock):
    eng = _engine(["alpha", "beta", "gamma"], clock)
    eng.record_selection("gamma")
    rows = eng.search_scored("", 3)
    assert [r.text for r in rows] == ["gamma", "alpha", "beta"]
    # every candidate: boundary 100 + phonetic prefix 40 + bitap 60;
    # gamma adds recency 50 + one use + one session * 3
    assert [r.score for r in rows] == [254, 200, 200]


def test_favorite_moves_candidate_up(clock):
    eng = _engine(["alpha", "beta"], clock)
    eng.toggle_favorite("Beta")
    rows = eng.search_scored("", 2)
    assert [r.text for r in rows] == ["beta", "alpha"]
    assert rows[0].score - rows[1].score == 100


def test_record_selection_is_monotonic(clock):
    eng = _engine(["banana"], clock)
    first = eng.record_selection("banana")
    second = eng.record_selection("BANANA!")
    assert second.use_count > first.use_count
    assert second.session_count > first.session_count
    assert second.last_used == clock.now


def test_recency_decays_with_the_clock(clock):
    eng = _engine(["alpha"], clock)
    eng.record_selection("alpha")
    fresh = eng.search_scored("alpha", 1)[0].score
    clock.advance(hours=10)
    assert eng.search_scored("alpha", 1)[0].score == fresh - 10
    clock.advance(days=30)
    assert eng.search_scored("alpha", 1)[0].score == fresh - 50


def test_identical_normalized_texts_share_usage(clock):
    eng = _engine([("Müller", 1), ("Mueller", 2)], clock)
    eng.record_selection("Müller")
    assert eng.usage_for("Mueller").use_count == 1
    assert len(eng.usage) == 1


def test_toggle_favorite_flips(clock):
    eng = _engine(["alpha"], clock)
    assert eng.toggle_favorite("alpha").favorited is True
    assert eng.toggle_favorite("alpha").favorited is False
    assert eng.usage_for("alpha").last_used is None


def test_keys_survive_ranking(clock):
    eng = _engine([("Berlin", "de-be"), ("Bern", "ch-be")], clock)
    top = eng.search_scored("berlin", 1)[0]
    assert (top.text, top.key) == ("Berlin", "de-be")
    assert eng.search("berlin", 1) == ["Berlin"]


def test_load_with_shared_key(clock):
    eng = SearchEngine(clock=clock)
    eng.load_with_key(["red", "green"], key="colours")
    assert {r.key for r in eng.search_scored("re", 2)} == {"colours"}


def test_additive_load_keeps_previous_items(clock):
    eng = _engine(["alpha"], clock)
    eng.load(["beta"], additive=True)
    assert len(eng) == 2
    eng.load(["gamma"])
    assert [e.original for e in eng.entries] == ["gamma"]


def test_replace_load_reloads_usage_from_store(clock):
    store = MemoryUsageStore([UsagePreference("alpha", favorited=True)])
    eng = _engine(["alpha"], clock, store)
    assert eng.usage_for("alpha").favorited is True

    eng.toggle_favorite("alpha")
    eng.load(["alpha"])                       # unsaved change is dropped
    assert eng.usage_for("alpha").favorited is True

    eng.toggle_favorite("alpha")
    assert eng.save_usage() == 1
    eng.load(["alpha"])
    assert eng.usage_for("alpha").favorited is False
    assert store.saves == 1


def test_clear_empties_corpus(clock):
    eng = _engine(["alpha"], clock)
    eng.clear()
    assert len(eng) == 0
    assert eng.search("alpha") == []


def test_invalid_items_rejected_before_any_change(clock):
    eng = _engine(["alpha"], clock)
    with pytest.raises(TypeError):
        eng.load(["beta", None])
    with pytest.raises(TypeError):
        eng.load([("beta", 1, 2)])
    assert [e.original for e in eng.entries] == ["alpha"]


def test_batch_search(clock):
    eng = _engine(["apple", "banana"], clock)
    out = eng.batch_search(["apple", "banana"], 1)
    assert out == {"apple": ["apple"], "banana": ["banana"]}


def test_garbage_input_never_raises(clock):
    eng = _engine(["", "!!!", "ok"], clock)
    for q in ("", "   ", "???", "x" * 64, "ÄÖÜ"):
        assert len(eng.search(q, 3)) == 3


class _SlowStore(MemoryUsageStore):
    """Writes rows one at a time and pauses after the first."""
    def __init__(self) -> None:
        super().__init__()
        self.mid_save = threading.Event()
        self.release = threading.Event()
        self.seen = []

    def load_usage_records(self):
        rows = super().load_usage_records()
        self.seen.append(len(rows))
        return rows

    def save_usage_records(self, records):
        self._rows = []
        for rec in records:
            self._rows.append(rec)
            self.mid_save.set()
            self.release.wait(5)
        self.saves += 1


def test_reset_waits_for_a_running_save(clock):
    store = _SlowStore()
    eng = _engine(["alpha", "beta", "gamma"], clock, store)
    for text in ("alpha", "beta", "gamma"):
        eng.record_selection(text)
    store.seen.clear()

    saver = threading.Thread(target=eng.save_usage)
    saver.start()
    assert store.mid_save.wait(5)
    resetter = threading.Thread(target=eng.clear)
    resetter.start()
    resetter.join(timeout=0.2)
    assert resetter.is_alive()

    store.release.set()
    saver.join(5)
    resetter.join(5)
    assert store.seen == [3]
    assert len(eng.usage) == 3
