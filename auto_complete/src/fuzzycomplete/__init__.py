"""
Fuzzy Autocomplete Module

This module ranks autocomplete candidates for short, misspelled or reordered
queries. Every candidate is scored by several independent matchers
(substring/prefix, abbreviation, LCS + edit distance, phonetic folding,
bitap, wildcard edit distance) and the textual score is blended with a
learned usage signal (recency, frequency, favorites).

The module is organised by concern:
- Text normalization and phonetic folding
- String distance algorithms
- Score fusion and ranking
- Data models and usage persistence

Main Classes:
    SearchEngine: load candidates, search, record feedback
    UsageStore / make_store: where usage statistics are kept

Example Usage:
    from fuzzycomplete import SearchEngine

    engine = SearchEngine()
    engine.load(["Content Delivery Network", "Schmidt", "banana"])

    engine.search("cdn")          # ["Content Delivery Network", ...]
    engine.record_selection("banana")
"""

# src/fuzzycomplete/__init__.py
from .engine import SearchEngine  # re-export
from .models import CandidateRecord, ScoredCandidate, UsagePreference
from .normalize import normalize, tokenize
from .DB.api import UsageStore, make_store

__version__ = "1.0.0"
__all__ = [
    "SearchEngine",
    "CandidateRecord",
    "ScoredCandidate",
    "UsagePreference",
    "UsageStore",
    "make_store",
    "normalize",
    "tokenize",
]
