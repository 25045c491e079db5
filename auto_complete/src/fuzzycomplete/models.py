# src/fuzzycomplete/models.py
"""
Data models for the fuzzy autocomplete engine.

This module defines three small, focused data containers:

- CandidateRecord: one corpus entry with every precomputed matching feature.
- UsagePreference: the learned preference signal for one normalized text.
- ScoredCandidate: the transient ranking row produced by a search call.

Scoring logic lives in search.py; these classes only structure the data so
that indexing, ranking and persistence stay simple and predictable.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, FrozenSet, Hashable, Optional, Tuple

from . import config as CFG
from .normalize import ngrams, normalize, tokenize, word_prefixes
from .phonetic import simplify


@dataclass(frozen=True, slots=True)
class CandidateRecord:
    """
    One searchable corpus entry.

    Attributes
    ----------
    original : str
        The display text exactly as ingested. Never used for scoring.
    key : Hashable | None
        Caller-defined identity carried through untouched.
    normalized : str
        normalize(original); the text every matcher works on.
    tokens : tuple[str, ...]
        Whitespace tokens of `normalized`, in order.
    abbreviation : str
        First character of every token, concatenated ("cdn" for
        "Content Delivery Network").
    phonetic : str
        simplify(normalized), the sound-alike key.
    ngrams : frozenset[str]
        All 2- and 3-grams of `normalized`.
    word_prefixes : tuple[str, ...]
        The leading two characters of every token.

    All derived fields are pure functions of `original`; build instances
    with CandidateRecord.build().
    """
    original: str
    key: Optional[Hashable]
    normalized: str
    tokens: Tuple[str, ...]
    abbreviation: str
    phonetic: str
    ngrams: FrozenSet[str] = field(repr=False)
    word_prefixes: Tuple[str, ...] = field(repr=False)

    @classmethod
    def build(cls, original: str, key: Optional[Hashable] = None) -> "CandidateRecord":
        if not isinstance(original, str):
            raise TypeError(f"candidate text must be str, got {type(original).__name__}")
        norm = normalize(original)
        toks = tuple(tokenize(norm))
        return cls(
            original=original,
            key=key,
            normalized=norm,
            tokens=toks,
            abbreviation="".join(t[0] for t in toks),
            phonetic=simplify(norm),
            ngrams=frozenset(ngrams(norm, CFG.NGRAM_MIN, CFG.NGRAM_MAX)),
            word_prefixes=tuple(word_prefixes(toks, CFG.PREFIX_SIZE)),
        )


@dataclass(frozen=True, slots=True)
class UsagePreference:
    """
    Learned preference for every candidate that normalizes to `normalized_name`.

    Records are immutable: the engine publishes an updated copy on every
    interaction (see SearchEngine), so a snapshot taken by a running search
    never changes underneath it.

    Attributes
    ----------
    normalized_name : str
        The normalized candidate text this record belongs to.
    use_count : int
        Number of recorded selections.
    session_count : int
        Number of sessions in which the candidate was selected.
    last_used : datetime | None
        UTC time of the latest selection; None until the first one.
    favorited : bool
        Manual favorite flag set by the user.
    """
    normalized_name: str
    use_count: int = 0
    session_count: int = 0
    last_used: Optional[datetime] = None
    favorited: bool = False

    def selected(self, when: datetime) -> "UsagePreference":
        return replace(
            self,
            use_count=self.use_count + 1,
            session_count=self.session_count + 1,
            last_used=when,
        )

    def toggled(self) -> "UsagePreference":
        return replace(self, favorited=not self.favorited)


@dataclass(frozen=True, slots=True)
class ScoredCandidate:
    """A ranking row: display text, total score and the candidate's opaque key."""
    text: str
    score: int
    key: Any = None
