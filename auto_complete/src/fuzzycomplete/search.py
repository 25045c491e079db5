from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence

from . import config as CFG
from .bitap import is_match
from .distance import EditDistance, insert_wildcard, lcs_length, wildcard_distance
from .models import CandidateRecord, ScoredCandidate, UsagePreference
from .phonetic import simplify

log = logging.getLogger(__name__)

# /* ~~~ match weights: part of the ranking contract, keep exact ~~~ */
BOUNDARY_BONUS = 100      # query found at start or end of the candidate
CONTAINS_BONUS = 75       # query found elsewhere
ABBREVIATION_BONUS = 80
TOKEN_BONUS = 15          # per query token present verbatim
SHORT_QUERY = 4           # below this the LCS/edit term is halved
PHONETIC_EXACT = 70
PHONETIC_NEAR = 40        # also the ceiling of the phonetic distance term
PHONETIC_STEP = 10
BITAP_BONUS = 60
WILDCARD_CEILING = 40
WILDCARD_STEP = 10

# /* ~~~ usage weights ~~~ */
FAVORITE_BONUS = 100
RECENCY_HOURS = 50
USE_CAP = 50
SESSION_WEIGHT = 3
SESSION_CAP = 30


def _substring_score(cand: str, q: str) -> int:
    if q not in cand:
        return 0
    if cand.startswith(q) or cand.endswith(q):
        return BOUNDARY_BONUS
    return CONTAINS_BONUS


def _similarity_score(cand: str, q: str, lev: EditDistance) -> int:
    """LCS ratio minus edit-distance penalty; only a positive result counts."""
    ratio = lcs_length(q, cand) / len(q) if q else 0.0
    penalty = lev.distance(q, cand) * 0.5
    combined = round(ratio * 100 - penalty * 10)
    if len(q) < SHORT_QUERY:
        combined = int(combined / 2)
    return combined if combined > 0 else 0


def _phonetic_score(cand_phon: str, q_phon: str, lev: EditDistance) -> int:
    if cand_phon == q_phon:
        return PHONETIC_EXACT
    if cand_phon.startswith(q_phon):
        return PHONETIC_NEAR
    return max(0, PHONETIC_NEAR - lev.distance(q_phon, cand_phon) * PHONETIC_STEP)


def _wildcard_score(cand: str, q: str) -> int:
    if not (CFG.WILDCARD_MIN_QUERY <= len(q) <= len(cand)):
        return 0
    return max(0, WILDCARD_CEILING - wildcard_distance(insert_wildcard(q), cand) * WILDCARD_STEP)


def match_score(entry: CandidateRecord,
                q_norm: str,
                q_tokens: Sequence[str],
                *,
                q_phon: Optional[str] = None,
                lev: Optional[EditDistance] = None) -> int:
    """
    Textual score of one candidate for a normalized query.

    Seven independent signals are summed; any of them can contribute
    nothing without affecting the others:
      substring at a boundary (+100) or inside (+75),
      abbreviation equal to the query (+80),
      +15 per query token found among the candidate tokens,
      LCS ratio / edit distance blend (positive part only),
      phonetic key equal (+70), prefix (+40) or near (40 - 10 per edit),
      bitap match with <= 2 errors (+60),
      wildcard edit distance (40 - 10 per edit) for queries of 4+ chars.

    `q_phon` and `lev` let a caller scoring many candidates compute the
    query key once and reuse one scratch buffer.
    """
    if q_phon is None:
        q_phon = simplify(q_norm)
    if lev is None:
        lev = EditDistance()
    cand = entry.normalized

    score = _substring_score(cand, q_norm)
    if entry.abbreviation == q_norm:
        score += ABBREVIATION_BONUS
    score += TOKEN_BONUS * sum(1 for t in q_tokens if t in entry.tokens)
    score += _similarity_score(cand, q_norm, lev)
    score += _phonetic_score(entry.phonetic, q_phon, lev)
    if is_match(cand, q_norm, CFG.BITAP_MAX_ERRORS):
        score += BITAP_BONUS
    score += _wildcard_score(cand, q_norm)
    return score


def _as_utc(ts: datetime) -> datetime:
    # naive timestamps (older stores, hand-built records) are taken as UTC
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts


def usage_score(usage: Optional[UsagePreference], now: datetime) -> int:
    """
    Preference score of one record; 0 when the candidate was never touched.
    Recency loses one point per whole hour and is gone after about two days.
    """
    if usage is None:
        return 0
    score = FAVORITE_BONUS if usage.favorited else 0
    if usage.last_used is not None:
        hours = max(0, int((_as_utc(now) - _as_utc(usage.last_used)).total_seconds() // 3600))
        score += max(0, RECENCY_HOURS - hours)
    score += min(usage.use_count, USE_CAP)
    score += min(usage.session_count * SESSION_WEIGHT, SESSION_CAP)
    return score


def rank(entries: Sequence[CandidateRecord],
         usage: Mapping[str, UsagePreference],
         q_norm: str,
         q_tokens: Sequence[str],
         now: datetime,
         top_k: int) -> list[ScoredCandidate]:
    """
    Score every entry, sort by total descending and keep the first top_k.
    Equal totals keep corpus order (sorted() is stable).
    """
    if top_k <= 0:
        return []
    q_phon = simplify(q_norm)
    lev = EditDistance(max(len(q_norm), len(q_phon)))

    rows = []
    for e in entries:
        total = match_score(e, q_norm, q_tokens, q_phon=q_phon, lev=lev)
        total += usage_score(usage.get(e.normalized), now)
        rows.append(ScoredCandidate(text=e.original, score=total, key=e.key))
    rows.sort(key=lambda r: r.score, reverse=True)
    log.debug("ranked %d candidates for %r", len(rows), q_norm)
    return rows[:top_k]
