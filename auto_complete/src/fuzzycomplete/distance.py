from __future__ import annotations
from typing import Dict, FrozenSet, List

from . import config as CFG

# Consonants that sound alike; substituting one for its neighbour is free.
# Looked up by the character of the first string only.
_NEIGHBOURS: Dict[str, FrozenSet[str]] = {
    "b": frozenset("p"),
    "p": frozenset("b"),
    "g": frozenset("k"),
    "k": frozenset("gcq"),
    "d": frozenset("t"),
    "t": frozenset("d"),
    "f": frozenset("vw"),
    "v": frozenset("fw"),
    "s": frozenset("zßc"),
    "z": frozenset("sc"),
    "ß": frozenset("s"),
    "c": frozenset("ksz"),
    "m": frozenset("n"),
    "n": frozenset("m"),
}


def phonetically_similar(a: str, b: str) -> bool:
    if a == b:
        return True
    near = _NEIGHBOURS.get(a)
    return near is not None and b in near


class EditDistance:
    """
    Levenshtein distance with phonetic substitution cost.

    Keeps one scratch row between calls; the row only grows. Not safe to
    share across threads: give each search call its own instance.
    """

    def __init__(self, capacity: int = 128) -> None:
        self._costs: List[int] = [0] * (capacity + 1)

    def distance(self, a: str, b: str) -> int:
        n = len(a)
        if n + 1 > len(self._costs):
            self._costs.extend([0] * (n + 1 - len(self._costs)))
        costs = self._costs
        for i in range(n + 1):
            costs[i] = i

        for j in range(1, len(b) + 1):
            cb = b[j - 1]
            prev = costs[0]          # diagonal for i == 1
            costs[0] = j
            for i in range(1, n + 1):
                sub = prev + (0 if phonetically_similar(a[i - 1], cb) else 1)
                prev = costs[i]
                costs[i] = min(costs[i] + 1, costs[i - 1] + 1, sub)
        return costs[n]


def levenshtein(a: str, b: str) -> int:
    """Plain unit-cost edit distance."""
    prev = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        cur = [i] + [0] * len(b)
        ca = a[i - 1]
        for j in range(1, len(b) + 1):
            cost = 0 if ca == b[j - 1] else 1
            cur[j] = min(prev[j] + 1, cur[j - 1] + 1, prev[j - 1] + cost)
        prev = cur
    return prev[-1]


def wildcard_distance(pattern: str, target: str) -> int:
    """Edit distance after dropping every wildcard marker from `pattern`."""
    return levenshtein(pattern.replace(CFG.WILDCARD, ""), target)


def insert_wildcard(query: str) -> str:
    """
    Put one wildcard in the middle of `query` (index len // 2), standing in
    for the character most likely mistyped. Queries shorter than four
    characters come back unchanged.
    """
    if len(query) < CFG.WILDCARD_MIN_QUERY:
        return query
    mid = len(query) // 2
    return query[:mid] + CFG.WILDCARD + query[mid + 1:]


def lcs_length(a: str, b: str) -> int:
    """Length of the longest common subsequence of a and b."""
    if not a or not b:
        return 0
    dp = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(1, len(a) + 1):
        row, up = dp[i], dp[i - 1]
        ca = a[i - 1]
        for j in range(1, len(b) + 1):
            if ca == b[j - 1]:
                row[j] = up[j - 1] + 1
            else:
                row[j] = max(up[j], row[j - 1])
    return dp[len(a)][len(b)]
