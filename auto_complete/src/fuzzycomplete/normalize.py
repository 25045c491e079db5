from __future__ import annotations
import re
import unicodedata
from typing import Iterable, List

# German letters get spelled out before generic accent stripping would
# reduce them to a bare vowel.
_FOLD = (("ä", "ae"), ("ö", "oe"), ("ü", "ue"), ("ß", "ss"))

_CLEAN = re.compile(r"[^a-z0-9 ]")
_SPACES = re.compile(r"\s+")


def _strip_diacritics(text: str) -> str:
    """Decompose, drop combining marks, recompose."""
    decomposed = unicodedata.normalize("NFD", text)
    kept = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", kept)


def normalize(text: str) -> str:
    """
    Canonical matching form of `text`:
      * lowercase
      * ä/ö/ü/ß spelled out as ae/oe/ue/ss
      * remaining diacritics stripped
      * every character outside [a-z0-9 ] turned into a space
      * runs of whitespace collapsed to one space, ends trimmed
    Idempotent: normalize(normalize(s)) == normalize(s).
    """
    if not text:
        return ""
    s = text.lower()
    for src, dst in _FOLD:
        s = s.replace(src, dst)
    s = _strip_diacritics(s)
    s = _CLEAN.sub(" ", s)
    return _SPACES.sub(" ", s).strip()


def tokenize(text: str) -> List[str]:
    """Split on whitespace; empty tokens are dropped."""
    return text.split()


def ngrams(s: str, lo: int, hi: int) -> set[str]:
    """Return distinct n-grams of s for every n in [lo, hi]."""
    out: set[str] = set()
    for k in range(max(lo, 1), hi + 1):
        if len(s) < k:
            break
        out.update(s[i:i + k] for i in range(len(s) - k + 1))
    return out


def word_prefixes(tokens: Iterable[str], size: int) -> List[str]:
    """Leading `size` characters of every token (shorter tokens kept whole)."""
    return [t[:size] for t in tokens]
