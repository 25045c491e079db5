from __future__ import annotations
from .normalize import normalize

# Applied top to bottom, each rule over the output of the previous one.
# Multi-letter clusters come first so their letters are consumed before the
# single-letter rules (v, g, b, d, z) could rewrite them.
_RULES = (
    ("ck", "k"),
    ("tz", "z"),
    ("ph", "f"),
    ("v", "f"),
    ("w", "v"),
    ("ig", "ich"),
    ("sch", "s"),
    ("sp", "s"),
    ("st", "s"),
    ("g", "k"),
    ("b", "p"),
    ("d", "t"),
    ("z", "s"),
    ("x", "ks"),
)


def simplify(text: str) -> str:
    """
    Coarse, German-oriented sound-alike key.

    Lossy on purpose: "Schmidt" and "Schmitt" both fold to "smitt",
    "Stephan" and "Stefan" to "sefan".
    """
    s = normalize(text)
    for src, dst in _RULES:
        s = s.replace(src, dst)
    return s
