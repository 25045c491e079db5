from __future__ import annotations
from typing import Dict

from . import config as CFG


def _pattern_masks(pattern: str) -> Dict[str, int]:
    """char -> bitmask of the positions where it occurs in pattern."""
    masks: Dict[str, int] = {}
    for i, ch in enumerate(pattern):
        masks[ch] = masks.get(ch, 0) | (1 << i)
    return masks


def is_match(text: str, pattern: str, max_errors: int = CFG.BITAP_MAX_ERRORS) -> bool:
    """
    True if `pattern` occurs somewhere in `text` with at most `max_errors`
    insertions, deletions or substitutions (Shift-And with Wu–Manber error
    registers).

    Bit i of register k is set when pattern[:i + 1] matches a substring
    ending at the current text position with at most k errors. Scanning
    stops at the first character after which the top bit of the last
    register is set.

    Empty patterns always match. Patterns longer than BITAP_MAX_PATTERN
    characters never match; the signal is simply switched off.
    """
    m = len(pattern)
    if m == 0:
        return True
    if m > CFG.BITAP_MAX_PATTERN:
        return False
    max_errors = max(0, max_errors)

    masks = _pattern_masks(pattern)
    full = (1 << m) - 1
    top = 1 << (m - 1)

    # k errors already cover the first k pattern characters before any text
    regs = [((1 << k) - 1) & full for k in range(max_errors + 1)]

    for ch in text:
        cmask = masks.get(ch, 0)
        prev = regs[0]
        regs[0] = ((prev << 1) | 1) & cmask
        for k in range(1, max_errors + 1):
            old = regs[k]
            regs[k] = (
                (((old << 1) | 1) & cmask)     # match
                | prev                         # extra text character
                | ((prev << 1) | 1)            # substitution
                | ((regs[k - 1] << 1) | 1)     # pattern character skipped
            ) & full
            prev = old
        if regs[max_errors] & top:
            return True
    return False
