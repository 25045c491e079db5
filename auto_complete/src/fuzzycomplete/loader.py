from __future__ import annotations
import logging
import os
from typing import Iterable, Iterator, List, Tuple

from . import config as CFG

log = logging.getLogger(__name__)


def _iter_term_files(roots: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """Yield (root, path) for every included file recursively under each root."""
    exts = tuple(e.lower() for e in CFG.INCLUDE_EXTS)
    for root in roots:
        root = os.path.abspath(root)
        if os.path.isfile(root):
            yield os.path.dirname(root), root
            continue
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = [d for d in dirnames if d not in CFG.EXCLUDE_DIRS]
            for fn in sorted(filenames):
                if fn.lower().endswith(exts):
                    yield root, os.path.join(dirpath, fn)


def _rel_to_root(path: str, root: str) -> str:
    return os.path.relpath(path, root).replace("\\", "/")


def load_terms(roots: List[str], *, with_source: bool = False) -> list:
    """
    Read candidate terms, one per non-blank line, from the files under `roots`.

    with_source=True yields (term, "relative/path.txt:line") pairs so the
    location travels with each candidate as its key.
    """
    out: list = []
    files = 0
    for root, path in _iter_term_files(roots):
        rel = _rel_to_root(path, root)
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                lines = [ln.rstrip("\r\n") for ln in f]
        except OSError as exc:
            log.warning("Skipping unreadable file %s: %s", path, exc)
            continue
        files += 1
        for i, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            term = line.strip()
            out.append((term, f"{rel}:{i}") if with_source else term)
    log.info("Read %d terms from %d files", len(out), files)
    return out
