from __future__ import annotations

TOP_K: int = 10

# bounded fuzzy matcher (bitap)
BITAP_MAX_ERRORS: int = 2
BITAP_MAX_PATTERN: int = 31   # one 32-bit register per error level

# wildcard edit distance
WILDCARD: str = "*"
WILDCARD_MIN_QUERY: int = 4

# candidate indexing
NGRAM_MIN: int = 2
NGRAM_MAX: int = 3
PREFIX_SIZE: int = 2

# usage store: "memory://" or "sqlite:///path/to/usage.sqlite"
DEFAULT_STORE_DSN: str = "memory://"

# corpus loader (host side)
INCLUDE_EXTS = [".txt"]
EXCLUDE_DIRS = {".git", ".hg", ".svn", ".idea", ".vscode", "node_modules", "__pycache__"}
