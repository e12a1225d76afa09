"""Literal prefix extraction for user path patterns.

Patterns are regex-like strings such as ``^\\.trash/.*``. Only the
unambiguous literal head is recovered; grouping, alternation and
character classes are never interpreted. A pattern starting with one
of those yields an empty or partial prefix instead of an error.
"""

from __future__ import annotations

from typing import Final

REGEX_META_CHARS: Final[str] = ".+*?^$()[]{}|\\"


def is_regex_meta_char(ch: str) -> bool:
    return ch in REGEX_META_CHARS


def extract_literal_prefix(pattern: str) -> str:
    """Return the longest literal prefix of *pattern*.

    A leading ``^`` anchor and a leading ``./`` are dropped. A leading
    dot (escaped or bare) is always kept literally so that hidden
    prefixes like ``.obsidian`` survive. Scanning stops at the first
    unescaped metacharacter; backslash escapes are honored.

    Args:
        pattern: Raw user pattern.

    Returns:
        str: Literal prefix, possibly empty.
    """
    s = pattern.strip()
    if s.startswith("^"):
        s = s[1:]
    if s.startswith("./"):
        s = s[2:]

    out: list[str] = []
    start = 0
    if s.startswith("\\."):
        out.append(".")
        start = 2
    elif s.startswith("."):
        out.append(".")
        start = 1

    escaped = False
    for ch in s[start:]:
        if escaped:
            out.append(ch)
            escaped = False
            continue
        if ch == "\\":
            escaped = True
            continue
        if is_regex_meta_char(ch):
            break
        out.append(ch)
    return "".join(out)


def is_hidden_path(path: str) -> bool:
    """Return whether *path* or any of its ``/`` segments starts with a dot."""
    if path.startswith("."):
        return True
    return any(part.startswith(".") for part in path.split("/"))
