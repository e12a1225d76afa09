"""Allow-list roots: hidden paths the user explicitly asked to sync."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from vaultscan.prefix import extract_literal_prefix, is_hidden_path

logger = logging.getLogger(__name__)


def get_hidden_allow_list_roots(patterns: Iterable[str] | None) -> set[str]:
    """Resolve user patterns into literal hidden roots for traversal.

    Blank patterns are ignored. A pattern contributes its literal prefix
    only when that prefix is longer than one character and hidden.

    Args:
        patterns: Raw user patterns. ``None`` is treated as empty.

    Returns:
        set[str]: Deduplicated literal roots.
    """
    roots: set[str] = set()
    for raw in patterns or ():
        trimmed = raw.strip()
        if not trimmed:
            continue
        prefix = extract_literal_prefix(trimmed)
        if len(prefix) > 1 and is_hidden_path(prefix):
            roots.add(prefix)
        else:
            logger.debug("Pattern %r has no hidden literal prefix", raw)
    return roots
