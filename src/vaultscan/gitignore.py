"""Gitignore integration — drop listed entities matched by .gitignore via pathspec."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pathspec import GitIgnoreSpec

from vaultscan.fetcher import Entity

logger = logging.getLogger(__name__)


def load_gitignore_spec(root: Path) -> GitIgnoreSpec | None:
    """Load .gitignore patterns from *root* directory.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        A compiled spec when a ``.gitignore`` exists and is readable,
        otherwise ``None``.
    """
    gitignore_path = root / ".gitignore"
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except OSError:
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return None
    return GitIgnoreSpec.from_lines(lines)


def filter_ignored(entities: Iterable[Entity], spec: GitIgnoreSpec) -> list[Entity]:
    """Return *entities* whose keys are not matched by *spec*.

    Folder keys keep their trailing slash, so directory-only patterns
    such as ``cache/`` match the folder itself.
    """
    kept: list[Entity] = []
    for entity in entities:
        if spec.match_file(entity.key):
            logger.debug("Ignored by .gitignore: %s", entity.key)
            continue
        kept.append(entity)
    return kept
