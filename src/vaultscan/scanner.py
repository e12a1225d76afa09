"""Breadth-first listers over an abstract storage.

Each level of the tree is fetched completely, in chunks of concurrent
requests, before the next level starts. Two levels are kept as separate
lists: the one being fetched and the one being collected.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from vaultscan import ListingError
from vaultscan.fetcher import (
    CHUNK_SIZE,
    Entity,
    ListingBatch,
    fetch_in_chunks,
    fetch_listing,
)
from vaultscan.filter import ChildFilter, ConfigChildFilter, NullFilter
from vaultscan.names import PLUGIN_SUB_FILES, RESERVED_CONFIG_NAMES
from vaultscan.storage import Storage

logger = logging.getLogger(__name__)

__all__ = ["Entity", "ListOptions", "list_by_roots", "list_config_folder"]

# Bookmarks-only listing stops once the round index exceeds this value.
_BOOKMARKS_LAST_ROUND = 1

FetchFn = Callable[[str], Awaitable["ListingBatch | None"]]


@dataclass(frozen=True, slots=True)
class ListOptions:
    """Options controlling lister behavior.

    Attributes:
        chunk_size: Maximum number of paths fetched concurrently.
        reserved_names: Names skipped at any depth of a configuration listing.
        plugin_sub_files: Files kept inside the syncing plugin's own folder.
    """

    chunk_size: int = CHUNK_SIZE
    reserved_names: tuple[str, ...] = RESERVED_CONFIG_NAMES
    plugin_sub_files: tuple[str, ...] = PLUGIN_SUB_FILES

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")


async def _walk(
    seeds: list[str],
    fetch: FetchFn,
    child_filter: ChildFilter,
    chunk_size: int,
    stop_after_round: int | None = None,
) -> list[Entity]:
    """Walk the tree level by level starting from *seeds*.

    Args:
        seeds: Paths of the first level.
        fetch: Per-path fetcher. ``None`` results are dropped.
        child_filter: Decides which children reach the next level.
        chunk_size: Maximum number of concurrent fetches.
        stop_after_round: Stop once the round index exceeds this value,
            even if paths are still pending. ``None`` walks everything.

    Returns:
        list[Entity]: Entities in discovery order.
    """
    contents: list[Entity] = []
    current = seeds
    round_index = 0

    while current:
        next_level: list[str] = []
        for batch in await fetch_in_chunks(current, fetch, chunk_size):
            if batch is None:
                continue
            contents.append(batch.itself)
            if batch.children is None:
                continue
            parent_key = batch.itself.key
            for child in (*batch.children.folders, *batch.children.files):
                if child_filter.should_skip(child, parent_key):
                    continue
                next_level.append(child)

        logger.debug(
            "Round %d: fetched %d paths, %d pending",
            round_index,
            len(current),
            len(next_level),
        )
        if stop_after_round is not None and round_index > stop_after_round:
            logger.debug("Stopping after round %d", round_index)
            break

        current = next_level
        round_index += 1

    return contents


async def list_config_folder(
    config_dir: str,
    storage: Storage,
    plugin_id: str,
    bookmarks_only: bool = False,
    options: ListOptions | None = None,
) -> list[Entity]:
    """List everything under a host configuration folder.

    Reserved names are skipped, and inside the folder of *plugin_id*
    only the known plugin files are listed. Any failure aborts the call.

    Args:
        config_dir: Configuration root, without trailing slash.
        storage: Storage to read from.
        plugin_id: Identifier of the syncing plugin.
        bookmarks_only: Only look at the first levels and return the root
            folder plus ``bookmarks.json`` if present.
        options: Lister options. Defaults to ``ListOptions()``.

    Returns:
        list[Entity]: Entities in breadth-first order.

    Raises:
        ListingError: If a path cannot be read or stat'ed, or a file has no
            modification time.
    """
    opts = options or ListOptions()

    async def fetch(path: str) -> ListingBatch:
        try:
            batch = await fetch_listing(storage, path)
        except OSError as exc:
            raise ListingError(f"cannot list {path}: {exc}") from exc
        if batch is None:
            raise ListingError("something goes wrong while listing hidden folder")
        if not batch.itself.is_folder and not batch.itself.mtime_cli:
            raise ListingError(
                f"File in {config_dir} has last modified time 0: {path}, "
                "don't know how to deal with it."
            )
        return batch

    child_filter = ConfigChildFilter(
        plugin_id,
        reserved_names=opts.reserved_names,
        plugin_sub_files=opts.plugin_sub_files,
    )
    contents = await _walk(
        [config_dir],
        fetch,
        child_filter,
        opts.chunk_size,
        stop_after_round=_BOOKMARKS_LAST_ROUND if bookmarks_only else None,
    )

    if bookmarks_only:
        wanted = {f"{config_dir}/", f"{config_dir}/bookmarks.json"}
        contents = [e for e in contents if e.key in wanted]
    return contents


async def list_by_roots(
    roots: Iterable[str],
    storage: Storage,
    options: ListOptions | None = None,
) -> list[Entity]:
    """List everything reachable from *roots*.

    Nothing is filtered. Paths that are missing or fail to load are
    dropped, as are files without a usable modification time.

    Args:
        roots: Root paths. Duplicates and blank entries are ignored.
        storage: Storage to read from.
        options: Lister options. Only ``chunk_size`` applies.

    Returns:
        list[Entity]: Entities in breadth-first order.
    """
    opts = options or ListOptions()
    # trim before dedup so " .a" and ".a" collapse into one seed
    seeds = [r for r in dict.fromkeys(r.strip() for r in roots) if r]

    async def fetch(path: str) -> ListingBatch | None:
        try:
            batch = await fetch_listing(storage, path)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", path, exc)
            return None
        if batch is None:
            logger.debug("Not found: %s", path)
            return None
        if not batch.itself.is_folder and not batch.itself.mtime_cli:
            logger.debug("No modification time, dropped: %s", path)
            return None
        return batch

    return await _walk(seeds, fetch, NullFilter(), opts.chunk_size)
