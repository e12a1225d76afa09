"""Chunked concurrent fetching of path metadata and children."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import TypeVar

from vaultscan.storage import ListedChildren, Storage, stat_fix

logger = logging.getLogger(__name__)

CHUNK_SIZE = 10

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Entity:
    """A discovered file or folder.

    Attributes:
        key: Canonical path. Folders carry a trailing ``/``.
        key_raw: Pre-normalization key, currently identical to ``key``.
        mtime_cli: Modification time on the client side, in milliseconds.
        mtime_svr: Modification time on the server side, same source as
            ``mtime_cli``.
        size: Size in bytes.
        size_raw: Pre-normalization size, currently identical to ``size``.
    """

    key: str
    key_raw: str
    mtime_cli: int | None
    mtime_svr: int | None
    size: int | None
    size_raw: int | None

    @property
    def is_folder(self) -> bool:
        return self.key.endswith("/")


@dataclass(frozen=True, slots=True)
class ListingBatch:
    """Result of fetching one path: the entity and, for folders, its children."""

    itself: Entity
    children: ListedChildren | None = None


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of at most *size* items."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield items[start : start + size]


async def fetch_listing(storage: Storage, path: str) -> ListingBatch | None:
    """Stat *path* and list its children when it is a folder.

    Returns:
        ListingBatch | None: ``None`` when the path does not exist.
    """
    res = await stat_fix(storage, path)
    if res is None:
        return None

    children: ListedChildren | None = None
    if res.is_folder:
        children = await storage.list(path)

    key = f"{path}/" if res.is_folder else path
    return ListingBatch(
        itself=Entity(
            key=key,
            key_raw=key,
            mtime_cli=res.mtime,
            mtime_svr=res.mtime,
            size=res.size,
            size_raw=res.size,
        ),
        children=children,
    )


async def fetch_in_chunks(
    paths: Sequence[str],
    fetch: Callable[[str], Awaitable[T]],
    chunk_size: int = CHUNK_SIZE,
) -> list[T]:
    """Fetch *paths* concurrently, one chunk at a time.

    All fetches of a chunk run together and the whole chunk is awaited
    before the next one starts. Results keep the input order.

    Args:
        paths: Paths to fetch.
        fetch: Coroutine function applied to every path.
        chunk_size: Maximum number of concurrent fetches.

    Returns:
        list[T]: One result per path, in input order.
    """
    results: list[T] = []
    for group in chunked(paths, chunk_size):
        results.extend(await asyncio.gather(*(fetch(p) for p in group)))
    logger.debug("Fetched %d paths in chunks of %d", len(paths), chunk_size)
    return results
