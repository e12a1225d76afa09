"""Storage capability consumed by the listers, plus a local filesystem adapter."""

from __future__ import annotations

import asyncio
import logging
import math
import os
import stat
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

EntryType = Literal["file", "folder"]


@dataclass(frozen=True, slots=True)
class StatResult:
    """Metadata of a single storage path.

    Attributes:
        type: ``"file"`` or ``"folder"``.
        mtime: Last modification time in milliseconds, ``None`` if unknown.
        size: Size in bytes, ``None`` if unknown.
        ctime: Creation time in milliseconds, ``None`` if unknown.
    """

    type: EntryType
    mtime: int | None
    size: int | None
    ctime: int | None = None

    @property
    def is_folder(self) -> bool:
        return self.type == "folder"


@dataclass(frozen=True, slots=True)
class ListedChildren:
    """Immediate children of a folder, as full paths usable as fetch keys."""

    folders: tuple[str, ...] = ()
    files: tuple[str, ...] = ()


class Storage(Protocol):
    """Read-only hierarchical storage.

    Implementations raise ``OSError`` on I/O failures. Both calls must be
    idempotent and free of side effects.
    """

    async def stat(self, path: str) -> StatResult | None: ...

    async def list(self, path: str) -> ListedChildren: ...


def _usable_time(value: float | None) -> int | None:
    if value is None or math.isnan(value) or value < 0:
        return None
    return int(value)


async def stat_fix(storage: Storage, path: str) -> StatResult | None:
    """Stat *path* and normalize unusable values.

    NaN or negative timestamps become ``None``; a folder without a size
    gets size 0. ``None`` (path not found) is passed through.
    """
    res = await storage.stat(path)
    if res is None:
        return None
    size = res.size
    if res.is_folder and (size is None or math.isnan(size)):
        size = 0
    return replace(
        res,
        mtime=_usable_time(res.mtime),
        ctime=_usable_time(res.ctime),
        size=size,
    )


class LocalStorage:
    """Storage backed by a local directory.

    Paths are ``/``-separated and relative to *base_dir*. Symlinks are not
    followed and count as files, matching the listing. Blocking calls
    run in worker threads so several paths can be fetched concurrently.
    """

    def __init__(self, base_dir: Path | str) -> None:
        self._base = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base

    def _resolve(self, path: str) -> Path:
        return self._base.joinpath(*[p for p in path.split("/") if p])

    def _stat_sync(self, path: str) -> StatResult | None:
        try:
            st = os.lstat(self._resolve(path))
        except FileNotFoundError:
            return None
        if stat.S_ISDIR(st.st_mode):
            return StatResult(
                type="folder",
                mtime=int(st.st_mtime * 1000),
                size=0,
                ctime=int(st.st_ctime * 1000),
            )
        return StatResult(
            type="file",
            mtime=int(st.st_mtime * 1000),
            size=st.st_size,
            ctime=int(st.st_ctime * 1000),
        )

    def _list_sync(self, path: str) -> ListedChildren:
        parent = path.rstrip("/")
        with os.scandir(self._resolve(path)) as it:
            raw_entries = sorted(it, key=lambda e: e.name)

        folders: list[str] = []
        files: list[str] = []
        for dir_entry in raw_entries:
            child = f"{parent}/{dir_entry.name}" if parent else dir_entry.name
            try:
                is_dir = dir_entry.is_dir(follow_symlinks=False)
            except OSError:
                logger.debug("Cannot stat: %s", dir_entry.path)
                continue
            (folders if is_dir else files).append(child)
        return ListedChildren(folders=tuple(folders), files=tuple(files))

    async def stat(self, path: str) -> StatResult | None:
        return await asyncio.to_thread(self._stat_sync, path)

    async def list(self, path: str) -> ListedChildren:
        return await asyncio.to_thread(self._list_sync, path)
