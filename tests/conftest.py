"""Shared fixtures for vaultscan tests."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Iterable
from pathlib import Path

import pytest

from vaultscan.storage import ListedChildren, StatResult


def _parent(path: str) -> str:
    return path.rsplit("/", 1)[0] if "/" in path else ""


class FakeStorage:
    """In-memory storage recording every call.

    Paths ending with ``/`` are folders, others are files. Parent folders
    are created implicitly. ``missing`` paths show up in their parent's
    listing but stat to ``None``; ``broken`` paths raise ``OSError``.
    """

    def __init__(
        self,
        paths: Iterable[str],
        mtimes: dict[str, int | None] | None = None,
        missing: Iterable[str] = (),
        broken: Iterable[str] = (),
    ) -> None:
        self.folders: set[str] = set()
        self.files: dict[str, int | None] = {}
        self.missing = set(missing)
        self.broken = set(broken)
        overrides = mtimes or {}
        for p in [*paths, *self.missing, *self.broken]:
            if p.endswith("/"):
                self._add_folder(p.rstrip("/"))
            else:
                self.files[p] = overrides.get(p, 1000)
                self._add_folder(_parent(p))

        self.stat_calls: list[str] = []
        self.list_calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def _add_folder(self, path: str) -> None:
        while path and path not in self.folders:
            self.folders.add(path)
            path = _parent(path)

    async def stat(self, path: str) -> StatResult | None:
        self.stat_calls.append(path)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
        finally:
            self.in_flight -= 1
        if path in self.broken:
            raise OSError(f"cannot stat {path}")
        if path in self.missing:
            return None
        if path in self.folders:
            return StatResult(type="folder", mtime=0, size=None)
        if path in self.files:
            return StatResult(type="file", mtime=self.files[path], size=len(path))
        return None

    async def list(self, path: str) -> ListedChildren:
        self.list_calls.append(path)
        await asyncio.sleep(0)
        folders = sorted(f for f in self.folders if _parent(f) == path)
        files = sorted(f for f in self.files if _parent(f) == path)
        return ListedChildren(folders=tuple(folders), files=tuple(files))


@pytest.fixture
def config_storage() -> FakeStorage:
    """Storage holding a typical host configuration folder.

    Structure::

        .obsidian/
        ├── app.json
        ├── bookmarks.json
        ├── workspace.json
        ├── workspaces.json
        ├── themes/
        │   └── dark/
        │       └── theme.css
        └── plugins/
            ├── calendar/
            │   ├── data.json
            │   ├── main.js
            │   └── workspace.json
            └── remotely-save/
                ├── data.json
                ├── main.js
                ├── manifest.json
                ├── secret.db
                └── cache/
                    └── blob.bin
    """
    return FakeStorage(
        [
            ".obsidian/app.json",
            ".obsidian/bookmarks.json",
            ".obsidian/workspace.json",
            ".obsidian/workspaces.json",
            ".obsidian/themes/dark/theme.css",
            ".obsidian/plugins/calendar/data.json",
            ".obsidian/plugins/calendar/main.js",
            ".obsidian/plugins/calendar/workspace.json",
            ".obsidian/plugins/remotely-save/data.json",
            ".obsidian/plugins/remotely-save/main.js",
            ".obsidian/plugins/remotely-save/manifest.json",
            ".obsidian/plugins/remotely-save/secret.db",
            ".obsidian/plugins/remotely-save/cache/blob.bin",
        ]
    )


@pytest.fixture
def vault_tree(tmp_path: Path) -> Path:
    """Create a vault directory on disk.

    Structure::

        root/
        ├── .gitignore          (*.log)
        ├── note.md
        ├── .obsidian/
        │   ├── app.json
        │   ├── bookmarks.json
        │   ├── workspace.json
        │   └── plugins/
        │       └── remotely-save/
        │           ├── data.json
        │           └── log.db
        └── .trash/
            ├── old.md
            └── debug.log
    """
    (tmp_path / ".gitignore").write_text("*.log\n")
    (tmp_path / "note.md").write_text("note")
    plugin = tmp_path / ".obsidian" / "plugins" / "remotely-save"
    plugin.mkdir(parents=True)
    (plugin / "data.json").write_text("{}")
    (plugin / "log.db").write_bytes(b"\x00")
    (tmp_path / ".obsidian" / "app.json").write_text("{}")
    (tmp_path / ".obsidian" / "bookmarks.json").write_text("{}")
    (tmp_path / ".obsidian" / "workspace.json").write_text("{}")
    (tmp_path / ".trash").mkdir()
    (tmp_path / ".trash" / "old.md").write_text("old")
    (tmp_path / ".trash" / "debug.log").write_text("debug")
    for path in tmp_path.rglob("*"):
        os.utime(path, (1_700_000_000, 1_700_000_000))
    return tmp_path
