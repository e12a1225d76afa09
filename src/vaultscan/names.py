"""Reserved names and plugin-folder rules used while listing."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

SPECIAL_NAMES_TO_SKIP: Final[tuple[str, ...]] = (
    ".git",
    ".github",
    ".gitlab",
    ".svn",
    "node_modules",
    ".DS_Store",
    "__MACOSX",
    "Icon\r",
    "desktop.ini",
    "Desktop.ini",
    "thumbs.db",
    "Thumbs.db",
)

# Host workspace state, never synced
RESERVED_CONFIG_NAMES: Final[tuple[str, ...]] = ("workspace", "workspace.json")

PLUGIN_SUB_FILES: Final[tuple[str, ...]] = (
    "data.json",
    "main.js",
    "manifest.json",
    ".gitignore",
    "styles.css",
)


def is_special_name_to_skip(name: str, more: Iterable[str] = ()) -> bool:
    """Return whether *name* is a reserved folder or file name.

    A name matches when it equals a reserved entry or ends with
    ``/`` plus the entry, with or without a trailing slash.

    Args:
        name: Full path or bare name of the entry.
        more: Extra reserved names on top of ``SPECIAL_NAMES_TO_SKIP``.

    Returns:
        bool: ``True`` when the entry must be skipped.
    """
    for reserved in (*SPECIAL_NAMES_TO_SKIP, *more):
        if (
            name == reserved
            or name == f"{reserved}/"
            or name.endswith(f"/{reserved}")
            or name.endswith(f"/{reserved}/")
        ):
            return True
    return False


def is_plugin_dir_itself(key: str, plugin_id: str) -> bool:
    """Return whether *key* points at the folder of plugin *plugin_id*."""
    return (
        key == plugin_id
        or key == f"{plugin_id}/"
        or key.endswith(f"/{plugin_id}")
        or key.endswith(f"/{plugin_id}/")
    )


def is_likely_plugin_sub_file(
    name: str, sub_files: Iterable[str] = PLUGIN_SUB_FILES
) -> bool:
    """Return whether *name* is one of the files a plugin folder ships."""
    return any(name == f or name.endswith(f"/{f}") for f in sub_files)
