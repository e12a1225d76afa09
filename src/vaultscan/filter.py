"""Child filtering rules applied while walking a listing."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from vaultscan.names import (
    PLUGIN_SUB_FILES,
    RESERVED_CONFIG_NAMES,
    is_likely_plugin_sub_file,
    is_plugin_dir_itself,
    is_special_name_to_skip,
)


class ChildFilter(Protocol):
    """Protocol for child filtering.

    Keeps the walking engine decoupled from the rules of a listing mode.
    """

    def should_skip(self, child: str, parent_key: str) -> bool: ...


class NullFilter:
    """Default pass-through filter that skips nothing."""

    def should_skip(self, child: str, parent_key: str) -> bool:
        return False


class ConfigChildFilter:
    """Rules for listing a host configuration folder.

    Reserved names are always skipped. Inside the folder of the syncing
    plugin itself only the known plugin files are kept.
    """

    def __init__(
        self,
        plugin_id: str,
        reserved_names: Iterable[str] = RESERVED_CONFIG_NAMES,
        plugin_sub_files: Iterable[str] = PLUGIN_SUB_FILES,
    ) -> None:
        """Initialize configuration filter.

        Args:
            plugin_id: Identifier of the syncing plugin.
            reserved_names: Names never listed, at any depth.
            plugin_sub_files: Files kept inside the plugin's own folder.
        """
        self._plugin_id = plugin_id
        self._reserved: tuple[str, ...] = tuple(reserved_names)
        self._sub_files: tuple[str, ...] = tuple(plugin_sub_files)

    def should_skip(self, child: str, parent_key: str) -> bool:
        """Return whether *child* of the folder *parent_key* is skipped.

        Args:
            child: Full path of the child entry.
            parent_key: Entity key of the listed folder.

        Returns:
            bool: ``True`` when the child must not be enqueued.
        """
        if is_special_name_to_skip(child, self._reserved):
            return True
        if is_plugin_dir_itself(parent_key, self._plugin_id):
            return not is_likely_plugin_sub_file(child, self._sub_files)
        return False
