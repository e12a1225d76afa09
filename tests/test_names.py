"""Tests for vaultscan.names."""

import pytest

from vaultscan.names import (
    RESERVED_CONFIG_NAMES,
    is_likely_plugin_sub_file,
    is_plugin_dir_itself,
    is_special_name_to_skip,
)


class TestSpecialNameToSkip:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("workspace", True),
            ("workspace.json", True),
            (".obsidian/workspace.json", True),
            (".obsidian/plugins/x/workspace", True),
            (".obsidian/workspace/", True),
            (".obsidian/workspaces.json", False),
            (".obsidian/workspace-mobile.json", False),
            (".obsidian/my-workspace.json", False),
        ],
    )
    def test_reserved_config_names(self, name: str, expected: bool) -> None:
        assert is_special_name_to_skip(name, RESERVED_CONFIG_NAMES) is expected

    @pytest.mark.parametrize(
        "name",
        [".git", "a/.git", "a/node_modules/", ".obsidian/.DS_Store", "x/Thumbs.db"],
    )
    def test_builtin_special_names(self, name: str) -> None:
        assert is_special_name_to_skip(name) is True

    def test_gitignore_is_not_git(self) -> None:
        assert is_special_name_to_skip("plugins/x/.gitignore") is False

    def test_extra_names_only_when_given(self) -> None:
        assert is_special_name_to_skip(".obsidian/workspace.json") is False


class TestPluginDir:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("remotely-save", True),
            ("remotely-save/", True),
            (".obsidian/plugins/remotely-save", True),
            (".obsidian/plugins/remotely-save/", True),
            (".obsidian/plugins/remotely-save-beta/", False),
            (".obsidian/plugins/", False),
        ],
    )
    def test_is_plugin_dir_itself(self, key: str, expected: bool) -> None:
        assert is_plugin_dir_itself(key, "remotely-save") is expected

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("data.json", True),
            ("p/main.js", True),
            ("p/manifest.json", True),
            ("p/.gitignore", True),
            ("p/styles.css", True),
            ("p/secret.db", False),
            ("p/mydata.json", False),
            ("p/cache", False),
        ],
    )
    def test_is_likely_plugin_sub_file(self, name: str, expected: bool) -> None:
        assert is_likely_plugin_sub_file(name) is expected
