"""Plain output: one entity key per line."""

from __future__ import annotations

from vaultscan.fetcher import Entity


def format_plain(entities: list[Entity], files_only: bool = False) -> str:
    return "\n".join(e.key for e in entities if not (files_only and e.is_folder))
