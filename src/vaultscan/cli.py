"""CLI entry point for vaultscan — I/O boundary only."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from vaultscan import VaultscanError
from vaultscan.allowlist import get_hidden_allow_list_roots
from vaultscan.fetcher import CHUNK_SIZE, Entity
from vaultscan.formatter.plain import format_plain
from vaultscan.scanner import ListOptions, list_by_roots, list_config_folder
from vaultscan.storage import LocalStorage


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``vaultscan`` command.
    """
    parser = argparse.ArgumentParser(
        prog="vaultscan",
        description="breadth-first snapshot listing of hidden vault folders",
    )
    parser.add_argument(
        "-C",
        "--base",
        default=".",
        dest="base_dir",
        help="Vault directory all paths are relative to (default: current directory)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        dest="csv_mode",
        help="Output as CSV (key, mtime, size)",
    )
    parser.add_argument(
        "-F",
        "--files-only",
        action="store_true",
        dest="files_only",
        help="Exclude folder entries from output",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Drop entries matched by the vault's .gitignore",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        dest="output_file",
        help="Write output to a file instead of stdout",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    config = sub.add_parser("config", help="List a host configuration folder")
    config.add_argument("root", help="Configuration folder, e.g. .obsidian")
    config.add_argument(
        "--plugin-id",
        required=True,
        help="Identifier of the syncing plugin; its private files are skipped",
    )
    config.add_argument(
        "--bookmarks-only",
        action="store_true",
        help="Only report the root folder and bookmarks.json",
    )
    _add_chunk_size(config)

    roots = sub.add_parser("roots", help="List everything under the given roots")
    roots.add_argument("roots", nargs="*", help="Root paths to list")
    roots.add_argument(
        "--allow",
        action="append",
        default=[],
        dest="patterns",
        help="Allow-list pattern; its hidden literal prefix is listed "
        "(can be specified multiple times)",
    )
    _add_chunk_size(roots)

    allowlist = sub.add_parser(
        "allowlist", help="Print hidden roots derived from allow-list patterns"
    )
    allowlist.add_argument("patterns", nargs="+", help="Allow-list patterns")
    return parser


def _add_chunk_size(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=CHUNK_SIZE,
        help=f"Paths fetched concurrently (default: {CHUNK_SIZE})",
    )


def run_vaultscan(argv: list[str] | None = None) -> str:
    """Run vaultscan with provided CLI args and return formatted output.

    This function is side-effect free and is the primary test target
    for CLI behavior.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        str: Final rendered output.

    Raises:
        VaultscanError: On any user-facing validation or listing error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _resolve_base(directory: str) -> Path:
    """Resolve the vault directory and validate it is a directory.

    Raises:
        VaultscanError: If directory does not exist or is not a directory.
    """
    base = Path(directory).resolve()
    if not base.is_dir():
        raise VaultscanError(f"'{directory}' is not a directory")
    return base


def _build_options(args: argparse.Namespace) -> ListOptions:
    """Map CLI flags onto lister options.

    Raises:
        VaultscanError: If ``--chunk-size`` is not positive.
    """
    try:
        return ListOptions(chunk_size=args.chunk_size)
    except ValueError as exc:
        raise VaultscanError("--chunk-size must be a positive integer") from exc


def _collect_roots(args: argparse.Namespace) -> list[str]:
    """Combine explicit roots with the allow-list roots of ``--allow``.

    Trailing slashes are dropped so that folder keys get exactly one.

    Raises:
        VaultscanError: If no usable root remains.
    """
    candidates = [*args.roots, *sorted(get_hidden_allow_list_roots(args.patterns))]
    roots = [r.strip().rstrip("/") for r in candidates]
    roots = [r for r in roots if r]
    if not roots:
        raise VaultscanError("no root to list; pass ROOT or a hidden --allow pattern")
    return roots


def _list_entities(args: argparse.Namespace, base: Path) -> list[Entity]:
    storage = LocalStorage(base)
    options = _build_options(args)
    if args.command == "config":
        return asyncio.run(
            list_config_folder(
                args.root.rstrip("/"),
                storage,
                args.plugin_id,
                bookmarks_only=args.bookmarks_only,
                options=options,
            )
        )
    return asyncio.run(list_by_roots(_collect_roots(args), storage, options))


def _format_output(args: argparse.Namespace, entities: list[Entity]) -> str:
    if args.csv_mode:
        from vaultscan.formatter.csv_ import CsvOptions, format_csv

        return format_csv(entities, CsvOptions(files_only=args.files_only))
    return format_plain(entities, files_only=args.files_only)


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the core list/format pipeline for parsed arguments.

    Raises:
        VaultscanError: On any user-facing validation or listing error.
    """
    if args.command == "allowlist":
        return "\n".join(sorted(get_hidden_allow_list_roots(args.patterns)))

    base = _resolve_base(args.base_dir)
    entities = _list_entities(args, base)

    if args.gitignore:
        from vaultscan.gitignore import filter_ignored, load_gitignore_spec

        spec = load_gitignore_spec(base)
        if spec is not None:
            entities = filter_ignored(entities, spec)

    return _format_output(args, entities)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and writes output to stdout or ``-o`` file.
    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        output = _run_with_args(args)
    except VaultscanError as exc:
        sys.stderr.write(f"vaultscan: {exc}\n")
        sys.exit(1)

    if args.output_file:
        try:
            Path(args.output_file).write_text(
                output + "\n", encoding="utf-8", newline=""
            )
        except OSError as exc:
            sys.stderr.write(f"vaultscan: cannot write to '{args.output_file}': {exc}\n")
            sys.exit(1)
    else:
        sys.stdout.write(output + "\n")
