"""CSV output formatter for vaultscan.

Columns are described by ``CsvColumn`` so that extra entity fields can be
exported by appending a column to the list passed to ``format_csv``.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Callable
from dataclasses import dataclass, field

from vaultscan.fetcher import Entity


@dataclass(frozen=True, slots=True)
class CsvColumn:
    """A single CSV output column.

    Attributes:
        name: Header name for this column.
        extract: Callable that takes an entity and returns a string value.
    """

    name: str
    extract: Callable[[Entity], str]


def _optional_int(value: int | None) -> str:
    return "" if value is None else str(value)


DEFAULT_COLUMNS: list[CsvColumn] = [
    CsvColumn(name="key", extract=lambda e: e.key),
    CsvColumn(name="mtime", extract=lambda e: _optional_int(e.mtime_cli)),
    CsvColumn(name="size", extract=lambda e: _optional_int(e.size)),
]


@dataclass(frozen=True, slots=True)
class CsvOptions:
    """Options controlling CSV output.

    Attributes:
        files_only: When ``True``, folder rows are excluded from output.
        columns: Column definitions to use. Defaults to ``DEFAULT_COLUMNS``.
    """

    files_only: bool = False
    columns: list[CsvColumn] = field(default_factory=lambda: list(DEFAULT_COLUMNS))


def format_csv(entities: list[Entity], options: CsvOptions | None = None) -> str:
    """Render entities as CSV text.

    Output always starts with a header row. Each subsequent row represents
    one entity, in listing order.

    Args:
        entities: Lister output to render.
        options: Rendering options. Defaults to ``CsvOptions()``.

    Returns:
        str: CSV text with header, using LF line endings (no trailing newline).
    """
    opts = options or CsvOptions()

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow([col.name for col in opts.columns])

    for entity in entities:
        if opts.files_only and entity.is_folder:
            continue
        writer.writerow([col.extract(entity) for col in opts.columns])

    # Remove trailing newline that csv.writer appends after the last row
    return buf.getvalue().rstrip("\n")
