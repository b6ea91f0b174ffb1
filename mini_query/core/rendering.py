"""Plain-text rendering of result rows and column schemas.

The output format is consumed by automated tool callers, so every string
here is part of the contract: `" | "` delimiters, `NULL` for missing values,
and the separator widths below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence

from .pagination import PageRequest
from .types import Row, Rows

DELIMITER = " | "
NULL_TEXT = "NULL"
SCHEMA_HEADER = "Column | Type | Null | Key | Default | Extra"
SCHEMA_SEPARATOR_WIDTH = 60


@dataclass(frozen=True)
class PageResult:
    """Rows of one page together with the window that produced them."""

    rows: Rows
    page: PageRequest


def format_value(value: Any) -> str:
    if value is None:
        return NULL_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_row(row: Row) -> str:
    return DELIMITER.join(format_value(v) for v in row.values())


def render_table_list(names: Sequence[str]) -> str:
    if not names:
        return "No tables found"
    return ", ".join(names)


def render_rows(table: str, rows: Rows, *, legacy_separator: bool = True) -> str:
    """Render an unpaginated listing."""

    if not rows:
        return f"No data found in table '{table}'"
    return _render_grid("", rows, legacy_separator)


def render_page(table: str, result: PageResult, *, legacy_separator: bool = True) -> str:
    """Render one page of an unconditional listing."""

    page = result.page
    if not result.rows:
        return f"No data found in table '{table}' for page {page.page}"
    prefix = f"Page: {page.page + 1}, Size: {page.page_size}\n\n"
    return _render_grid(prefix, result.rows, legacy_separator)


def render_search(table: str, result: PageResult, *, legacy_separator: bool = True) -> str:
    """Render one page of search results."""

    page = result.page
    if not result.rows:
        return (
            f"No matching rows found in table '{table}' for the provided "
            f"conditions (page {page.page})."
        )
    prefix = f"Search results - Page: {page.page + 1}, Size: {page.page_size}\n\n"
    return _render_grid(prefix, result.rows, legacy_separator)


def render_schema(table: str, columns: Rows) -> str:
    """Render column metadata under the fixed schema header."""

    if not columns:
        return f"No schema information found for table '{table}'"
    lines = [
        f"Schema for table '{table}':",
        SCHEMA_HEADER,
        "-" * SCHEMA_SEPARATOR_WIDTH,
    ]
    lines.extend(format_row(column) for column in columns)
    return "\n".join(lines) + "\n"


def _render_grid(prefix: str, rows: Rows, legacy_separator: bool) -> str:
    """Render header, separator and one line per row after `prefix`.

    With `legacy_separator` the dash count is the length of everything
    written so far (prefix, header and its newline), which is what existing
    consumers of this output expect. Otherwise it matches the header width.
    """

    header = DELIMITER.join(str(key) for key in rows[0].keys())
    parts: List[str] = [prefix, header, "\n"]
    width = len(prefix) + len(header) + 1 if legacy_separator else len(header)
    parts.append("-" * width + "\n")
    parts.extend(_lines(rows))
    return "".join(parts)


def _lines(rows: Iterable[Row]) -> Iterable[str]:
    for row in rows:
        yield format_row(row) + "\n"
