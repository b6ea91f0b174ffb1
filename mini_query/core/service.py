"""Orchestrating operations exposed to tool callers.

Each operation validates and normalizes its inputs, checks that the table
exists, executes through the injected query executor and renders text.
Public text operations never raise: every error is logged and flattened
into a descriptive message, because the caller is an automated tool layer
that expects a textual result.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from .catalog import TableCatalog
from .contracts import QueryExecutorPort
from .errors import CompileError, ErrorCategory, ExecutionError, NotFoundError, QueryToolError
from .identifiers import Identifier, require_identifier
from .pagination import PageRequest, normalize_page
from .query_builder import build_search_query, compile_select_all, compile_select_page
from .rendering import (
    PageResult,
    render_page,
    render_rows,
    render_schema,
    render_search,
    render_table_list,
)
from .types import RawConditions

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50

F = TypeVar("F", bound=Callable[..., str])


def text_boundary(operation: str, error_prefix: str) -> Callable[[F], F]:
    """Turn any error raised by a text operation into a logged message.

    Validation and lookup errors return their own message. Execution and
    unexpected errors return `"<error_prefix>: <detail>"`.
    """

    def decorate(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(self: DatabaseTools, *args: Any, **kwargs: Any) -> str:
            table_name = args[0] if args else kwargs.get("table_name")
            try:
                return fn(self, *args, **kwargs)
            except QueryToolError as exc:
                _log_error(exc, operation, table_name)
                if isinstance(exc, ExecutionError):
                    return f"{error_prefix}: {exc.message}"
                return exc.message
            except Exception as exc:
                logger.exception(
                    "%s failed unexpectedly for table %r",
                    operation,
                    table_name,
                    extra={"operation": operation, "table": table_name},
                )
                return f"{error_prefix}: {exc}"

        return wrapper  # type: ignore[return-value]

    return decorate


def _log_error(exc: QueryToolError, operation: str, table_name: Any) -> None:
    extra: Dict[str, Any] = {
        "operation": operation,
        "table": table_name,
        "error_code": exc.code,
    }
    if isinstance(exc, CompileError):
        extra["column"] = exc.column
        extra["operator"] = exc.operator

    if exc.category is ErrorCategory.DATABASE:
        logger.error(
            "%s failed for table %r: %s",
            operation,
            table_name,
            exc.message,
            exc_info=exc,
            extra=extra,
        )
    else:
        logger.warning(
            "%s rejected for table %r: %s", operation, table_name, exc.message, extra=extra
        )


class DatabaseTools:
    """Read-only table browsing and search over one query executor.

    Holds no mutable state beyond the injected executor, so one instance
    can serve concurrent callers as long as the executor can.
    """

    def __init__(
        self,
        db: QueryExecutorPort,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: Optional[int] = None,
        legacy_separator: bool = True,
    ):
        if default_page_size < 1:
            raise ValueError("default_page_size must be >= 1.")
        if max_page_size is not None and max_page_size < 1:
            raise ValueError("max_page_size must be >= 1.")
        self._db = db
        self._catalog = TableCatalog(db)
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self.legacy_separator = legacy_separator

    @text_boundary("get_tables", "Error retrieving tables")
    def get_tables(self) -> str:
        """Return a comma-separated list of all tables."""

        return render_table_list(self._catalog.list_tables())

    def table_exists(self, table_name: Any) -> bool:
        return self._catalog.exists(table_name)

    @text_boundary("get_rows", "Error retrieving data")
    def get_rows(self, table_name: Any) -> str:
        """Return every row of `table_name` as a text table."""

        table = self._existing_table(table_name)
        rows = self._db.fetchall(compile_select_all(table).sql)
        return render_rows(table, rows, legacy_separator=self.legacy_separator)

    @text_boundary("get_rows_paginated", "Error retrieving data")
    def get_rows_paginated(
        self,
        table_name: Any,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> str:
        """Return one zero-based page of `table_name` as a text table."""

        table = self._existing_table(table_name)
        window = self._page(page, page_size)
        query = compile_select_page(table, window, self._db.dialect)
        rows = self._db.fetchall(query.sql, query.params)
        return render_page(
            table, PageResult(rows, window), legacy_separator=self.legacy_separator
        )

    @text_boundary("search_rows", "Error searching data")
    def search_rows(
        self,
        table_name: Any,
        conditions: Optional[RawConditions],
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> str:
        """Return one page of rows matching every condition.

        `conditions` maps column names to `{"operator": ..., "value": ...}`.
        Operators: `=`/`EQUALS`, `>`/`GT`, `>=`/`GTE`, `<`/`LT`, `<=`/`LTE`,
        `LIKE`, `IN` (non-empty list), `BETWEEN` (two-element list),
        `IS NULL` and `IS NOT NULL` (value not used).
        """

        table = self._existing_table(table_name)
        window = self._page(page, page_size)
        query = build_search_query(table, conditions, window, self._db.dialect)
        rows = self._db.fetchall(query.sql, query.params)
        return render_search(
            table, PageResult(rows, window), legacy_separator=self.legacy_separator
        )

    @text_boundary("get_table_schema", "Error retrieving schema")
    def get_table_schema(self, table_name: Any) -> str:
        """Return column metadata for `table_name`.

        Existence is not checked first; a missing table yields an empty
        metadata result and the matching message.
        """

        table = require_identifier(table_name)
        return render_schema(table, self._catalog.describe(table))

    def _existing_table(self, table_name: Any) -> Identifier:
        table = require_identifier(table_name)
        if not self._catalog.exists(table):
            raise NotFoundError(table)
        return table

    def _page(self, page: Optional[int], page_size: Optional[int]) -> PageRequest:
        return normalize_page(page, page_size, self.default_page_size).capped(
            self.max_page_size
        )
