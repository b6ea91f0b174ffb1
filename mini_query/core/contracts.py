"""Core port contracts used by adapters and the orchestrating service."""

from __future__ import annotations

from typing import Any, Protocol, Tuple

from .types import MaybeRow, QueryParams, Rows


class DialectPort(Protocol):
    """Dialect behavior required by query compilation and metadata lookups."""

    name: str
    paramstyle: str

    def placeholder(self) -> str: ...

    def list_tables_sql(self) -> str: ...

    def table_exists_sql(self) -> str: ...

    def describe_table_sql(self, table: str) -> Tuple[str, QueryParams]: ...


class QueryExecutorPort(Protocol):
    """Synchronous "execute SQL with parameters, get rows back" capability.

    Implementations raise `ExecutionError` for any driver failure and keep
    each row's keys in the engine's column order.
    """

    dialect: DialectPort

    def fetchone(self, sql: str, params: QueryParams = None) -> MaybeRow: ...

    def fetchall(self, sql: str, params: QueryParams = None) -> Rows: ...


def first_value(row: MaybeRow) -> Any:
    """Return the first column value of a row, or `None` for no row."""

    if not row:
        return None
    return next(iter(row.values()))

