"""DB-API adapter implementation for the core query executor port."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ...core.errors import ExecutionError
from ...core.types import MaybeRow, QueryParams, Row, Rows
from .dialects import Dialect

logger = logging.getLogger(__name__)


class Database:
    """Thin DB-API wrapper that normalizes execute and row mapping behavior.

    Read-only: the adapter never commits and holds no transaction scope.
    Driver failures surface as `ExecutionError` with the original exception
    chained as `__cause__`.
    """

    def __init__(self, conn: Any, dialect: Dialect):
        """Create database adapter.

        Args:
            conn: DB-API connection object.
            dialect: Concrete SQL dialect instance.
        """

        self.conn: Any | None = conn
        self.dialect = dialect
        self._closed = False

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise ExecutionError("connection is closed")
        return self.conn

    def execute(self, sql: str, params: QueryParams = None) -> Any:
        """Execute SQL with optional parameters and return cursor."""

        conn = self._require_open_connection()
        logger.debug("execute: %s params=%r", sql, params)
        try:
            cur = conn.cursor()
        except Exception as exc:
            raise ExecutionError(str(exc)) from exc
        try:
            if params is None:
                cur.execute(sql)
            else:
                cur.execute(sql, params)
        except Exception as exc:
            _close_cursor(cur)
            raise ExecutionError(str(exc)) from exc
        return cur

    def _row_to_mapping(self, cursor: Any, row: Any) -> Row:
        """Normalize row object to mapping.

        Supports mapping rows directly and tuple/list rows via
        `cursor.description`; key order follows the engine's column order.
        """

        if isinstance(row, Mapping):
            return row

        if isinstance(row, (tuple, list)):
            desc = getattr(cursor, "description", None)
            if not desc:
                raise ExecutionError(
                    "Cursor has no description; cannot map tuple rows to dict."
                )
            cols = [d[0] for d in desc]
            return dict(zip(cols, row))

        keys = getattr(row, "keys", None)
        if callable(keys):
            return {key: row[key] for key in keys()}

        raise ExecutionError(f"Unsupported row type: {type(row)}")

    def fetchone(self, sql: str, params: QueryParams = None) -> MaybeRow:
        """Execute query and return one normalized row mapping."""

        cur = self.execute(sql, params)
        try:
            row = cur.fetchone()
            if row is None:
                return None
            return self._row_to_mapping(cur, row)
        except ExecutionError:
            raise
        except Exception as exc:
            raise ExecutionError(str(exc)) from exc
        finally:
            _close_cursor(cur)

    def fetchall(self, sql: str, params: QueryParams = None) -> Rows:
        """Execute query and return all rows as normalized mappings."""

        cur = self.execute(sql, params)
        try:
            rows = cur.fetchall()
            return [self._row_to_mapping(cur, r) for r in rows]
        except ExecutionError:
            raise
        except Exception as exc:
            raise ExecutionError(str(exc)) from exc
        finally:
            _close_cursor(cur)

    def close(self) -> None:
        """Close the underlying connection. Safe to call twice."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        close = getattr(conn, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


def _close_cursor(cur: Any) -> None:
    close = getattr(cur, "close", None)
    if callable(close):
        close()
