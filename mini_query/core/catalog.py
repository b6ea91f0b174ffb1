"""Table metadata lookups: existence checks, table listing, column schema."""

from __future__ import annotations

import logging
from typing import List

from .contracts import QueryExecutorPort, first_value
from .errors import ExecutionError
from .identifiers import Identifier, is_valid_identifier
from .types import Rows

logger = logging.getLogger(__name__)


class TableCatalog:
    """Reads catalog metadata through the injected query executor."""

    def __init__(self, db: QueryExecutorPort):
        self._db = db

    def exists(self, table: object) -> bool:
        """Return whether `table` names an existing table.

        Invalid names return False without touching the database. Any
        execution failure is logged and reported as "does not exist".
        """

        if not is_valid_identifier(table):
            return False

        try:
            row = self._db.fetchone(self._db.dialect.table_exists_sql(), [table])
        except ExecutionError as exc:
            logger.error(
                "Error checking if table exists: %s",
                table,
                exc_info=exc,
                extra={"operation": "table_exists", "table": table},
            )
            return False

        count = first_value(row)
        return count is not None and int(count) > 0

    def list_tables(self) -> List[str]:
        """Return table names, in the order the engine reports them."""

        rows = self._db.fetchall(self._db.dialect.list_tables_sql())
        return [str(first_value(row)) for row in rows]

    def describe(self, table: Identifier) -> Rows:
        """Return column metadata rows (Field, Type, Null, Key, Default, Extra)."""

        sql, params = self._db.dialect.describe_table_sql(table)
        return self._db.fetchall(sql, params)
