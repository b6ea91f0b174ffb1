"""Concrete SQL dialect implementations for DB-API adapters."""

from __future__ import annotations

from typing import Tuple

from ...core.types import QueryParams


class Dialect:
    """Base dialect that defines placeholders and metadata queries.

    Metadata queries return rows whose first column is the value of
    interest (table name, count). Describe queries return six columns in
    the order Field, Type, Null, Key, Default, Extra.
    """

    name: str = "generic"
    paramstyle: str = "qmark"

    def placeholder(self) -> str:
        """Return the positional parameter placeholder."""

        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle == "format":
            return "%s"
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

    def list_tables_sql(self) -> str:
        return (
            "SELECT table_name FROM information_schema.tables "
            "ORDER BY table_name"
        )

    def table_exists_sql(self) -> str:
        return (
            "SELECT COUNT(*) FROM information_schema.tables "
            f"WHERE table_name = {self.placeholder()}"
        )

    def describe_table_sql(self, table: str) -> Tuple[str, QueryParams]:
        ph = self.placeholder()
        return (
            "SELECT column_name, data_type, is_nullable, '', column_default, '' "
            f"FROM information_schema.columns WHERE table_name = {ph} "
            "ORDER BY ordinal_position",
            [table],
        )


class SQLiteDialect(Dialect):
    """SQLite dialect (`?` parameters, `sqlite_master` catalog)."""

    name = "sqlite"
    paramstyle = "qmark"

    def list_tables_sql(self) -> str:
        return (
            "SELECT name FROM sqlite_master "
            "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )

    def table_exists_sql(self) -> str:
        return "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = ?"

    def describe_table_sql(self, table: str) -> Tuple[str, QueryParams]:
        return (
            'SELECT name AS "Field", type AS "Type", '
            "CASE WHEN \"notnull\" THEN 'NO' ELSE 'YES' END AS \"Null\", "
            "CASE WHEN pk > 0 THEN 'PRI' ELSE '' END AS \"Key\", "
            'dflt_value AS "Default", \'\' AS "Extra" '
            "FROM pragma_table_info(?) ORDER BY cid",
            [table],
        )


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`%s` positional parameters, current schema only)."""

    name = "postgres"
    paramstyle = "format"

    def list_tables_sql(self) -> str:
        return (
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_schema = current_schema() ORDER BY table_name"
        )

    def table_exists_sql(self) -> str:
        return (
            "SELECT COUNT(*) FROM information_schema.tables "
            "WHERE table_schema = current_schema() AND table_name = %s"
        )

    def describe_table_sql(self, table: str) -> Tuple[str, QueryParams]:
        return (
            'SELECT column_name AS "Field", data_type AS "Type", '
            'is_nullable AS "Null", \'\' AS "Key", '
            'column_default AS "Default", \'\' AS "Extra" '
            "FROM information_schema.columns "
            "WHERE table_schema = current_schema() AND table_name = %s "
            "ORDER BY ordinal_position",
            [table],
        )


class MySQLDialect(Dialect):
    """MySQL dialect (`%s` positional parameters, `SHOW` statements)."""

    name = "mysql"
    paramstyle = "format"

    def list_tables_sql(self) -> str:
        return "SHOW TABLES"

    def table_exists_sql(self) -> str:
        return (
            "SELECT COUNT(*) FROM information_schema.tables "
            "WHERE table_schema = DATABASE() AND table_name = %s"
        )

    def describe_table_sql(self, table: str) -> Tuple[str, QueryParams]:
        # SHOW cannot bind a table name; callers pass a validated identifier.
        return f"SHOW COLUMNS FROM {table}", None


def dialect_for(name: str) -> Dialect:
    """Return the dialect registered under `name` (`sqlite`, `mysql`, `postgres`)."""

    dialects = {
        "sqlite": SQLiteDialect,
        "mysql": MySQLDialect,
        "postgres": PostgresDialect,
    }
    try:
        return dialects[name.lower()]()
    except KeyError:
        raise ValueError(f"Unsupported dialect: {name}") from None
