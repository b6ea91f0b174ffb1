"""Browse and search an in-memory SQLite database through `DatabaseTools`."""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_query").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_query import Database, DatabaseTools, SQLiteDialect


def seed(conn: sqlite3.Connection) -> None:
    conn.execute(
        "CREATE TABLE accounts ("
        "id INTEGER PRIMARY KEY, email TEXT NOT NULL, age INTEGER, "
        "role TEXT, deleted_at TEXT)"
    )
    conn.executemany(
        "INSERT INTO accounts (email, age, role, deleted_at) VALUES (?, ?, ?, ?)",
        [
            ("alice@example.com", 24, "admin", None),
            ("bob@example.com", 30, "owner", None),
            ("charlie@example.com", 17, "user", None),
            ("dana@sample.com", 35, "user", None),
            ("erin@example.com", None, "auditor", None),
            ("frank@example.com", 40, "user", "2026-01-01T00:00:00"),
        ],
    )
    conn.commit()


def main() -> None:
    conn = sqlite3.connect(":memory:")
    seed(conn)

    with Database(conn, SQLiteDialect()) as db:
        tools = DatabaseTools(db, default_page_size=10)

        print(tools.get_tables())
        print(tools.get_table_schema("accounts"))
        print(tools.get_rows_paginated("accounts", 0, 3))

        # Conditions are AND-ed in insertion order.
        print(
            tools.search_rows(
                "accounts",
                {
                    "role": {"operator": "IN", "value": ["user", "owner"]},
                    "age": {"operator": "BETWEEN", "value": [18, 40]},
                    "deleted_at": {"operator": "IS NULL"},
                },
            )
        )

        # Errors come back as text, never as exceptions.
        print(tools.search_rows("accounts", {"age": {"operator": "FOO", "value": 1}}))
        print(tools.get_rows("accounts; DROP TABLE accounts"))
        print(tools.table_exists("missing"))


if __name__ == "__main__":
    main()
