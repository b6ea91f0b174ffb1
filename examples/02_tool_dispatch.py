"""Route JSON-like tool calls to `DatabaseTools` with `ToolDispatch`."""

from __future__ import annotations

import json
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

from mini_query import TOOL_DEFINITIONS, Database, DatabaseTools, SQLiteDialect, ToolDispatch
from mini_query.observability import setup_logging


def main() -> None:
    setup_logging("WARNING", "json")

    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE products (id INTEGER PRIMARY KEY, name TEXT, price REAL)")
    conn.executemany(
        "INSERT INTO products (name, price) VALUES (?, ?)",
        [("pen", 1.5), ("notebook", 4.0), ("lamp", 25.0)],
    )
    conn.commit()

    dispatch = ToolDispatch(DatabaseTools(Database(conn, SQLiteDialect())))
    print(json.dumps([tool["name"] for tool in TOOL_DEFINITIONS]))

    calls = [
        ("getTables", {}),
        ("tableExists", {"tableName": "products"}),
        ("searchRows", {"tableName": "products", "conditions": {"price": {"operator": "lt", "value": 5}}}),
        ("searchRows", {"tableName": "products", "conditions": {"name": {"operator": "IN", "value": []}}}),
        ("dropTable", {"tableName": "products"}),
    ]
    for name, arguments in calls:
        print(f"> {name} {json.dumps(arguments)}")
        print(dispatch.dispatch(name, arguments))


if __name__ == "__main__":
    main()
