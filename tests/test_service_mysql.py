from __future__ import annotations

import importlib
import os
import unittest
from typing import Any

from mini_query.core.service import DatabaseTools
from mini_query.ports.db_api.database import Database
from mini_query.ports.db_api.dialects import MySQLDialect


def _load_pymysql() -> Any:
    try:
        return importlib.import_module("pymysql")
    except ImportError:
        return None


PYMYSQL = _load_pymysql()
MYSQL_HOST = os.getenv("MINI_QUERY_TEST_MYSQL_HOST")


@unittest.skipUnless(PYMYSQL is not None, "pymysql is not installed")
@unittest.skipUnless(MYSQL_HOST, "MINI_QUERY_TEST_MYSQL_HOST is not set")
class DatabaseToolsMySQLTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        try:
            cls.conn = PYMYSQL.connect(
                host=MYSQL_HOST,
                port=int(os.getenv("MINI_QUERY_TEST_MYSQL_PORT", "3306")),
                user=os.getenv("MINI_QUERY_TEST_MYSQL_USER", "root"),
                password=os.getenv("MINI_QUERY_TEST_MYSQL_PASSWORD", "password"),
                database=os.getenv("MINI_QUERY_TEST_MYSQL_DATABASE", "mini_query_test"),
                charset="utf8mb4",
                autocommit=True,
            )
        except Exception as exc:
            raise unittest.SkipTest(f"MySQL is not reachable at {MYSQL_HOST}: {exc}") from exc

        with cls.conn.cursor() as cur:
            cur.execute("DROP TABLE IF EXISTS mq_people")
            cur.execute(
                "CREATE TABLE mq_people ("
                "id INT AUTO_INCREMENT PRIMARY KEY, name VARCHAR(40) NOT NULL, "
                "age INT NULL, role VARCHAR(20) NULL)"
            )
            cur.executemany(
                "INSERT INTO mq_people (name, age, role) VALUES (%s, %s, %s)",
                [("alice", 34, "admin"), ("bob", 27, "editor"), ("carol", None, "viewer")],
            )
        cls.tools = DatabaseTools(Database(cls.conn, MySQLDialect()))

    @classmethod
    def tearDownClass(cls) -> None:
        with cls.conn.cursor() as cur:
            cur.execute("DROP TABLE IF EXISTS mq_people")
        cls.conn.close()

    def test_get_tables_and_exists(self) -> None:
        self.assertIn("mq_people", self.tools.get_tables().split(", "))
        self.assertTrue(self.tools.table_exists("mq_people"))
        self.assertFalse(self.tools.table_exists("mq_missing"))

    def test_search(self) -> None:
        text = self.tools.search_rows(
            "mq_people",
            {
                "role": {"operator": "IN", "value": ["admin", "editor"]},
                "age": {"operator": "BETWEEN", "value": [20, 40]},
            },
            0,
            10,
        )
        lines = text.splitlines()
        self.assertEqual(lines[0], "Search results - Page: 1, Size: 10")
        self.assertEqual(lines[2], "id | name | age | role")
        self.assertEqual(len(lines), 6)

    def test_null_values_render_as_null(self) -> None:
        text = self.tools.search_rows("mq_people", {"age": {"operator": "IS NULL"}})
        self.assertTrue(text.splitlines()[4].endswith("| carol | NULL | viewer"))

    def test_schema(self) -> None:
        lines = self.tools.get_table_schema("mq_people").splitlines()
        self.assertEqual(lines[1], "Column | Type | Null | Key | Default | Extra")
        self.assertTrue(lines[3].startswith("id | "))
        self.assertIn(" | PRI | ", lines[3])
        self.assertTrue(lines[3].endswith("auto_increment"))


if __name__ == "__main__":
    unittest.main()
