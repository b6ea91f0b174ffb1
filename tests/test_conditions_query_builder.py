from __future__ import annotations

import unittest

from mini_query.core.conditions import Condition, Operator, parse_conditions, resolve_operator
from mini_query.core.errors import (
    EmptyConditionsError,
    InvalidIdentifierError,
    MalformedConditionError,
    OperandError,
    UnsupportedOperatorError,
)
from mini_query.core.identifiers import Identifier
from mini_query.core.pagination import normalize_page
from mini_query.core.query_builder import (
    append_limit_offset,
    build_search_query,
    compile_search,
    compile_select_all,
    compile_select_page,
    compile_where,
)
from mini_query.ports.db_api.dialects import MySQLDialect, SQLiteDialect

USERS = Identifier("users")


class OperatorTests(unittest.TestCase):
    def test_synonyms_resolve_case_insensitively(self) -> None:
        samples = [
            ("=", Operator.EQ),
            ("equals", Operator.EQ),
            ("EQUALS", Operator.EQ),
            (">", Operator.GT),
            ("gt", Operator.GT),
            (">=", Operator.GTE),
            ("Gte", Operator.GTE),
            ("<", Operator.LT),
            ("lt", Operator.LT),
            ("<=", Operator.LTE),
            ("LTE", Operator.LTE),
            ("like", Operator.LIKE),
            ("in", Operator.IN),
            ("between", Operator.BETWEEN),
            ("is null", Operator.IS_NULL),
            ("  IS   NOT  NULL ", Operator.IS_NOT_NULL),
        ]
        for raw, expected in samples:
            with self.subTest(raw=raw):
                self.assertIs(resolve_operator(raw), expected)

    def test_unknown_operator_echoes_raw_text(self) -> None:
        with self.assertRaises(UnsupportedOperatorError) as ctx:
            resolve_operator("FOO")
        self.assertEqual(ctx.exception.message, "Unsupported operator: FOO")
        with self.assertRaises(UnsupportedOperatorError) as ctx:
            resolve_operator("!=")
        self.assertIn("!=", ctx.exception.message)

    def test_unary_flags(self) -> None:
        self.assertTrue(Operator.IS_NULL.is_unary)
        self.assertTrue(Operator.IS_NOT_NULL.is_unary)
        self.assertFalse(Operator.IN.is_unary)
        self.assertTrue(Operator.LIKE.is_scalar)
        self.assertFalse(Operator.BETWEEN.is_scalar)


class ParseConditionsTests(unittest.TestCase):
    def test_preserves_insertion_order(self) -> None:
        parsed = parse_conditions(
            {
                "role": {"operator": "IN", "value": ["admin", "editor"]},
                "age": {"operator": ">", "value": 30},
                "deleted_at": {"operator": "IS NULL"},
            }
        )
        self.assertEqual([c.column for c in parsed], ["role", "age", "deleted_at"])
        self.assertEqual(
            parsed[0], Condition(column="role", operator=Operator.IN, value=["admin", "editor"])
        )
        self.assertIsNone(parsed[2].value)

    def test_empty_conditions(self) -> None:
        for raw in (None, {}):
            with self.subTest(raw=raw):
                with self.assertRaises(EmptyConditionsError):
                    parse_conditions(raw)

    def test_non_mapping_conditions_are_malformed(self) -> None:
        for raw in ([["age", ">", 30]], "age > 30", ("age",)):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedConditionError) as ctx:
                    parse_conditions(raw)  # type: ignore[arg-type]
                self.assertIsNone(ctx.exception.column)
                self.assertIn("mapping column names", ctx.exception.message)

    def test_invalid_column(self) -> None:
        with self.assertRaises(InvalidIdentifierError):
            parse_conditions({"age; DROP TABLE users": {"operator": "=", "value": 1}})

    def test_missing_operator_or_value(self) -> None:
        with self.assertRaises(MalformedConditionError) as ctx:
            parse_conditions({"age": {"value": 1}})
        self.assertIn("'operator'", ctx.exception.message)

        with self.assertRaises(MalformedConditionError) as ctx:
            parse_conditions({"age": {"operator": ">"}})
        self.assertIn("'value'", ctx.exception.message)
        self.assertEqual(ctx.exception.column, "age")

        with self.assertRaises(MalformedConditionError):
            parse_conditions({"age": 30})  # type: ignore[dict-item]

    def test_null_checks_ignore_value(self) -> None:
        parsed = parse_conditions({"deleted_at": {"operator": "IS NOT NULL", "value": 5}})
        self.assertIsNone(parsed[0].value)

    def test_in_requires_non_empty_list(self) -> None:
        with self.assertRaises(OperandError) as ctx:
            parse_conditions({"status": {"operator": "IN", "value": []}})
        self.assertIn("IN", ctx.exception.message)
        self.assertIn("empty", ctx.exception.message)

        with self.assertRaises(OperandError) as ctx:
            parse_conditions({"status": {"operator": "IN", "value": "admin"}})
        self.assertEqual(ctx.exception.message, "Value for IN operator must be a list")

    def test_between_requires_two_elements(self) -> None:
        for value in ([10], [1, 2, 3], 10, None):
            with self.subTest(value=value):
                with self.assertRaises(OperandError) as ctx:
                    parse_conditions({"age": {"operator": "BETWEEN", "value": value}})
                self.assertIn("BETWEEN", ctx.exception.message)
                self.assertIn("2", ctx.exception.message)

    def test_unsupported_operator(self) -> None:
        with self.assertRaises(UnsupportedOperatorError) as ctx:
            parse_conditions({"x": {"operator": "FOO", "value": 1}})
        self.assertIn("FOO", ctx.exception.message)
        self.assertEqual(ctx.exception.column, "x")

    def test_nested_values_are_rejected(self) -> None:
        samples = [
            {"age": {"operator": "=", "value": [1]}},
            {"age": {"operator": "=", "value": {"a": 1}}},
            {"age": {"operator": "IN", "value": [1, [2]]}},
            {"age": {"operator": "BETWEEN", "value": [1, {"x": 2}]}},
        ]
        for raw in samples:
            with self.subTest(raw=raw):
                with self.assertRaises(OperandError):
                    parse_conditions(raw)


class QueryBuilderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.qmark = SQLiteDialect()
        self.format = MySQLDialect()
        self.page = normalize_page(0, 10, 50)

    def _compile(self, raw, page=None, dialect=None):
        return build_search_query(USERS, raw, page or self.page, dialect or self.qmark)

    def test_comparison_end_to_end(self) -> None:
        query = self._compile({"age": {"operator": ">", "value": 30}})
        self.assertEqual(query.sql, "SELECT * FROM users WHERE age > ? LIMIT ? OFFSET ?")
        self.assertEqual(query.params, [30, 10, 0])

    def test_every_scalar_operator(self) -> None:
        samples = [
            ("=", "="),
            ("EQUALS", "="),
            ("GT", ">"),
            ("GTE", ">="),
            ("LT", "<"),
            ("LTE", "<="),
            ("LIKE", "LIKE"),
        ]
        for raw, sql_op in samples:
            with self.subTest(raw=raw):
                query = self._compile({"name": {"operator": raw, "value": "a%"}})
                self.assertTrue(query.sql.endswith(f"WHERE name {sql_op} ? LIMIT ? OFFSET ?"))
                self.assertEqual(query.params, ["a%", 10, 0])

    def test_in_expands_one_placeholder_per_value(self) -> None:
        query = self._compile({"role": {"operator": "IN", "value": ["admin", "editor"]}})
        self.assertIn("role IN (?, ?)", query.sql)
        self.assertEqual(query.params, ["admin", "editor", 10, 0])

    def test_between_binds_bounds_in_order(self) -> None:
        query = self._compile({"age": {"operator": "BETWEEN", "value": [18, 65]}})
        self.assertIn("age BETWEEN ? AND ?", query.sql)
        self.assertEqual(query.params, [18, 65, 10, 0])

    def test_null_checks_contribute_no_params(self) -> None:
        query = self._compile({"deleted_at": {"operator": "IS NULL"}})
        self.assertEqual(
            query.sql, "SELECT * FROM users WHERE deleted_at IS NULL LIMIT ? OFFSET ?"
        )
        self.assertEqual(query.params, [10, 0])

        query = self._compile({"deleted_at": {"operator": "is not null", "value": 1}})
        self.assertIn("deleted_at IS NOT NULL", query.sql)
        self.assertEqual(query.params, [10, 0])

    def test_fragments_joined_in_order_and_limit_last(self) -> None:
        page = normalize_page(3, 25, 50)
        query = self._compile(
            {
                "role": {"operator": "in", "value": ["a", "b", "c"]},
                "deleted_at": {"operator": "IS NULL"},
                "age": {"operator": "between", "value": [20, 30]},
                "name": {"operator": "like", "value": "%x%"},
            },
            page=page,
        )
        self.assertEqual(
            query.sql,
            "SELECT * FROM users WHERE role IN (?, ?, ?) AND deleted_at IS NULL "
            "AND age BETWEEN ? AND ? AND name LIKE ? LIMIT ? OFFSET ?",
        )
        self.assertEqual(query.params, ["a", "b", "c", 20, 30, "%x%", 25, 75])

    def test_placeholder_count_matches_params(self) -> None:
        samples = [
            {"a": {"operator": "=", "value": None}},
            {"a": {"operator": "IN", "value": list(range(7))}},
            {"a": {"operator": "IS NULL"}, "b": {"operator": "IS NOT NULL"}},
            {
                "a": {"operator": "BETWEEN", "value": ["x", "y"]},
                "b": {"operator": "IN", "value": [True, False]},
                "c": {"operator": "<=", "value": 1.5},
            },
        ]
        for raw in samples:
            with self.subTest(raw=raw):
                query = self._compile(raw)
                self.assertEqual(query.sql.count("?"), len(query.params))
                self.assertEqual(query.params[-2:], [10, 0])

    def test_values_never_appear_in_sql(self) -> None:
        payload = "x' OR '1'='1"
        query = self._compile({"name": {"operator": "=", "value": payload}})
        self.assertNotIn(payload, query.sql)
        self.assertEqual(query.params[0], payload)

    def test_format_paramstyle_placeholders(self) -> None:
        query = self._compile(
            {"role": {"operator": "IN", "value": ["a", "b"]}, "age": {"operator": ">", "value": 1}},
            dialect=self.format,
        )
        self.assertEqual(
            query.sql,
            "SELECT * FROM users WHERE role IN (%s, %s) AND age > %s LIMIT %s OFFSET %s",
        )
        self.assertEqual(query.sql.count("%s"), len(query.params))

    def test_compile_search_rejects_empty_condition_set(self) -> None:
        with self.assertRaises(EmptyConditionsError):
            compile_search(USERS, (), self.page, self.qmark)

    def test_compile_where_empty(self) -> None:
        self.assertEqual(compile_where((), self.qmark), ("", []))

    def test_unconditional_selects(self) -> None:
        self.assertEqual(compile_select_all(USERS).sql, "SELECT * FROM users")
        self.assertEqual(compile_select_all(USERS).params, [])

        query = compile_select_page(USERS, normalize_page(2, 10, 50), self.qmark)
        self.assertEqual(query.sql, "SELECT * FROM users LIMIT ? OFFSET ?")
        self.assertEqual(query.params, [10, 20])

    def test_append_limit_offset_keeps_existing_params(self) -> None:
        params = [1]
        sql, merged = append_limit_offset("SELECT 1", params, self.page, self.format)
        self.assertEqual(sql, "SELECT 1 LIMIT %s OFFSET %s")
        self.assertEqual(merged, [1, 10, 0])
        self.assertEqual(params, [1])


if __name__ == "__main__":
    unittest.main()
