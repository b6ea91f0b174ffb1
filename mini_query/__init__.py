"""Injection-safe table browsing and search tools over DB-API databases."""

from .core import (
    Condition,
    DatabaseTools,
    ExecutionError,
    Operator,
    PageRequest,
    QueryToolError,
    ValidationError,
    build_search_query,
    is_valid_identifier,
    normalize_page,
    parse_conditions,
)
from .ports import Database, Dialect, MySQLDialect, PostgresDialect, SQLiteDialect
from .tools import TOOL_DEFINITIONS, ToolDispatch

__all__ = [
    "Condition",
    "DatabaseTools",
    "ExecutionError",
    "Operator",
    "PageRequest",
    "QueryToolError",
    "ValidationError",
    "build_search_query",
    "is_valid_identifier",
    "normalize_page",
    "parse_conditions",
    "Database",
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "TOOL_DEFINITIONS",
    "ToolDispatch",
]
