"""Tool schemas and explicit tool-name -> handler dispatch.

Tool names and descriptions are the public vocabulary seen by tool-calling
clients. `ToolDispatch.dispatch` always returns text; it never raises.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .core.service import DatabaseTools

logger = logging.getLogger(__name__)

_TABLE_NAME = {"type": "string", "description": "Table name ([A-Za-z0-9_]+)."}
_PAGE = {"type": "integer", "description": "Zero-based page number.", "default": 0}
_PAGE_SIZE = {"type": "integer", "description": "Rows per page."}

TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "name": "getTables",
        "description": "Retrieve available tables in the database",
        "input_schema": {"type": "object", "properties": {}},
    },
    {
        "name": "tableExists",
        "description": "Check if a table exists in the database",
        "input_schema": {
            "type": "object",
            "properties": {"tableName": _TABLE_NAME},
            "required": ["tableName"],
        },
    },
    {
        "name": "getRows",
        "description": "Retrieve all rows from a specified table",
        "input_schema": {
            "type": "object",
            "properties": {"tableName": _TABLE_NAME},
            "required": ["tableName"],
        },
    },
    {
        "name": "getRowsPaginated",
        "description": "Retrieve rows from a specified table with pagination",
        "input_schema": {
            "type": "object",
            "properties": {
                "tableName": _TABLE_NAME,
                "page": _PAGE,
                "pageSize": _PAGE_SIZE,
            },
            "required": ["tableName"],
        },
    },
    {
        "name": "searchRows",
        "description": (
            "Search for rows in a table using column conditions with various operators. "
            "Operators: =/EQUALS, >/GT, >=/GTE, </LT, <=/LTE, LIKE, "
            "IN (non-empty list), BETWEEN (list of exactly 2), IS NULL, IS NOT NULL."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "tableName": _TABLE_NAME,
                "conditions": {
                    "type": "object",
                    "description": "Column name -> {operator, value}.",
                    "additionalProperties": {
                        "type": "object",
                        "properties": {
                            "operator": {"type": "string"},
                            "value": {},
                        },
                        "required": ["operator"],
                    },
                },
                "page": _PAGE,
                "pageSize": _PAGE_SIZE,
            },
            "required": ["tableName", "conditions"],
        },
    },
    {
        "name": "getTableSchema",
        "description": "Get schema information for a specified table",
        "input_schema": {
            "type": "object",
            "properties": {"tableName": _TABLE_NAME},
            "required": ["tableName"],
        },
    },
]


class ToolArgumentError(Exception):
    """Tool call arguments are missing or have the wrong type."""


class ToolDispatch:
    """Routes tool name -> handler. Every mapping is listed explicitly."""

    def __init__(self, tools: DatabaseTools):
        self._tools = tools
        self._handlers: Dict[str, Callable[[Mapping[str, Any]], str]] = {
            "getTables": self._get_tables,
            "tableExists": self._table_exists,
            "getRows": self._get_rows,
            "getRowsPaginated": self._get_rows_paginated,
            "searchRows": self._search_rows,
            "getTableSchema": self._get_table_schema,
        }

    @property
    def tool_names(self) -> List[str]:
        return list(self._handlers)

    def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
        """Run tool `name` with JSON-like `arguments` and return its text result."""

        handler = self._handlers.get(name)
        if handler is None:
            logger.warning("Unknown tool requested: %s", name, extra={"tool_name": name})
            return f"Unknown tool: {name}"
        try:
            return handler(arguments or {})
        except ToolArgumentError as exc:
            logger.warning("Bad arguments for %s: %s", name, exc, extra={"tool_name": name})
            return f"{exc} for tool '{name}'"

    def _get_tables(self, args: Mapping[str, Any]) -> str:
        return self._tools.get_tables()

    def _table_exists(self, args: Mapping[str, Any]) -> str:
        return "true" if self._tools.table_exists(_required(args, "tableName")) else "false"

    def _get_rows(self, args: Mapping[str, Any]) -> str:
        return self._tools.get_rows(_required(args, "tableName"))

    def _get_rows_paginated(self, args: Mapping[str, Any]) -> str:
        return self._tools.get_rows_paginated(
            _required(args, "tableName"),
            _optional_int(args, "page"),
            _optional_int(args, "pageSize"),
        )

    def _search_rows(self, args: Mapping[str, Any]) -> str:
        return self._tools.search_rows(
            _required(args, "tableName"),
            _required(args, "conditions"),
            _optional_int(args, "page"),
            _optional_int(args, "pageSize"),
        )

    def _get_table_schema(self, args: Mapping[str, Any]) -> str:
        return self._tools.get_table_schema(_required(args, "tableName"))


def _required(args: Mapping[str, Any], key: str) -> Any:
    if key not in args:
        raise ToolArgumentError(f"Missing required argument '{key}'")
    return args[key]


def _optional_int(args: Mapping[str, Any], key: str) -> Optional[int]:
    value = args.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ToolArgumentError(f"Argument '{key}' must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ToolArgumentError(f"Argument '{key}' must be an integer") from None
