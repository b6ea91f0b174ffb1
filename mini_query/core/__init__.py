"""Public core API for condition compilation, rendering, and table tools."""

from .catalog import TableCatalog
from .conditions import Condition, ConditionSet, Operator, parse_conditions, resolve_operator
from .contracts import DialectPort, QueryExecutorPort
from .errors import (
    CompileError,
    EmptyConditionsError,
    ErrorCategory,
    ExecutionError,
    InvalidIdentifierError,
    MalformedConditionError,
    NotFoundError,
    OperandError,
    QueryToolError,
    UnsupportedOperatorError,
    ValidationError,
)
from .identifiers import Identifier, is_valid_identifier, require_identifier
from .pagination import PageRequest, normalize_page
from .query_builder import (
    CompiledQuery,
    append_limit_offset,
    build_search_query,
    compile_search,
    compile_select_all,
    compile_select_page,
    compile_where,
)
from .rendering import (
    PageResult,
    render_page,
    render_rows,
    render_schema,
    render_search,
    render_table_list,
)
from .service import DEFAULT_PAGE_SIZE, DatabaseTools
from .types import Row, Rows, Value

__all__ = [
    "Condition",
    "ConditionSet",
    "Operator",
    "parse_conditions",
    "resolve_operator",
    "DialectPort",
    "QueryExecutorPort",
    "QueryToolError",
    "ErrorCategory",
    "ValidationError",
    "InvalidIdentifierError",
    "EmptyConditionsError",
    "CompileError",
    "MalformedConditionError",
    "UnsupportedOperatorError",
    "OperandError",
    "NotFoundError",
    "ExecutionError",
    "Identifier",
    "is_valid_identifier",
    "require_identifier",
    "PageRequest",
    "normalize_page",
    "CompiledQuery",
    "append_limit_offset",
    "build_search_query",
    "compile_search",
    "compile_select_all",
    "compile_select_page",
    "compile_where",
    "PageResult",
    "render_page",
    "render_rows",
    "render_schema",
    "render_search",
    "render_table_list",
    "TableCatalog",
    "DatabaseTools",
    "DEFAULT_PAGE_SIZE",
    "Row",
    "Rows",
    "Value",
]
