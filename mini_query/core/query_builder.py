"""SQL builders for filtered, paginated `SELECT` statements.

Every value reaches the database as a bound positional parameter. The only
text interpolated into SQL is table and column names, and those are typed
`Identifier` values produced by `require_identifier`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .conditions import Condition, ConditionSet, Operator, parse_conditions
from .contracts import DialectPort
from .errors import EmptyConditionsError
from .identifiers import Identifier
from .pagination import PageRequest
from .types import PositionalParams, RawConditions, Value


@dataclass(frozen=True)
class CompiledQuery:
    """Parameterized SQL text with its positional bind values."""

    sql: str
    params: PositionalParams = field(default_factory=list)


def compile_select_all(table: Identifier) -> CompiledQuery:
    """Compile an unconditional, unpaginated `SELECT *`."""

    return CompiledQuery(f"SELECT * FROM {table}")


def compile_select_page(
    table: Identifier, page: PageRequest, dialect: DialectPort
) -> CompiledQuery:
    """Compile an unconditional `SELECT *` for one page of rows."""

    sql, params = append_limit_offset(f"SELECT * FROM {table}", [], page, dialect)
    return CompiledQuery(sql, params)


def compile_search(
    table: Identifier,
    conditions: ConditionSet,
    page: PageRequest,
    dialect: DialectPort,
) -> CompiledQuery:
    """Compile a filtered, paginated `SELECT *`.

    Args:
        table: Validated table name.
        conditions: Parsed conditions, in the order their fragments appear.
        page: Normalized pagination window.
        dialect: Supplies the positional placeholder.

    Returns:
        SQL of the form `SELECT * FROM t WHERE ... LIMIT ? OFFSET ?` with
        the page size and offset always bound last.

    Raises:
        EmptyConditionsError: `conditions` is empty; use an unconditional
            listing instead.
    """

    if not conditions:
        raise EmptyConditionsError()

    where_sql, params = compile_where(conditions, dialect)
    sql, params = append_limit_offset(
        f"SELECT * FROM {table}{where_sql}", params, page, dialect
    )
    return CompiledQuery(sql, params)


def compile_where(
    conditions: ConditionSet, dialect: DialectPort
) -> Tuple[str, PositionalParams]:
    """Compile conditions into a ` WHERE ...` fragment joined with `AND`."""

    if not conditions:
        return "", []

    clauses: List[str] = []
    params: PositionalParams = []
    for condition in conditions:
        clause, fragment_params = _compile_condition(condition, dialect)
        clauses.append(clause)
        params.extend(fragment_params)
    return f" WHERE {' AND '.join(clauses)}", params


def append_limit_offset(
    sql: str,
    params: PositionalParams,
    page: PageRequest,
    dialect: DialectPort,
) -> Tuple[str, PositionalParams]:
    """Append `LIMIT ? OFFSET ?` and bind page size then offset."""

    ph = dialect.placeholder()
    return f"{sql} LIMIT {ph} OFFSET {ph}", [*params, page.page_size, page.offset]


def _compile_condition(
    condition: Condition, dialect: DialectPort
) -> Tuple[str, List[Value]]:
    col = condition.column
    op = condition.operator
    ph = dialect.placeholder()

    if op.is_unary:
        return f"{col} {op.value}", []

    values = condition.value if isinstance(condition.value, list) else []

    if op is Operator.IN:
        placeholders = ", ".join(ph for _ in values)
        return f"{col} IN ({placeholders})", list(values)

    if op is Operator.BETWEEN:
        low, high = values
        return f"{col} BETWEEN {ph} AND {ph}", [low, high]

    return f"{col} {op.value} {ph}", [condition.value]


def build_search_query(
    table: Identifier,
    raw_conditions: Optional[RawConditions],
    page: PageRequest,
    dialect: DialectPort,
) -> CompiledQuery:
    """Parse loosely-typed tool conditions and compile the search query."""

    return compile_search(table, parse_conditions(raw_conditions), page, dialect)
