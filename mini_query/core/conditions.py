"""Search condition primitives parsed from loosely-typed tool input."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .errors import (
    EmptyConditionsError,
    MalformedConditionError,
    OperandError,
    UnsupportedOperatorError,
)
from .identifiers import Identifier, require_identifier
from .types import RawConditions, Value


class Operator(str, Enum):
    """Supported comparison operators; values are the SQL keywords emitted."""

    EQ = "="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    LIKE = "LIKE"
    IN = "IN"
    BETWEEN = "BETWEEN"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"

    @property
    def is_unary(self) -> bool:
        return self in (Operator.IS_NULL, Operator.IS_NOT_NULL)

    @property
    def is_scalar(self) -> bool:
        return self in _SCALAR_OPERATORS


_SCALAR_OPERATORS = frozenset(
    {Operator.EQ, Operator.GT, Operator.GTE, Operator.LT, Operator.LTE, Operator.LIKE}
)

_SYNONYMS: Dict[str, Operator] = {
    "=": Operator.EQ,
    "EQUALS": Operator.EQ,
    ">": Operator.GT,
    "GT": Operator.GT,
    ">=": Operator.GTE,
    "GTE": Operator.GTE,
    "<": Operator.LT,
    "LT": Operator.LT,
    "<=": Operator.LTE,
    "LTE": Operator.LTE,
    "LIKE": Operator.LIKE,
    "IN": Operator.IN,
    "BETWEEN": Operator.BETWEEN,
    "IS NULL": Operator.IS_NULL,
    "IS NOT NULL": Operator.IS_NOT_NULL,
}


@dataclass(frozen=True)
class Condition:
    """One validated `column <operator> value` predicate.

    Attributes:
        column: Validated column identifier.
        operator: Resolved operator.
        value: Scalar for comparison operators, list for `IN`/`BETWEEN`,
            `None` for the null checks.
    """

    column: Identifier
    operator: Operator
    value: Value = None


ConditionSet = Tuple[Condition, ...]


def resolve_operator(raw: Any, *, column: Optional[str] = None) -> Operator:
    """Resolve operator text case-insensitively to an `Operator`."""

    text = str(raw)
    key = " ".join(text.split()).upper()
    try:
        return _SYNONYMS[key]
    except KeyError:
        raise UnsupportedOperatorError(text.strip(), column=column) from None


def parse_conditions(raw: Optional[RawConditions]) -> ConditionSet:
    """Parse `{column: {"operator": ..., "value": ...}}` into conditions.

    Iteration follows the mapping's insertion order, which fixes both the
    `WHERE` fragment order and the parameter positions.

    Raises:
        EmptyConditionsError: `raw` is missing or empty.
        InvalidIdentifierError: a column name is not a plain identifier.
        CompileError: an entry is malformed or has the wrong operand shape.
    """

    if not raw:
        raise EmptyConditionsError()
    if not isinstance(raw, Mapping):
        raise MalformedConditionError(
            "Conditions must be an object mapping column names to "
            "{operator, value} entries"
        )
    return tuple(_parse_entry(column, entry) for column, entry in raw.items())


def _parse_entry(column: Any, entry: Any) -> Condition:
    col = require_identifier(column, kind="column")

    if not isinstance(entry, Mapping) or "operator" not in entry:
        raise MalformedConditionError(
            f"Condition for column '{col}' must have an 'operator' field",
            column=col,
        )

    op = resolve_operator(entry["operator"], column=col)
    if op.is_unary:
        return Condition(column=col, operator=op)

    if "value" not in entry:
        raise MalformedConditionError(
            f"Condition for column '{col}' must have a 'value' field for operator {op.value}",
            column=col,
            operator=op.value,
        )
    value = entry["value"]

    if op is Operator.IN:
        if not isinstance(value, (list, tuple)):
            raise OperandError(
                "Value for IN operator must be a list", column=col, operator=op.value
            )
        if not value:
            raise OperandError("IN list cannot be empty", column=col, operator=op.value)
        _ensure_scalars(value, col, op)
        return Condition(column=col, operator=op, value=list(value))

    if op is Operator.BETWEEN:
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise OperandError(
                "Value for BETWEEN operator must be a list with exactly 2 elements",
                column=col,
                operator=op.value,
            )
        _ensure_scalars(value, col, op)
        return Condition(column=col, operator=op, value=list(value))

    _ensure_scalars([value], col, op)
    return Condition(column=col, operator=op, value=value)


def _ensure_scalars(values: Any, column: str, op: Operator) -> None:
    for item in values:
        if item is not None and not isinstance(item, (bool, int, float, str)):
            raise OperandError(
                f"Value for {op.value} operator on column '{column}' must be "
                f"a string, number, boolean or null, got {type(item).__name__}",
                column=column,
                operator=op.value,
            )
