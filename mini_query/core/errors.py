"""Typed error hierarchy for query validation, compilation, and execution.

Internal layers raise these errors. Only the outer tool boundary
(`DatabaseTools` and `ToolDispatch`) flattens them into text.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """High-level error categories used for logging and routing."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DATABASE = "database"


class QueryToolError(Exception):
    """Base exception for all query tool failures."""

    def __init__(self, message: str, code: str, category: ErrorCategory):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category


# ─── Validation ──────────────────────────────────────────────────


class ValidationError(QueryToolError):
    """Caller input was rejected before anything was executed."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code, ErrorCategory.VALIDATION)


class InvalidIdentifierError(ValidationError):
    """Table or column name is not a plain `[A-Za-z0-9_]+` identifier."""

    def __init__(self, name: object, kind: str = "table"):
        super().__init__(
            f"Invalid {kind} name. Only alphanumeric characters and underscores are allowed.",
            "INVALID_IDENTIFIER",
        )
        self.name = name
        self.kind = kind


class EmptyConditionsError(ValidationError):
    """Search was requested without any condition."""

    def __init__(self) -> None:
        super().__init__(
            "No search conditions provided. Use getRowsPaginated for retrieving all rows.",
            "EMPTY_CONDITIONS",
        )


class CompileError(ValidationError):
    """A condition entry cannot be compiled into SQL."""

    def __init__(
        self,
        message: str,
        code: str = "COMPILE_ERROR",
        *,
        column: Optional[str] = None,
        operator: Optional[str] = None,
    ):
        super().__init__(message, code)
        self.column = column
        self.operator = operator


class MalformedConditionError(CompileError):
    """Conditions are not a mapping, or an entry lacks `operator`/`value`."""

    def __init__(
        self,
        message: str,
        *,
        column: Optional[str] = None,
        operator: Optional[str] = None,
    ):
        super().__init__(message, "MALFORMED_CONDITION", column=column, operator=operator)


class UnsupportedOperatorError(CompileError):
    """Operator text does not match any known operator synonym."""

    def __init__(self, raw_operator: str, *, column: Optional[str] = None):
        super().__init__(
            f"Unsupported operator: {raw_operator}",
            "UNSUPPORTED_OPERATOR",
            column=column,
            operator=raw_operator,
        )


class OperandError(CompileError):
    """Operand value has the wrong shape for its operator."""

    def __init__(self, message: str, *, column: str, operator: str):
        super().__init__(message, "INVALID_OPERAND", column=column, operator=operator)


# ─── Lookup / infrastructure ─────────────────────────────────────


class NotFoundError(QueryToolError):
    """Requested table does not exist."""

    def __init__(self, table: str):
        super().__init__(
            f"Table '{table}' does not exist.", "TABLE_NOT_FOUND", ErrorCategory.NOT_FOUND
        )
        self.table = table


class ExecutionError(QueryToolError):
    """Underlying database call failed."""

    def __init__(self, message: str, operation: str = "query"):
        super().__init__(message, "DATABASE_ERROR", ErrorCategory.DATABASE)
        self.operation = operation
