"""Custom exception hierarchy for chainQL.

All public errors inherit from ChainQLError so callers can catch the base
class for any chainQL-specific failure.  Every validation check has its own
``ValidationError`` subclass carrying the offending identifier.
"""
from __future__ import annotations

from typing import Any


class ChainQLError(Exception):
    """Base exception for all chainQL errors."""


class ValidationError(ChainQLError):
    """Raised when accumulated bindings fail semantic validation.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. MISSING_TABLE).
        details: Extra context about the offending clause.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class MissingTableError(ValidationError):
    """Raised when the statement has no target table."""

    def __init__(self) -> None:
        super().__init__(
            "A table is required; call table() before compiling.",
            code="MISSING_TABLE",
        )


class DuplicatedColumnNamesError(ValidationError):
    """Raised when two select items produce the same output column name."""

    def __init__(self, column: str) -> None:
        super().__init__(
            f"Column name '{column}' is selected more than once.",
            code="DUPLICATED_COLUMN_NAMES",
            details={"column": column},
        )
        self.column = column


class MissingPlaceholdersError(ValidationError):
    """Raised when a raw select fragment's ``?`` count and values disagree."""

    def __init__(self, fragment: str, expected: int, supplied: int) -> None:
        super().__init__(
            f"Raw fragment '{fragment}' has {expected} placeholder(s) "
            f"but {supplied} value(s) were supplied.",
            code="MISSING_PLACEHOLDERS",
            details={"fragment": fragment, "expected": expected, "supplied": supplied},
        )
        self.fragment = fragment


class HavingClauseWithoutAggregateFunctionError(ValidationError):
    """Raised when a HAVING column is neither an aggregate alias nor grouped."""

    def __init__(self, column: str) -> None:
        super().__init__(
            f"HAVING column '{column}' is not an aggregate alias or a GROUP BY column.",
            code="HAVING_WITHOUT_AGGREGATE",
            details={"column": column},
        )
        self.column = column


class GroupByWithNonSelectedOrAggregateFunctionError(ValidationError):
    """Raised when a GROUP BY column is not part of the projection."""

    def __init__(self, column: str) -> None:
        super().__init__(
            f"GROUP BY column '{column}' is not selected or an aggregate alias.",
            code="GROUP_BY_NOT_SELECTED",
            details={"column": column},
        )
        self.column = column


class OrderByWithNonSelectedOrAggregateFunctionError(ValidationError):
    """Raised when an ORDER BY column is not part of the projection."""

    def __init__(self, column: str) -> None:
        super().__init__(
            f"ORDER BY column '{column}' is not selected or an aggregate alias.",
            code="ORDER_BY_NOT_SELECTED",
            details={"column": column},
        )
        self.column = column


class CannotApplyClauseError(ValidationError):
    """Base for clauses that are illegal on the statement's action.

    Args:
        action: The statement kind (``SELECT``, ``INSERT``, ...).
        clause: The offending clause keyword (``JOIN``, ``WHERE``, ...).
    """

    def __init__(self, action: str, clause: str) -> None:
        super().__init__(
            f"{clause} is not allowed in {action} statements.",
            code=f"CLAUSE_NOT_ALLOWED_ON_{action}",
            details={"action": action, "clause": clause},
        )
        self.action = action
        self.clause = clause


class CannotApplyClauseOnSelectError(CannotApplyClauseError):
    """Raised when a mutation clause is attached to a SELECT statement."""

    def __init__(self, clause: str) -> None:
        super().__init__("SELECT", clause)


class CannotApplyClauseOnInsertError(CannotApplyClauseError):
    """Raised when a clause other than the column/value list is on an INSERT."""

    def __init__(self, clause: str) -> None:
        super().__init__("INSERT", clause)


class CannotApplyClauseOnUpdateError(CannotApplyClauseError):
    """Raised when an UPDATE carries a clause it cannot render."""

    def __init__(self, clause: str) -> None:
        super().__init__("UPDATE", clause)


class CannotApplyClauseOnDeleteError(CannotApplyClauseError):
    """Raised when a DELETE carries a clause it cannot render."""

    def __init__(self, clause: str) -> None:
        super().__init__("DELETE", clause)


class CompilationError(ChainQLError):
    """Raised when SQL compilation fails for an unexpected reason.

    Args:
        message: Human-readable description.
        clause: The clause being compiled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause
