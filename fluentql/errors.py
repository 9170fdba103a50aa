"""Custom exception hierarchy for fluentQL.

All public errors inherit from FluentQLError so callers can catch the base
class for any fluentQL-specific failure.  Builder and render errors are
raised before any SQL reaches the connection; driver errors are never
wrapped except where noted.
"""
from __future__ import annotations


class FluentQLError(Exception):
    """Base exception for all fluentQL errors."""


class ConfigurationError(FluentQLError):
    """Raised when a builder is rendered without the configuration it needs.

    Typically no table was set, or an unknown dialect target was requested.

    Args:
        message: Human-readable description.
        clause: The clause being rendered when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class StatementKindError(FluentQLError):
    """Raised when the statement kind is unset, unknown, or wrong for a call.

    Args:
        message: Human-readable description.
        kind: The offending statement kind (may be ``None``).
    """

    def __init__(self, message: str, kind: object = None) -> None:
        super().__init__(message)
        self.kind = kind


class DataMissingError(FluentQLError):
    """Raised when an INSERT or UPDATE is rendered with an empty payload."""

    def __init__(self, statement: str) -> None:
        super().__init__(f"No {statement.lower()} data provided.")
        self.statement = statement


class ArityMismatchError(FluentQLError):
    """Raised when a multi-row insert row does not match the declared columns.

    Args:
        message: Human-readable description.
        expected: Number of declared columns (``None`` when none declared).
        actual: Number of values supplied.
    """

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class MissingColumnValueError(ArityMismatchError):
    """Raised when ``insert_row`` omits a column declared by an earlier row."""

    def __init__(self, column: str, columns: list[str]) -> None:
        super().__init__(
            f"Missing value for column '{column}' in insert_row().",
            expected=len(columns),
        )
        self.column = column
        self.columns = columns


class GroupingImbalanceError(FluentQLError):
    """Raised when a predicate list has unmatched group markers at render time.

    Args:
        message: Human-readable description.
        clause: ``'WHERE'`` or ``'HAVING'``.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class DatabaseConnectionError(FluentQLError):
    """Raised by connection adapters when a statement cannot be prepared.

    Args:
        message: Human-readable description.
        sql: The SQL text that was being prepared.
    """

    def __init__(self, message: str, sql: str | None = None) -> None:
        super().__init__(message)
        self.sql = sql
