"""RowConn exception hierarchy.

Raw driver exceptions are never exposed to callers of a Connection's
execution methods. They are wrapped in ExecutionError, logged, and the
call reports failure through its return value.
"""

from __future__ import annotations


class RowConnError(Exception):
    """Base exception for all RowConn errors."""


# --- Execution ---


class ExecutionError(RowConnError):
    """Raised when the driver fails to execute a statement."""

    def __init__(
        self,
        sql: str,
        message: str,
        code: int | str | None = None,
        state: str | None = None,
    ) -> None:
        self.sql = sql
        self.message = message
        self.code = code
        self.state = state
        super().__init__(f"{message} (error code: {code}, SQLState: {state})")


class CardinalityError(ExecutionError):
    """Raised when a query must return exactly one row but did not."""

    def __init__(self, sql: str, row_count: int) -> None:
        self.row_count = row_count
        super().__init__(sql, f"Error rows count: {row_count} (expected 1)")


class ParameterBindingError(RowConnError):
    """Raised on prepared statement parameter binding failures."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Parameter binding error: {detail}")


# --- Extraction ---


class ExtractionError(RowConnError):
    """Base for column extraction errors."""


class UnsupportedTypeError(ExtractionError):
    """Raised when no decoder exists for the requested type."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Unsupported type: {type_name}")


class ColumnTypeError(ExtractionError):
    """Raised when a column value cannot be converted by an accessor."""

    def __init__(self, column: int, accessor: str, value: object) -> None:
        self.column = column
        self.accessor = accessor
        self.value = value
        super().__init__(
            f"Cannot read column {column} with {accessor}: {type(value).__name__} {value!r}"
        )


class NarrowingError(ExtractionError):
    """Raised when a value does not fit the requested width."""

    def __init__(self, type_name: str, value: object) -> None:
        self.type_name = type_name
        self.value = value
        super().__init__(f"Value {value!r} out of range for {type_name}")


class InvalidColumnError(ExtractionError):
    """Raised when a column index is outside 1..column_count."""

    def __init__(self, column: int | str, column_count: int) -> None:
        self.column = column
        self.column_count = column_count
        super().__init__(f"Invalid column {column!r} (result has {column_count} columns)")


class CursorStateError(ExtractionError):
    """Raised when a getter is used while the cursor is not on a row."""


class ColumnBindError(ExtractionError):
    """Raised when an output slot cannot be filled from its column."""

    def __init__(self, column: int, type_name: str, detail: str) -> None:
        self.column = column
        self.type_name = type_name
        super().__init__(f"Column {column} as {type_name}: {detail}")


# --- Adapter ---


class AdapterError(RowConnError):
    """Base for adapter errors."""


class PoolError(AdapterError):
    """Raised on connection manager misuse."""
