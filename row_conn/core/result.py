"""Buffered result cursor.

ResultSet drains a DB-API cursor on construction and exposes the rows through
a forward cursor with 1-based, typed column accessors. SQL NULL reads as
zero or the empty string; use is_null() to tell them apart.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Iterator, Sequence

from row_conn.core.exceptions import (
    ColumnTypeError,
    CursorStateError,
    InvalidColumnError,
    NarrowingError,
)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1


def _columns_from_description(description: Sequence[Sequence[Any]] | None) -> list[str]:
    if description is None:
        return []
    return [str(desc[0]) for desc in description]


def _row_values(row: Any, columns: list[str]) -> tuple[Any, ...]:
    """Normalize dict-like and tuple-like driver rows to a tuple."""
    if isinstance(row, dict):
        return tuple(row[name] for name in columns)
    return tuple(row)


class ResultSet:
    """Rows of the most recent query with a forward cursor."""

    def __init__(self, columns: list[str], rows: list[tuple[Any, ...]]) -> None:
        self._columns = columns
        self._rows = rows
        self._position = -1
        self._closed = False

    @classmethod
    def from_cursor(cls, cursor: Any) -> ResultSet:
        """Build a ResultSet by fetching every row from a DB-API cursor."""
        columns = _columns_from_description(cursor.description)
        if not columns:
            return cls([], [])
        rows = [_row_values(row, columns) for row in cursor.fetchall()]
        return cls(columns, rows)

    # --- Cursor movement ---

    def rows_count(self) -> int:
        return len(self._rows)

    def column_count(self) -> int:
        return len(self._columns)

    @property
    def column_names(self) -> list[str]:
        return list(self._columns)

    def find_column(self, name: str) -> int:
        """Return the 1-based index of a column label."""
        try:
            return self._columns.index(name) + 1
        except ValueError:
            raise InvalidColumnError(name, len(self._columns)) from None

    def next(self) -> bool:
        """Advance to the next row. Returns False once past the last row."""
        self._check_open()
        if self._position < len(self._rows):
            self._position += 1
        return self._position < len(self._rows)

    def before_first(self) -> None:
        self._check_open()
        self._position = -1

    def get_row(self) -> int:
        """Return the 1-based current row number, or 0 when off-row."""
        if 0 <= self._position < len(self._rows):
            return self._position + 1
        return 0

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the buffered rows."""
        self._rows = []
        self._position = -1
        self._closed = True

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        """Iterate over the remaining rows, advancing the cursor."""
        while self.next():
            yield self._rows[self._position]

    # --- Typed accessors ---

    def is_null(self, column: int) -> bool:
        return self._value(column) is None

    def get_double(self, column: int) -> float:
        value = self._value(column)
        if value is None:
            return 0.0
        if isinstance(value, (bytes, bytearray)):
            value = value.decode()
        try:
            return float(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise ColumnTypeError(column, "get_double", value) from e

    def get_int64(self, column: int) -> int:
        result = self._integral(column, "get_int64")
        if not INT64_MIN <= result <= INT64_MAX:
            raise NarrowingError("int64", result)
        return result

    def get_uint64(self, column: int) -> int:
        result = self._integral(column, "get_uint64")
        if not 0 <= result <= UINT64_MAX:
            raise NarrowingError("uint64", result)
        return result

    def get_string(self, column: int) -> str:
        value = self._value(column)
        if value is None:
            return ""
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value).decode("utf-8", errors="replace")
        return str(value)

    # --- Internals ---

    def _check_open(self) -> None:
        if self._closed:
            raise CursorStateError("Result set is closed")

    def _value(self, column: int) -> Any:
        self._check_open()
        if not 0 <= self._position < len(self._rows):
            raise CursorStateError("Cursor is not positioned on a row")
        if not 1 <= column <= len(self._columns):
            raise InvalidColumnError(column, len(self._columns))
        return self._rows[self._position][column - 1]

    def _integral(self, column: int, accessor: str) -> int:
        """Read a column as an integer, truncating fractional values toward zero."""
        value = self._value(column)
        if value is None:
            return 0
        if isinstance(value, (bytes, bytearray)):
            value = value.decode()
        if isinstance(value, int):
            return int(value)
        if isinstance(value, str):
            text = value.strip()
            try:
                return int(text)
            except ValueError:
                pass
            try:
                value = Decimal(text)
            except InvalidOperation as e:
                raise ColumnTypeError(column, accessor, value) from e
        if isinstance(value, (float, Decimal)):
            if isinstance(value, float) and not math.isfinite(value):
                raise ColumnTypeError(column, accessor, value)
            if isinstance(value, Decimal) and not value.is_finite():
                raise ColumnTypeError(column, accessor, value)
            return int(value)
        raise ColumnTypeError(column, accessor, value)
