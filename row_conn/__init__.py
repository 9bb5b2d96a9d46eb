"""RowConn - single-connection SQL execution with typed column extraction."""

from __future__ import annotations

from row_conn.core.connection import Connection, ConnectionConfig
from row_conn.core.enums import DatabaseBackend
from row_conn.core.exceptions import (
    AdapterError,
    CardinalityError,
    ColumnBindError,
    ColumnTypeError,
    CursorStateError,
    ExecutionError,
    ExtractionError,
    InvalidColumnError,
    NarrowingError,
    ParameterBindingError,
    PoolError,
    RowConnError,
    UnsupportedTypeError,
)
from row_conn.core.manager import ConnectionManager
from row_conn.core.result import ResultSet
from row_conn.core.statement import PreparedStatement
from row_conn.mapping import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Out,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)

__all__ = [
    # Connection
    "ConnectionConfig",
    "Connection",
    "ConnectionManager",
    # Statement and results
    "PreparedStatement",
    "ResultSet",
    # Mapping
    "Out",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    # Enums
    "DatabaseBackend",
    # Exceptions
    "RowConnError",
    "ExecutionError",
    "CardinalityError",
    "ParameterBindingError",
    "ExtractionError",
    "UnsupportedTypeError",
    "ColumnTypeError",
    "NarrowingError",
    "InvalidColumnError",
    "CursorStateError",
    "ColumnBindError",
    "AdapterError",
    "PoolError",
]
