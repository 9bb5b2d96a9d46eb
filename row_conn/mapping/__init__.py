"""Mapping layer - typed extraction of result columns."""

from __future__ import annotations

from row_conn.mapping.binder import Out, bind_columns
from row_conn.mapping.decoders import decoder_for, extract
from row_conn.mapping.types import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)

__all__ = [
    "Out",
    "bind_columns",
    "decoder_for",
    "extract",
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
]
