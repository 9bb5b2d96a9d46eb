"""Column decoders - the type extractor.

Each supported target type maps to exactly one decoder in a closed registry:

- float types read through ResultSet.get_double, Float32 rounded to single precision
- signed int types read through ResultSet.get_int64, narrowed by range check
- unsigned int types read through ResultSet.get_uint64, narrowed by range check
- str reads through ResultSet.get_string with its own decoder

The lookup uses the declared type object itself (exact match, no subclass
walk), so `bool`, `bytes` and user subclasses are unsupported.
"""

from __future__ import annotations

import math
import struct
from typing import Any

from row_conn.core.exceptions import NarrowingError, UnsupportedTypeError
from row_conn.core.result import ResultSet
from row_conn.mapping.protocol import ColumnDecodable
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


def type_name(target: Any) -> str:
    """Readable name of a requested type for log lines."""
    return getattr(target, "__qualname__", None) or repr(target)


class FloatDecoder:
    """Reads a double and narrows to single precision when asked."""

    def __init__(self, target: type[float], single: bool = False) -> None:
        self._target = target
        self._single = single

    @property
    def target(self) -> type:
        return self._target

    def decode(self, result: ResultSet, column: int) -> float:
        value = result.get_double(column)
        if self._single:
            try:
                narrowed = struct.unpack("f", struct.pack("f", value))[0]
            except OverflowError as e:
                raise NarrowingError(type_name(self._target), value) from e
            # Newer interpreters round out-of-range values to inf instead of raising
            if math.isfinite(value) and not math.isfinite(narrowed):
                raise NarrowingError(type_name(self._target), value)
            value = narrowed
        if self._target is float:
            return value
        return self._target(value)


class SignedDecoder:
    """Reads a 64-bit signed integer and range-checks it for `bits`."""

    def __init__(self, target: type[int], bits: int = 64) -> None:
        self._target = target
        self._low = -(2 ** (bits - 1))
        self._high = 2 ** (bits - 1) - 1

    @property
    def target(self) -> type:
        return self._target

    def decode(self, result: ResultSet, column: int) -> int:
        value = result.get_int64(column)
        if not self._low <= value <= self._high:
            raise NarrowingError(type_name(self._target), value)
        if self._target is int:
            return value
        return self._target(value)


class UnsignedDecoder:
    """Reads a 64-bit unsigned integer and range-checks it for `bits`."""

    def __init__(self, target: type[int], bits: int = 64) -> None:
        self._target = target
        self._high = 2**bits - 1

    @property
    def target(self) -> type:
        return self._target

    def decode(self, result: ResultSet, column: int) -> int:
        value = result.get_uint64(column)
        if value > self._high:
            raise NarrowingError(type_name(self._target), value)
        return self._target(value)


class TextDecoder:
    """Reads the column as text."""

    @property
    def target(self) -> type:
        return str

    def decode(self, result: ResultSet, column: int) -> str:
        return result.get_string(column)


_DECODERS: dict[Any, ColumnDecodable[Any]] = {
    float: FloatDecoder(float),
    Float64: FloatDecoder(Float64),
    Float32: FloatDecoder(Float32, single=True),
    int: SignedDecoder(int),
    Int64: SignedDecoder(Int64),
    Int32: SignedDecoder(Int32, 32),
    Int16: SignedDecoder(Int16, 16),
    Int8: SignedDecoder(Int8, 8),
    UInt64: UnsignedDecoder(UInt64),
    UInt32: UnsignedDecoder(UInt32, 32),
    UInt16: UnsignedDecoder(UInt16, 16),
    UInt8: UnsignedDecoder(UInt8, 8),
    str: TextDecoder(),
}


def decoder_for(target: Any) -> ColumnDecodable[Any] | None:
    """Return the decoder for a declared target type, or None if unsupported."""
    try:
        return _DECODERS.get(target)
    except TypeError:
        # unhashable type expressions
        return None


def extract(
    result: ResultSet,
    column: int,
    target: Any,
    decoder: ColumnDecodable[Any] | None,
) -> Any:
    """Read `column` of the current row with a resolved decoder.

    Raises UnsupportedTypeError when `decoder` is None, otherwise whatever
    ExtractionError the decoder or the result set raises.
    """
    if decoder is None:
        raise UnsupportedTypeError(type_name(target))
    return decoder.decode(result, column)
