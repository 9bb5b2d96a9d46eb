"""Fixed-width numeric types for column extraction.

Python's int and float are unbounded/double precision. These subclasses name
a narrower target so the decoder can range-check or round the column value.
"""

from __future__ import annotations


class Float32(float):
    """IEEE 754 single precision float."""


class Float64(float):
    """IEEE 754 double precision float."""


class Int8(int):
    pass


class Int16(int):
    pass


class Int32(int):
    pass


class Int64(int):
    pass


class UInt8(int):
    pass


class UInt16(int):
    pass


class UInt32(int):
    pass


class UInt64(int):
    pass
