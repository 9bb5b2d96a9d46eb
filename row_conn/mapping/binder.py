"""Output slots and the ordered column binder.

An Out[T] slot stands in for a typed output parameter. Its decoder is resolved
from T when the slot is built, so every read through the slot goes down the
same conversion path regardless of what the column holds.

    count, name = Out(int), Out(str)
    conn.execute_query_values("SELECT COUNT(*), MAX(name) FROM users", count, name)
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from row_conn.core.exceptions import ColumnBindError, ExtractionError
from row_conn.core.result import ResultSet
from row_conn.mapping.decoders import decoder_for, extract, type_name

T = TypeVar("T")


class Out(Generic[T]):
    """Typed output slot filled from one result column."""

    def __init__(self, target: type[T], value: T | None = None) -> None:
        self.target = target
        self.value = value
        self._decoder = decoder_for(target)

    @property
    def supported(self) -> bool:
        return self._decoder is not None

    @property
    def type_name(self) -> str:
        return type_name(self.target)

    def read(self, result: ResultSet, column: int) -> T:
        """Fill the slot from `column` of the current row and return the value."""
        self.value = extract(result, column, self.target, self._decoder)
        return self.value  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Out({self.type_name}, value={self.value!r})"


def bind_columns(result: ResultSet, outs: Sequence[Out[Any]], start: int = 1) -> None:
    """Fill `outs` from consecutive columns of the current row, left to right.

    The first slot reads column `start`, the next `start + 1`, and so on.
    Stops at the first failure with ColumnBindError; slots after the failing
    one keep their previous values.
    """
    for column, out in enumerate(outs, start=start):
        try:
            out.read(result, column)
        except ExtractionError as e:
            raise ColumnBindError(column, out.type_name, str(e)) from e
