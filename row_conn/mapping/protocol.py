"""Column decoder protocol.

A decoder reads one column of the current row from a ResultSet and converts
it to its target type. Decoders are looked up by the declared target type,
never by inspecting the value being read.
"""

from __future__ import annotations

from typing import Protocol, TypeVar

from row_conn.core.result import ResultSet

T_co = TypeVar("T_co", covariant=True)


class ColumnDecodable(Protocol[T_co]):
    """Base decoder protocol."""

    @property
    def target(self) -> type:
        """The type this decoder produces."""
        ...

    def decode(self, result: ResultSet, column: int) -> T_co:
        """Read `column` (1-based) of the current row as the target type."""
        ...
