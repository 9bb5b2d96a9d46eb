"""Prepared statement handle.

A PreparedStatement holds a `?`-placeholder SQL template, the same template
rewritten for the driver's paramstyle, and the values bound so far. Binding
uses 1-based placeholder indices.
"""

from __future__ import annotations

from typing import Any

from row_conn.core.exceptions import ParameterBindingError
from row_conn.core.params import count_placeholders, normalize_placeholders

_UNBOUND = object()


class PreparedStatement:
    """Parameterized SQL template with positional bindings."""

    def __init__(self, sql: str, paramstyle: str = "qmark", *, escape_percent: bool = False) -> None:
        self._sql = sql
        self._slots: list[Any] = [_UNBOUND] * count_placeholders(sql)
        # Without placeholders the driver receives no parameters and does not parse `%`.
        self._driver_sql = normalize_placeholders(
            sql, paramstyle, escape_percent=escape_percent and bool(self._slots)
        )

    @property
    def sql(self) -> str:
        """The template as written by the caller."""
        return self._sql

    @property
    def driver_sql(self) -> str:
        """The template with placeholders in the driver's paramstyle."""
        return self._driver_sql

    @property
    def parameter_count(self) -> int:
        return len(self._slots)

    def set_value(self, index: int, value: Any) -> None:
        """Bind any driver-supported value to placeholder `index`."""
        if not 1 <= index <= len(self._slots):
            raise ParameterBindingError(
                f"index {index} out of range (statement has {len(self._slots)} placeholders)"
            )
        self._slots[index - 1] = value

    def set_int(self, index: int, value: int) -> None:
        self.set_value(index, int(value))

    def set_uint(self, index: int, value: int) -> None:
        if value < 0:
            raise ParameterBindingError(f"negative value {value} for unsigned placeholder {index}")
        self.set_value(index, int(value))

    def set_double(self, index: int, value: float) -> None:
        self.set_value(index, float(value))

    def set_string(self, index: int, value: str) -> None:
        self.set_value(index, str(value))

    def set_null(self, index: int) -> None:
        self.set_value(index, None)

    def clear_parameters(self) -> None:
        self._slots = [_UNBOUND] * len(self._slots)

    def parameters(self) -> tuple[Any, ...] | None:
        """Return the bound values in placeholder order.

        Returns None for a template without placeholders.
        Raises ParameterBindingError if any placeholder is unbound.
        """
        if not self._slots:
            return None
        missing = [str(i) for i, value in enumerate(self._slots, start=1) if value is _UNBOUND]
        if missing:
            raise ParameterBindingError(f"unbound placeholders: {', '.join(missing)}")
        return tuple(self._slots)

    def __repr__(self) -> str:
        return f"PreparedStatement({self._sql!r})"
