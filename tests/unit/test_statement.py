"""Unit tests for PreparedStatement."""

from __future__ import annotations

import pytest

from row_conn.core.exceptions import ParameterBindingError
from row_conn.core.statement import PreparedStatement


class TestPreparedStatement:
    def test_counts_placeholders(self) -> None:
        stmt = PreparedStatement("INSERT INTO t (a, b) VALUES (?, ?)")
        assert stmt.parameter_count == 2

    def test_parameters_in_placeholder_order(self) -> None:
        stmt = PreparedStatement("INSERT INTO t (a, b, c, d) VALUES (?, ?, ?, ?)")
        stmt.set_string(2, "two")
        stmt.set_int(1, 1)
        stmt.set_null(4)
        stmt.set_double(3, 3)
        assert stmt.parameters() == (1, "two", 3.0, None)

    def test_no_placeholders_gives_none(self) -> None:
        assert PreparedStatement("SELECT 1").parameters() is None

    def test_unbound_placeholder_raises(self) -> None:
        stmt = PreparedStatement("SELECT * FROM t WHERE a = ? AND b = ?")
        stmt.set_int(1, 1)
        with pytest.raises(ParameterBindingError, match="unbound placeholders: 2"):
            stmt.parameters()

    @pytest.mark.parametrize("index", [0, 2])
    def test_index_out_of_range(self, index: int) -> None:
        stmt = PreparedStatement("SELECT * FROM t WHERE a = ?")
        with pytest.raises(ParameterBindingError):
            stmt.set_int(index, 1)

    def test_set_uint_rejects_negative(self) -> None:
        stmt = PreparedStatement("SELECT ?")
        with pytest.raises(ParameterBindingError):
            stmt.set_uint(1, -1)

    def test_clear_parameters(self) -> None:
        stmt = PreparedStatement("SELECT ?")
        stmt.set_int(1, 5)
        stmt.clear_parameters()
        with pytest.raises(ParameterBindingError):
            stmt.parameters()

    def test_driver_sql_for_format_style(self) -> None:
        stmt = PreparedStatement("SELECT * FROM t WHERE a = ? AND b LIKE 'x%'", "format", escape_percent=True)
        assert stmt.sql == "SELECT * FROM t WHERE a = ? AND b LIKE 'x%'"
        assert stmt.driver_sql == "SELECT * FROM t WHERE a = %s AND b LIKE 'x%%'"

    def test_percent_not_escaped_without_placeholders(self) -> None:
        stmt = PreparedStatement("SELECT * FROM t WHERE b LIKE 'x%'", "format", escape_percent=True)
        assert stmt.driver_sql == "SELECT * FROM t WHERE b LIKE 'x%'"
