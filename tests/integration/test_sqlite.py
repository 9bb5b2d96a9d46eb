"""Integration test for SQLite full workflow.

Covers: manager checkout, schema setup, prepared inserts, typed extraction
and reconnection end-to-end against a real SQLite database file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from row_conn import (
    ConnectionConfig,
    ConnectionManager,
    Float32,
    Int16,
    Out,
    UInt32,
)

# --- Fixtures ---


@pytest.fixture
def manager(tmp_path: Path) -> Iterator[ConnectionManager]:
    """Manager over a file database with an `orders` table."""
    config = ConnectionConfig(driver="sqlite", database=str(tmp_path / "shop.db"), pool_size=2)
    mgr = ConnectionManager(config)
    with mgr.get_connection() as conn:
        conn.execute_command(
            "CREATE TABLE orders (id INTEGER PRIMARY KEY, customer TEXT NOT NULL, "
            "quantity INTEGER NOT NULL, amount REAL NOT NULL, note TEXT)"
        )
        stmt = conn.create_prep_stmt(
            "INSERT INTO orders (id, customer, quantity, amount, note) VALUES (?, ?, ?, ?, ?)"
        )
        for row in [
            (1, "alice", 3, 29.99, "gift?"),
            (2, "bob", 1, 5.5, None),
            (3, "alice", 10, 120.0, "bulk"),
        ]:
            stmt.clear_parameters()
            stmt.set_int(1, row[0])
            stmt.set_string(2, row[1])
            stmt.set_int(3, row[2])
            stmt.set_double(4, row[3])
            if row[4] is None:
                stmt.set_null(5)
            else:
                stmt.set_string(5, row[4])
            assert conn.execute_prep_stmt_command()
    yield mgr
    mgr.close()


# --- Integration Tests ---


@pytest.mark.integration
class TestSqliteWorkflow:
    def test_cardinality_checks(self, manager: ConnectionManager) -> None:
        with manager.get_connection() as conn:
            assert conn.execute_query_count("SELECT * FROM orders") == 3
            assert conn.execute_check_exist("SELECT 1 FROM orders WHERE customer = 'bob'")
            assert not conn.execute_check_exist("SELECT 1 FROM orders WHERE customer = 'eve'")

    def test_typed_single_row(self, manager: ConnectionManager) -> None:
        customer, quantity, amount, note = Out(str), Out(UInt32), Out(Float32), Out(str)
        with manager.get_connection() as conn:
            assert conn.execute_query_values(
                "SELECT customer, quantity, amount, note FROM orders WHERE id = 2",
                customer,
                quantity,
                amount,
                note,
            )
        assert customer.value == "bob"
        assert quantity.value == 1
        assert amount.value == 5.5
        assert note.value == ""

    def test_aggregate_value(self, manager: ConnectionManager) -> None:
        total = Out(float)
        with manager.get_connection() as conn:
            assert conn.execute_query_value(
                "SELECT SUM(amount) FROM orders WHERE customer = 'alice'", total
            )
        assert total.value == pytest.approx(149.99)

    def test_column_extraction(self, manager: ConnectionManager) -> None:
        quantities: list[Int16] = []
        with manager.get_connection() as conn:
            assert conn.execute_query_column(
                "SELECT quantity FROM orders ORDER BY id", quantities, Int16
            )
        assert quantities == [3, 1, 10]

    def test_literal_question_mark_is_not_a_placeholder(self, manager: ConnectionManager) -> None:
        with manager.get_connection() as conn:
            stmt = conn.create_prep_stmt("SELECT id FROM orders WHERE note = 'gift?' AND quantity > ?")
            assert stmt.parameter_count == 1
            stmt.set_int(1, 0)
            assert conn.execute_prep_stmt_query()
            ids = [row[0] for row in conn.get_result_set() or []]
        assert ids == [1]

    def test_connection_recovers_between_checkouts(self, manager: ConnectionManager) -> None:
        with manager.get_connection() as conn:
            conn.driver_connection.close()
        with manager.get_connection() as again:
            assert again is conn
            assert again.execute_query("SELECT id FROM orders")
            assert again.get_result_set().rows_count() == 3  # type: ignore[union-attr]
