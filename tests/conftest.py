"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from row_conn.core.connection import Connection, ConnectionConfig


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """File-backed SQLite database, so data survives a reconnect."""
    return tmp_path / "rowconn.db"


@pytest.fixture
def conn(db_path: Path) -> Iterator[Connection]:
    """Connection with a populated `users` table.

    users(id INTEGER, name TEXT, score REAL, balance TEXT)
    """
    connection = Connection(None, 1, None, None, None, str(db_path), driver="sqlite")
    connection.execute_command(
        "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, score REAL, balance TEXT)"
    )
    connection.execute_command(
        "INSERT INTO users (id, name, score, balance) VALUES "
        "(1, 'Alice', 91.5, '100'), "
        "(2, 'Bob', 78.25, 'n/a'), "
        "(3, 'Carol', 88.0, '-42')"
    )
    yield connection
    connection.close()
