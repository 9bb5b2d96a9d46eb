"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import sqlite3
from typing import Any

from row_conn.core.connection import ConnectionConfig


class SqliteAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "qmark"

    @property
    def escape_percent(self) -> bool:
        return False

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        """Open the database file (or :memory:) in autocommit mode."""
        kwargs: dict[str, Any] = {"check_same_thread": False, **config.extra, "isolation_level": None}
        return sqlite3.connect(config.database, **kwargs)

    def is_valid(self, connection: sqlite3.Connection) -> bool:
        try:
            connection.execute("SELECT 1").close()
        except sqlite3.ProgrammingError:
            # closed connection
            return False
        return True

    def close(self, connection: sqlite3.Connection) -> None:
        connection.close()

    def error_types(self) -> tuple[type[BaseException], ...]:
        return (sqlite3.Error,)

    def error_details(self, error: BaseException) -> tuple[Any, str | None]:
        return getattr(error, "sqlite_errorcode", None), getattr(error, "sqlite_errorname", None)
