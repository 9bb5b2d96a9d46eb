"""MySQL adapter using mysql-connector-python."""

from __future__ import annotations

from typing import Any

from row_conn.core.connection import ConnectionConfig


class MysqlAdapter:
    """Synchronous MySQL adapter using mysql-connector-python."""

    @property
    def paramstyle(self) -> str:
        return "format"

    @property
    def escape_percent(self) -> bool:
        return False

    def connect(self, config: ConnectionConfig) -> Any:
        """Open an autocommit MySQL connection."""
        import mysql.connector

        kwargs: dict[str, Any] = {
            "host": config.host,
            "port": config.port,
            "user": config.user,
            "password": config.password,
            "database": config.database,
        }
        kwargs = {key: value for key, value in kwargs.items() if value is not None}
        # Config fields win over extra; autocommit is always on
        return mysql.connector.connect(**{**config.extra, **kwargs, "autocommit": True})

    def is_valid(self, connection: Any) -> bool:
        # is_connected() pings the server and swallows driver errors itself
        return bool(connection.is_connected())

    def close(self, connection: Any) -> None:
        connection.close()

    def error_types(self) -> tuple[type[BaseException], ...]:
        import mysql.connector

        return (mysql.connector.Error,)

    def error_details(self, error: BaseException) -> tuple[Any, str | None]:
        return getattr(error, "errno", None), getattr(error, "sqlstate", None)
