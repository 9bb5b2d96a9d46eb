"""PostgreSQL adapter using psycopg (v3+)."""

from __future__ import annotations

from typing import Any

from row_conn.core.connection import ConnectionConfig


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    parts.append(f"dbname={config.database}")
    return " ".join(parts)


class PostgresqlAdapter:
    """Synchronous PostgreSQL adapter using psycopg (v3+)."""

    @property
    def paramstyle(self) -> str:
        return "format"

    @property
    def escape_percent(self) -> bool:
        return True

    def connect(self, config: ConnectionConfig) -> Any:
        import psycopg

        return psycopg.connect(_build_conninfo(config), **{**config.extra, "autocommit": True})

    def is_valid(self, connection: Any) -> bool:
        return not (connection.closed or connection.broken)

    def close(self, connection: Any) -> None:
        connection.close()

    def error_types(self) -> tuple[type[BaseException], ...]:
        import psycopg

        return (psycopg.Error,)

    def error_details(self, error: BaseException) -> tuple[Any, str | None]:
        state = getattr(error, "sqlstate", None)
        # libpq reports no numeric code; the SQLSTATE doubles as the code
        return state, state
