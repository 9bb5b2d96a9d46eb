"""Driver adapter protocol.

Every adapter module MUST implement this protocol so a Connection can open,
probe and close driver connections and translate driver exceptions without
knowing which DB-API module sits underneath.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_conn.core.connection import ConnectionConfig


@runtime_checkable
class DriverAdapter(Protocol):
    """Synchronous DB-API driver adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """Placeholder style: 'qmark' (?) or 'format' (%s)."""
        ...

    @property
    def escape_percent(self) -> bool:
        """Whether literal `%` must be doubled in parameterized SQL."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open a DB-API connection in autocommit mode."""
        ...

    def is_valid(self, connection: Any) -> bool:
        """Return True if the connection can still execute statements."""
        ...

    def close(self, connection: Any) -> None:
        """Close a DB-API connection."""
        ...

    def error_types(self) -> tuple[type[BaseException], ...]:
        """Exception classes the driver raises for execution failures."""
        ...

    def error_details(self, error: BaseException) -> tuple[int | str | None, str | None]:
        """Return (error code, SQL state) for a driver exception."""
        ...
