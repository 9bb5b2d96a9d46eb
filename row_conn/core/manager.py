"""Connection manager.

ConnectionManager owns a set of Connection instances built from one
ConnectionConfig. A Connection is handed to at most one holder at a time;
holders give it back with release() or by leaving get_connection().
"""

from __future__ import annotations

import itertools
import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from row_conn.core.connection import Connection, ConnectionConfig
from row_conn.core.exceptions import PoolError

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Hands out Connections one holder at a time and keeps up to pool_size idle."""

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config
        self._idle: list[Connection] = []
        self._in_use: dict[int, Connection] = {}
        self._uuids = itertools.count(1)
        self._lock = threading.Lock()
        self._closed = False

    @property
    def idle_count(self) -> int:
        return len(self._idle)

    @property
    def in_use_count(self) -> int:
        return len(self._in_use)

    def acquire(self) -> Connection:
        """Take an idle Connection, or create one if none is idle."""
        with self._lock:
            if self._closed:
                raise PoolError("Connection manager is closed")
            conn = self._idle.pop() if self._idle else None
            conn_uuid = next(self._uuids) if conn is None else conn.get_uuid()

        if conn is None:
            conn = Connection.from_config(self, conn_uuid, self.config)
            logger.debug("Created connection %s", conn_uuid)

        with self._lock:
            self._in_use[conn.get_uuid()] = conn
        return conn

    def release(self, conn: Connection) -> None:
        """Give a Connection back. Extra connections beyond pool_size are closed."""
        with self._lock:
            if self._in_use.get(conn.get_uuid()) is not conn:
                raise PoolError(f"Connection {conn.get_uuid()} is not checked out from this manager")
            del self._in_use[conn.get_uuid()]
            keep = not self._closed and len(self._idle) < self.config.pool_size
            if keep:
                self._idle.append(conn)

        if not keep:
            conn.close()
            logger.debug("Closed surplus connection %s", conn.get_uuid())

    @contextmanager
    def get_connection(self) -> Iterator[Connection]:
        """Get a connection as a context manager."""
        conn = self.acquire()
        try:
            yield conn
        finally:
            self.release(conn)

    def close(self) -> None:
        """Close idle connections; checked-out ones are closed on release."""
        with self._lock:
            self._closed = True
            idle, self._idle = self._idle, []
        for conn in idle:
            conn.close()
