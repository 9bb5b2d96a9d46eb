"""Connection configuration and the single-connection query surface.

ConnectionConfig is a frozen Pydantic model holding the credentials.
Connection owns one driver connection, its statement cursor, the current
prepared statement and the current result set, and exposes boolean-returning
execution methods plus typed extraction into Out slots.

Every execution method checks liveness first and reconnects in place when the
driver connection is gone. Driver errors never escape: they are logged with
the SQL text, error code and SQL state, stored on `last_error`, and the
method returns False (or 0 for counts).
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from row_conn.core.enums import DatabaseBackend
from row_conn.core.exceptions import (
    AdapterError,
    CardinalityError,
    ColumnBindError,
    ExecutionError,
    ExtractionError,
    ParameterBindingError,
    RowConnError,
)
from row_conn.core.result import ResultSet
from row_conn.core.statement import PreparedStatement
from row_conn.mapping.binder import Out, bind_columns
from row_conn.mapping.decoders import decoder_for, extract, type_name

if TYPE_CHECKING:
    from row_conn.adapters.protocol import DriverAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConnectionConfig(BaseModel):
    """Credentials and target of a database connection."""

    model_config = ConfigDict(frozen=True)

    driver: str = "mysql"
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = Field(default=None, repr=False)
    database: str
    pool_size: int = 5
    extra: dict[str, Any] = {}

    @field_validator("driver")
    @classmethod
    def known_driver(cls, value: str) -> str:
        try:
            return DatabaseBackend(value.lower()).value
        except ValueError:
            raise ValueError(f"Unsupported database driver: {value}") from None


# Raised by DB-API drivers outside their Error hierarchy while binding
# parameters or encoding SQL text (e.g. an int too large for the column
# type, a lone surrogate in a str).
_BINDING_ERRORS: tuple[type[BaseException], ...] = (OverflowError, ValueError, TypeError)

# Adapter module mapping: driver name → (module_path, class_name)
_ADAPTER_MAP: dict[str, tuple[str, str]] = {
    "sqlite": ("row_conn.adapters.sqlite", "SqliteAdapter"),
    "mysql": ("row_conn.adapters.mysql", "MysqlAdapter"),
    "postgresql": ("row_conn.adapters.postgresql", "PostgresqlAdapter"),
}


def _load_adapter(driver: str) -> DriverAdapter:
    """Load a driver adapter by name and make sure its driver is importable."""
    driver_lower = driver.lower()
    if driver_lower not in _ADAPTER_MAP:
        raise AdapterError(f"Unsupported database driver: {driver}")

    module_path, cls_name = _ADAPTER_MAP[driver_lower]

    try:
        module = importlib.import_module(module_path)
        adapter = getattr(module, cls_name)()
        adapter.error_types()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e
    return adapter  # type: ignore[no-any-return]


class Connection:
    """One live database session plus its statement and result state.

    Not thread-safe. The owner hands a Connection to one caller at a time,
    who runs a query, consumes the result set and gives it back.

    Args:
        manager: Owning pool or manager. Stored only; never called.
        conn_uuid: Identifier the owner uses to track this instance.
        host, user, password, database: Credentials, fixed for the lifetime.
        driver: Backend name, one of DatabaseBackend.
        port: Server port, driver default when None.
        extra: Additional keyword arguments for the driver's connect().
    """

    def __init__(
        self,
        manager: Any,
        conn_uuid: int,
        host: str | None,
        user: str | None,
        password: str | None,
        database: str,
        *,
        driver: str = "mysql",
        port: int | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self._manager = manager
        self._conn_uuid = conn_uuid
        self._config = ConnectionConfig(
            driver=driver,
            host=host,
            port=port,
            user=user,
            password=password,
            database=database,
            extra=extra or {},
        )
        self._adapter = _load_adapter(self._config.driver)
        self._errors = self._adapter.error_types()
        self._exec_errors = self._errors + _BINDING_ERRORS

        self._conn: Any = None
        self._stmt: Any = None
        self._prep_stmt: PreparedStatement | None = None
        self._result: ResultSet | None = None
        self.last_error: RowConnError | None = None

        try:
            self._reconnect()
        except self._errors as e:
            # Retried by the next execution call
            logger.warning("Connection %s: initial connect to %s failed: %s", conn_uuid, self._target, e)

    @classmethod
    def from_config(cls, manager: Any, conn_uuid: int, config: ConnectionConfig) -> Connection:
        """Create a Connection from a ConnectionConfig."""
        return cls(
            manager,
            conn_uuid,
            config.host,
            config.user,
            config.password,
            config.database,
            driver=config.driver,
            port=config.port,
            extra=dict(config.extra),
        )

    # --- Identity and owned handles ---

    def get_uuid(self) -> int:
        return self._conn_uuid

    def set_uuid(self, conn_uuid: int) -> None:
        self._conn_uuid = conn_uuid

    @property
    def manager(self) -> Any:
        return self._manager

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def driver_connection(self) -> Any:
        """The underlying DB-API connection, None when not connected."""
        return self._conn

    def get_result_set(self) -> ResultSet | None:
        """Return the current result set without affecting its lifetime."""
        return self._result

    def is_valid(self) -> bool:
        return self._conn is not None and self._adapter.is_valid(self._conn)

    @property
    def _target(self) -> str:
        host = self._config.host or "localhost"
        return f"{self._config.driver}://{host}/{self._config.database}"

    # --- Liveness ---

    def _ensure_connected(self) -> None:
        if self._conn is not None and self._adapter.is_valid(self._conn):
            return
        if self._conn is not None:
            logger.warning("Connection %s: link to %s lost, reconnecting", self._conn_uuid, self._target)
        self._reconnect()

    def _reconnect(self) -> None:
        self._release_handles()
        conn = self._adapter.connect(self._config)
        try:
            stmt = conn.cursor()
        except BaseException:
            self._adapter.close(conn)
            raise
        # Both handles are set together or not at all
        self._conn, self._stmt = conn, stmt
        logger.debug("Connection %s: connected to %s", self._conn_uuid, self._target)

    def _release_handles(self) -> None:
        stmt, conn = self._stmt, self._conn
        self._stmt = None
        self._conn = None
        if stmt is not None:
            try:
                stmt.close()
            except self._errors as e:
                logger.debug("Connection %s: error closing statement: %s", self._conn_uuid, e)
        if conn is not None:
            try:
                self._adapter.close(conn)
            except self._errors as e:
                logger.debug("Connection %s: error closing driver connection: %s", self._conn_uuid, e)

    def _discard_result(self) -> None:
        result, self._result = self._result, None
        if result is not None:
            result.close()

    def close(self) -> None:
        """Release the result set, prepared statement and driver connection."""
        self._discard_result()
        self._prep_stmt = None
        self._release_handles()
        logger.debug("Connection %s: closed", self._conn_uuid)

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        self.close()

    # --- Failure reporting ---

    def _driver_failure(self, sql: str, error: BaseException) -> bool:
        code, state = self._adapter.error_details(error)
        failure = ExecutionError(sql, str(error), code, state)
        failure.__cause__ = error
        self.last_error = failure
        logger.error(
            "Connection %s: STMT: %s # ERR: %s (error code: %s, SQLState: %s)",
            self._conn_uuid,
            sql,
            error,
            code,
            state,
        )
        return False

    def _extraction_failure(self, target_name: str, error: ExtractionError) -> bool:
        self.last_error = error
        logger.error("Connection %s: cannot extract %s: %s", self._conn_uuid, target_name, error)
        return False

    def _cardinality_failure(self, sql: str, row_count: int) -> bool:
        self.last_error = CardinalityError(sql, row_count)
        logger.error("Connection %s: Error rows count: %d for STMT: %s", self._conn_uuid, row_count, sql)
        return False

    # --- Execution primitives ---

    def _run(self, sql: str, params: tuple[Any, ...] | None = None) -> Any:
        self._ensure_connected()
        if params is None:
            self._stmt.execute(sql)
        else:
            self._stmt.execute(sql, params)
        return self._stmt

    def _command(self, sql: str, params: tuple[Any, ...] | None = None) -> None:
        cursor = self._run(sql, params)
        if cursor.description is not None:
            # drain rows so the driver accepts the next statement
            cursor.fetchall()

    def _query(self, sql: str, params: tuple[Any, ...] | None = None) -> ResultSet:
        # The old cursor is gone before the new statement runs, even if it fails
        self._discard_result()
        cursor = self._run(sql, params)
        self._result = ResultSet.from_cursor(cursor)
        return self._result

    def _query_single_row(self, sql: str) -> ResultSet | None:
        """Run a query that must return exactly one row; position on it."""
        try:
            result = self._query(sql)
        except self._exec_errors as e:
            self._driver_failure(sql, e)
            return None
        row_count = result.rows_count()
        if row_count != 1:
            self._cardinality_failure(sql, row_count)
            return None
        result.next()
        return result

    # --- Plain SQL ---

    def execute_command(self, sql: str) -> bool:
        """Run a statement that produces no result set."""
        self.last_error = None
        try:
            self._command(sql)
        except self._exec_errors as e:
            return self._driver_failure(sql, e)
        return True

    def execute_query(self, sql: str) -> bool:
        """Run a query and install its result set. True iff any row came back."""
        self.last_error = None
        try:
            result = self._query(sql)
        except self._exec_errors as e:
            return self._driver_failure(sql, e)
        return result.rows_count() > 0

    def execute_query_count(self, sql: str) -> int:
        """Run a query and return its row count, 0 on failure."""
        self.last_error = None
        try:
            result = self._query(sql)
        except self._exec_errors as e:
            self._driver_failure(sql, e)
            return 0
        return result.rows_count()

    def execute_check_exist(self, sql: str) -> bool:
        return self.execute_query_count(sql) > 0

    # --- Prepared statements ---

    def create_prep_stmt(self, sql: str) -> PreparedStatement:
        """Replace the current prepared statement with one built from `sql`."""
        self._prep_stmt = PreparedStatement(
            sql,
            self._adapter.paramstyle,
            escape_percent=self._adapter.escape_percent,
        )
        return self._prep_stmt

    def get_prep_stmt(self) -> PreparedStatement | None:
        return self._prep_stmt

    def _prep_stmt_parameters(self) -> tuple[PreparedStatement, tuple[Any, ...] | None] | None:
        stmt = self._prep_stmt
        if stmt is None:
            self.last_error = ExecutionError("", "No prepared statement created")
            logger.error("Connection %s: no prepared statement created", self._conn_uuid)
            return None
        try:
            return stmt, stmt.parameters()
        except ParameterBindingError as e:
            self.last_error = e
            logger.error("Connection %s: STMT: %s # ERR: %s", self._conn_uuid, stmt.sql, e)
            return None

    def execute_prep_stmt_command(self) -> bool:
        """Execute the current prepared statement as a command."""
        self.last_error = None
        prepared = self._prep_stmt_parameters()
        if prepared is None:
            return False
        stmt, params = prepared
        try:
            self._command(stmt.driver_sql, params)
        except self._exec_errors as e:
            return self._driver_failure(stmt.sql, e)
        return True

    def execute_prep_stmt_query(self) -> bool:
        """Execute the current prepared statement as a query. True iff any row came back."""
        self.last_error = None
        prepared = self._prep_stmt_parameters()
        if prepared is None:
            return False
        stmt, params = prepared
        try:
            result = self._query(stmt.driver_sql, params)
        except self._exec_errors as e:
            return self._driver_failure(stmt.sql, e)
        return result.rows_count() > 0

    # --- Typed extraction ---

    def execute_query_column(self, sql: str, values: list[T], kind: type[T]) -> bool:
        """Collect column 1 of every row as `kind` into `values`.

        `values` is cleared only when the query returns rows. Rows whose value
        cannot be converted are skipped. Returns True iff at least one value
        was collected.
        """
        decoder = decoder_for(kind)
        self.last_error = None
        try:
            result = self._query(sql)
        except self._exec_errors as e:
            return self._driver_failure(sql, e)
        if result.rows_count() == 0:
            return False

        values.clear()
        collected = False
        while result.next():
            try:
                values.append(extract(result, 1, kind, decoder))
            except ExtractionError as e:
                self._extraction_failure(type_name(kind), e)
                if decoder is None:
                    # every row would fail the same way
                    return False
                continue
            collected = True
        return collected

    def execute_query_value(self, sql: str, out: Out[Any]) -> bool:
        """Fill `out` from column 1 of a query that returns exactly one row."""
        self.last_error = None
        result = self._query_single_row(sql)
        if result is None:
            return False
        try:
            out.read(result, 1)
        except ExtractionError as e:
            return self._extraction_failure(out.type_name, e)
        return True

    def execute_query_values(self, sql: str, *outs: Out[Any]) -> bool:
        """Fill `outs` from columns 1..n of a query that returns exactly one row.

        Columns are read left to right; the first failed extraction stops the
        walk and the remaining slots are left untouched.
        """
        if not outs:
            raise ValueError("execute_query_values needs at least one output slot")
        self.last_error = None
        result = self._query_single_row(sql)
        if result is None:
            return False
        try:
            bind_columns(result, outs)
        except ColumnBindError as e:
            return self._extraction_failure(e.type_name, e)
        return True

    def __repr__(self) -> str:
        return f"Connection(uuid={self._conn_uuid}, target={self._target!r})"
