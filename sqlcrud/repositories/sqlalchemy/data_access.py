"""
Data Access SQLAlchemy Implementation

Wraps a single database connection with generic CRUD helpers, soft delete,
pagination and transaction control, executed through SQLAlchemy Core text()
statements with named parameters.

Table names and conditions are caller-trusted SQL and are interpolated
verbatim. Only use this class with identifiers and conditions that never come
from end users.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional, Union

from sqlalchemy import text
from sqlalchemy.engine import URL, Connection, CursorResult, Engine, make_url
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from sqlcrud.common import sql
from sqlcrud.common.errors import (
    ConnectionClosedError,
    DatabaseConnectionError,
    QueryExecutionError,
    TransactionError,
)
from sqlcrud.config import Settings, get_settings
from sqlcrud.db.session import (
    build_database_url,
    build_dsn,
    create_db_engine,
    settings_to_url,
)
from sqlcrud.repositories.base import (
    CrudRepository,
    PaginatedRepository,
    QueryExecutor,
    ResultSet,
    SoftDeleteRepository,
    TransactionalRepository,
)

logger = logging.getLogger(__name__)


def _driver_message(exc: SQLAlchemyError) -> str:
    """Prefer the DBAPI driver's own message over SQLAlchemy's decorated one"""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class DataAccess(
    QueryExecutor,
    TransactionalRepository,
    CrudRepository,
    SoftDeleteRepository,
    PaginatedRepository,
):
    """
    Data Access SQLAlchemy Implementation

    Owns one live connection for its whole lifetime. Not thread-safe: use one
    instance per worker.

    Outside an explicit transaction each write is committed as soon as it
    executes. Inside begin_transaction()/commit() nothing is committed until
    commit().

    Example:
        db = DataAccess("localhost", "app", "secret", "shop")
        db.create("users", {"name": "Ada", "email": "ada@example.com"})
        rows = db.read("users", "id = 1")
        db.close()
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        database: str,
        port: Optional[int] = None,
        echo: bool = False,
    ):
        """
        Connect to a MySQL server

        Args:
            host: Server host name
            username: Login user
            password: Login password
            database: Schema name
            port: Server port, None for the driver default
            echo: Log emitted SQL

        Raises:
            DatabaseConnectionError: The connection could not be opened
        """
        self.dsn = build_dsn(host, database)
        self._open(
            build_database_url(host, username, password, database, port=port),
            echo=echo,
        )

    @classmethod
    def from_url(cls, url: Union[str, URL], echo: bool = False) -> "DataAccess":
        """
        Connect using any SQLAlchemy URL (e.g. "sqlite://" for an in-memory database)

        Raises:
            DatabaseConnectionError: The connection could not be opened
        """
        url = make_url(url)
        instance = cls.__new__(cls)
        instance.dsn = url.render_as_string(hide_password=True)
        instance._open(url, echo=echo)
        return instance

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DataAccess":
        """Connect using DB_* / DATABASE_URL configuration"""
        settings = settings or get_settings()
        return cls.from_url(settings_to_url(settings), echo=settings.DEBUG)

    def _open(self, url: URL, echo: bool) -> None:
        self._engine: Optional[Engine] = None
        self._connection: Optional[Connection] = None
        self._transaction = None

        engine = None
        try:
            engine = create_db_engine(url, echo=echo)
            connection = engine.connect()
        except (SQLAlchemyError, ImportError) as exc:
            # ImportError: the dialect exists but its driver package is not installed
            if engine is not None:
                engine.dispose()
            message = f"Database connection failed: {_driver_message(exc)}"
            logger.error("%s (dsn=%s)", message, self.dsn)
            raise DatabaseConnectionError(message, details={"dsn": self.dsn}) from exc

        self._engine = engine
        self._connection = connection
        logger.info("Connected to %s", self.dsn)

    # ------------------------------------------------------------------
    # Connection state
    # ------------------------------------------------------------------

    @property
    def is_closed(self) -> bool:
        return self._connection is None

    @property
    def in_transaction(self) -> bool:
        """True between begin_transaction() and commit()/rollback()"""
        return self._transaction is not None

    def _require_connection(self) -> Connection:
        if self._connection is None:
            raise ConnectionClosedError(
                f"Connection closed: {self.dsn}", details={"dsn": self.dsn}
            )
        return self._connection

    def _commit_pending(self, connection: Connection) -> None:
        """
        Commit the transaction SQLAlchemy autobegan outside begin_transaction()

        Row-returning statements (SELECT, INSERT ... RETURNING, CALL) cannot be
        committed while their rows are unread on SQLite, so their commit is
        deferred to the next fetch, write, begin_transaction() or close().
        """
        if self._transaction is None and connection.in_transaction():
            try:
                connection.commit()
            except SQLAlchemyError as exc:
                raise QueryExecutionError(
                    f"Query execution failed: {_driver_message(exc)}"
                ) from exc

    def _fetch_all(self, result: CursorResult) -> ResultSet:
        rows = [dict(row) for row in result.mappings()]
        self._commit_pending(self._require_connection())
        return rows

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute_query(
        self, query: str, params: Optional[Mapping[str, Any]] = None
    ) -> CursorResult:
        """Prepare query, bind params by name, execute and return the result handle"""
        connection = self._require_connection()
        # an earlier row-returning write must not be lost if this statement fails
        self._commit_pending(connection)
        try:
            result = connection.execute(text(query), dict(params or {}))
            if self._transaction is None and not result.returns_rows:
                connection.commit()
        except SQLAlchemyError as exc:
            if self._transaction is None:
                self._rollback_implicit(connection)
            raise QueryExecutionError(
                f"Query execution failed: {_driver_message(exc)}",
                details={"query": query},
            ) from exc
        return result

    def _rollback_implicit(self, connection: Connection) -> None:
        # The statement error is what the caller sees; a failing rollback here is only logged
        try:
            connection.rollback()
        except SQLAlchemyError:
            logger.debug("Rollback after failed statement failed on %s", self.dsn, exc_info=True)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def begin_transaction(self) -> None:
        connection = self._require_connection()
        if self._transaction is not None:
            raise TransactionError("There is already an active transaction")
        self._commit_pending(connection)
        self._transaction = connection.begin()
        logger.debug("Transaction started on %s", self.dsn)

    def commit(self) -> None:
        """Commit the active transaction; on failure its changes are rolled back"""
        connection = self._require_connection()
        transaction = self._take_transaction()
        try:
            transaction.commit()
        except SQLAlchemyError as exc:
            logger.warning("Commit failed on %s, rolling back", self.dsn)
            self._discard_failed_commit(connection)
            raise QueryExecutionError(
                f"Query execution failed: {_driver_message(exc)}"
            ) from exc
        logger.debug("Transaction committed on %s", self.dsn)

    def rollback(self) -> None:
        self._require_connection()
        transaction = self._take_transaction()
        try:
            transaction.rollback()
        except SQLAlchemyError as exc:
            raise QueryExecutionError(
                f"Query execution failed: {_driver_message(exc)}"
            ) from exc
        logger.debug("Transaction rolled back on %s", self.dsn)

    def _discard_failed_commit(self, connection: Connection) -> None:
        # SQLAlchemy drops its transaction object even when COMMIT fails, but the
        # driver may still hold the transaction open (e.g. deferred foreign keys)
        try:
            if connection.in_transaction():
                connection.rollback()
            else:
                connection.connection.rollback()
        except Exception:
            logger.warning("Rollback after failed commit failed on %s", self.dsn, exc_info=True)

    def _take_transaction(self):
        if self._transaction is None:
            raise TransactionError("There is no active transaction")
        transaction, self._transaction = self._transaction, None
        return transaction

    @contextmanager
    def transaction(self) -> Iterator["DataAccess"]:
        """
        Run a block in one transaction

        Commits when the block finishes, rolls back and re-raises on any exception.
        A block that already ended the transaction itself is not rolled back again.

        Example:
            with db.transaction():
                db.create("orders", {...})
                db.update("stock", {"qty": 4}, "sku = 'A1'")
        """
        self.begin_transaction()
        try:
            yield self
        except Exception:
            if self.in_transaction:
                self.rollback()
            else:
                logger.debug("Transaction on %s already ended before the block raised", self.dsn)
            raise
        self.commit()

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(self, table: str, data: Mapping[str, Any]) -> CursorResult:
        query, params = sql.build_insert(table, data)
        return self.execute_query(query, params)

    def read(
        self, table: str, condition: str = "", fetch: bool = True
    ) -> Union[ResultSet, CursorResult]:
        query, params = sql.build_select(table, condition)
        result = self.execute_query(query, params)
        return self._fetch_all(result) if fetch else result

    def update(self, table: str, data: Mapping[str, Any], condition: str) -> CursorResult:
        query, params = sql.build_update(table, data, condition)
        return self.execute_query(query, params)

    def delete(self, table: str, condition: str) -> CursorResult:
        # params hold an unused "condition" entry; the WHERE clause is not parameterized
        query, params = sql.build_delete(table, condition)
        return self.execute_query(query, params)

    def soft_delete(self, table: str, condition: str) -> CursorResult:
        query, params = sql.build_soft_delete(table, condition)
        return self.execute_query(query, params)

    def read_with_soft_delete(
        self, table: str, condition: str = "", fetch: bool = True
    ) -> Union[ResultSet, CursorResult]:
        query, params = sql.build_select_not_deleted(table, condition)
        result = self.execute_query(query, params)
        return self._fetch_all(result) if fetch else result

    def read_with_pagination(
        self, table: str, condition: str = "", page: int = 1, per_page: int = 10
    ) -> ResultSet:
        query, params = sql.build_paginated_select(table, condition, page, per_page)
        return self._fetch_all(self.execute_query(query, params))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """
        Release the connection and dispose the engine

        Writes made outside begin_transaction() are committed first; an open
        begin_transaction() is rolled back. Calling close() again is a no-op;
        every other method raises ConnectionClosedError afterwards.
        """
        if self._connection is None:
            return
        connection, engine = self._connection, self._engine
        try:
            self._commit_pending(connection)
        finally:
            self._connection = None
            self._engine = None
            self._transaction = None
            try:
                connection.close()
            finally:
                engine.dispose()
            logger.info("Closed connection to %s", self.dsn)

    def __enter__(self) -> "DataAccess":
        self._require_connection()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self) -> str:
        state = "closed" if self.is_closed else "open"
        return f"<DataAccess {self.dsn} ({state})>"
