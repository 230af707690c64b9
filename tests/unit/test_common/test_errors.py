"""
Error class tests
"""

from sqlcrud.common.errors import (
    ConnectionClosedError,
    DataAccessError,
    DatabaseConnectionError,
    QueryExecutionError,
    TransactionError,
)


class TestErrorHierarchy:
    """All errors share one base"""

    def test_subclasses(self):
        for cls in (
            DatabaseConnectionError,
            QueryExecutionError,
            ConnectionClosedError,
            TransactionError,
        ):
            assert issubclass(cls, DataAccessError)

    def test_default_messages(self):
        assert str(QueryExecutionError()) == "Query execution failed"
        assert str(DatabaseConnectionError()) == "Database connection failed"
        assert str(ConnectionClosedError()) == "Connection closed"


class TestToDict:
    """Structured error output"""

    def test_without_details(self):
        err = QueryExecutionError("Query execution failed: boom")
        assert err.to_dict() == {
            "error": {
                "message": "Query execution failed: boom",
                "type": "query_error",
                "code": "query_failed",
            }
        }

    def test_with_details(self):
        err = ConnectionClosedError(details={"dsn": "sqlite://"})
        data = err.to_dict()
        assert data["error"]["code"] == "connection_closed"
        assert data["error"]["details"] == {"dsn": "sqlite://"}
