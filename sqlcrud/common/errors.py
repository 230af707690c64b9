"""
Error Definitions

Defines the exception classes raised by the data access layer.
Query failures are deliberately flat: constraint violations, syntax errors,
lost connections and timeouts all surface as QueryExecutionError.
"""

from typing import Any, Optional


class DataAccessError(Exception):
    """
    Data Access Base Exception

    Base class for all custom exceptions, containing error message, type, and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "data_access_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary format (for structured logging or API responses)

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "code": self.code,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class DatabaseConnectionError(DataAccessError):
    """
    Connection Establishment Error

    Raised when the initial connection cannot be opened.
    No usable instance exists after this error.
    """

    def __init__(
        self,
        message: str = "Database connection failed",
        code: str = "connection_failed",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="connection_error",
            code=code,
            details=details,
        )


class QueryExecutionError(DataAccessError):
    """
    Query Execution Error

    Raised when the driver fails to prepare or execute a statement.
    The original driver exception is chained as __cause__.
    """

    def __init__(
        self,
        message: str = "Query execution failed",
        code: str = "query_failed",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="query_error",
            code=code,
            details=details,
        )


class ConnectionClosedError(DataAccessError):
    """Raised when an operation is attempted after close()."""

    def __init__(
        self,
        message: str = "Connection closed",
        code: str = "connection_closed",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="connection_error",
            code=code,
            details=details,
        )


class TransactionError(DataAccessError):
    """
    Transaction State Error

    Raised on begin while a transaction is active, or commit/rollback with none active.
    """

    def __init__(
        self,
        message: str = "Invalid transaction state",
        code: str = "transaction_state",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="transaction_error",
            code=code,
            details=details,
        )
